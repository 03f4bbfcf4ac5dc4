"""Tests for line normalization."""

from __future__ import annotations

from docsmith.cleaning.normalizer import (
    LineNormalizer,
    NormalizationResult,
    html_to_text,
    normalize_lines,
)


class TestLineNormalizer:
    """Tests for plain text normalization."""

    def test_trims_and_keeps_positions(self) -> None:
        """Blank lines are dropped but original positions survive."""
        result = LineNormalizer().normalize("Title\n\n  body text  ")
        assert [line.text for line in result.lines] == ["Title", "body text"]
        assert [line.position for line in result.lines] == [0, 2]
        assert result.lines[1].raw == "  body text  "

    def test_counts(self) -> None:
        """Whitespace-only lines count as blank."""
        result = LineNormalizer().normalize("a\n\n   \nb")
        assert result.total_lines == 4
        assert result.dropped_blank == 2

    def test_empty_input(self) -> None:
        """Empty input yields no lines."""
        result = LineNormalizer().normalize("")
        assert result.lines == []
        assert result.total_lines == 0

    def test_windows_line_endings(self) -> None:
        """CRLF is treated as a single line break."""
        assert [line.text for line in normalize_lines("one\r\ntwo\r\n")] == ["one", "two"]

    def test_to_dict(self) -> None:
        """Test serialization."""
        d = NormalizationResult(lines=normalize_lines("x"), total_lines=1, dropped_blank=0).to_dict()
        assert d["lines"] == [{"text": "x", "position": 0}]


class TestHtmlToText:
    """Tests for HTML flattening."""

    MARKUP = (
        "<html><head><title>Ignored</title></head><body>"
        "<h1>Overview</h1><p>Intro text</p>"
        "<ul><li>One</li><li>Two<ul><li>Inner</li></ul></li></ul>"
        "<script>var x = 1;</script>"
        "<p>Line one<br>Line two</p>"
        "</body></html>"
    )

    def test_block_structure(self) -> None:
        """Blocks and list items land on their own lines."""
        texts = [line.text for line in normalize_lines(html_to_text(self.MARKUP))]
        assert texts == [
            "Overview",
            "Intro text",
            "• One",
            "• Two",
            "◦ Inner",
            "Line one",
            "Line two",
        ]

    def test_noise_dropped(self) -> None:
        """Script and head content never reaches the text."""
        text = html_to_text(self.MARKUP)
        assert "var x" not in text
        assert "Ignored" not in text

    def test_normalize_html(self) -> None:
        """normalize_html flattens before splitting."""
        result = LineNormalizer().normalize_html("<p>A</p><p>B</p>")
        assert [line.text for line in result.lines] == ["A", "B"]

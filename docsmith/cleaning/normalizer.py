"""Line normalizer for extracted document text.

Turns raw extracted text, or text reconstructed from HTML markup, into
the ordered sequence of trimmed, non-empty Lines the classifier works
on. Each surviving line keeps its original index so blank-line
adjacency can still be evaluated after blank lines are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

from docsmith.core.document import Line

# Prefixes given to list items when flattening markup
BULLET_PREFIX = "• "
SUB_BULLET_PREFIX = "◦ "

_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
    "section", "table", "td", "th", "tr", "ul",
]

_NOISE_TAGS = ["script", "style", "noscript", "head"]


@dataclass
class NormalizationResult:
    """Lines produced from one input, with counts for auditing.

    Attributes:
        lines: Trimmed, non-empty lines in original order.
        total_lines: Lines in the input before filtering.
        dropped_blank: Lines discarded because they were empty.
    """

    lines: list[Line]
    total_lines: int
    dropped_blank: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "total_lines": self.total_lines,
            "dropped_blank": self.dropped_blank,
        }


class LineNormalizer:
    """Splits text into positioned, trimmed, non-empty lines.

    Example::

        normalizer = LineNormalizer()
        result = normalizer.normalize("Title\\n\\n  body text  ")
        [line.text for line in result.lines]  # ["Title", "body text"]
        [line.position for line in result.lines]  # [0, 2]
    """

    def normalize(self, text: str) -> NormalizationResult:
        """Normalize plain text.

        Args:
            text: Raw multi-line text. May be empty.

        Returns:
            NormalizationResult whose lines keep their original indices.
        """
        raw_lines = text.splitlines()
        lines: list[Line] = []
        for position, raw in enumerate(raw_lines):
            trimmed = raw.strip()
            if trimmed:
                lines.append(Line(text=trimmed, position=position, raw=raw))

        return NormalizationResult(
            lines=lines,
            total_lines=len(raw_lines),
            dropped_blank=len(raw_lines) - len(lines),
        )

    def normalize_html(self, markup: str) -> NormalizationResult:
        """Normalize HTML by first flattening it to text.

        Args:
            markup: HTML document or fragment.

        Returns:
            NormalizationResult for the flattened text.
        """
        return self.normalize(html_to_text(markup))


def normalize_lines(text: str) -> list[Line]:
    """Shortcut for ``LineNormalizer().normalize(text).lines``."""
    return LineNormalizer().normalize(text).lines


def html_to_text(markup: str) -> str:
    """Flatten HTML into lightly tagged text.

    Block elements become line breaks, ``<br>`` becomes a line break,
    list items are prefixed with a bullet glyph (a secondary glyph when
    nested inside another list), and script/style content is dropped.

    Args:
        markup: HTML document or fragment.

    Returns:
        Text with one block per line.
    """
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")

    for item in soup.find_all("li"):
        depth = len(item.find_parents(["ul", "ol"]))
        item.insert(0, SUB_BULLET_PREFIX if depth > 1 else BULLET_PREFIX)

    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")

    return soup.get_text()

"""Tests for the segmentation scan and the classification facade."""

from __future__ import annotations

from conftest import lines_of

from docsmith.core.document import (
    Bullet,
    CodeBlock,
    Heading,
    ItemKind,
    NumberedItem,
    Paragraph,
    SubBullet,
)
from docsmith.segmentation import ScanState, Segmenter, classify_lines, classify_text


def classify(*texts: str):
    return classify_lines(lines_of(*texts))


class TestReferenceExamples:
    """Worked examples of the classification rules."""

    def test_numeric_headings(self) -> None:
        """Numeric prefixes override numbered-list detection."""
        items = classify("1. Setup", "Install the tool", "2. Configure", "Edit the config file")
        assert items == [
            Heading(level=1, text="Setup"),
            Paragraph(text="Install the tool"),
            Heading(level=1, text="Configure"),
            Paragraph(text="Edit the config file"),
        ]

    def test_list_intro_bullets(self) -> None:
        """Short status lines after an intro become bullets."""
        items = classify(
            "The following issues were found:",
            "Missing field",
            "Invalid reference",
            "Duplicate record",
        )
        assert items == [
            Paragraph(text="The following issues were found:"),
            Bullet(text="Missing field"),
            Bullet(text="Invalid reference"),
            Bullet(text="Duplicate record"),
        ]

    def test_query_block(self) -> None:
        """Query lines group into one verbatim block."""
        items = classify(
            "SELECT Id FROM Account",
            "WHERE Name = 'Acme'",
            "AND Status__c = 'Active'",
        )
        assert items == [
            CodeBlock(
                lines=(
                    "SELECT Id FROM Account",
                    "WHERE Name = 'Acme'",
                    "AND Status__c = 'Active'",
                )
            )
        ]

    def test_degenerate_numbering(self) -> None:
        """Numerals with no run start never become numbered items."""
        items = classify("5.", "6.", "7.")
        assert items == [Paragraph("5."), Paragraph("6."), Paragraph("7.")]


class TestCodeBlocks:
    """Tests for code block grouping."""

    def test_braces_and_indentation(self) -> None:
        """A method body including its closing brace is one block."""
        items = classify_text(
            "public void run() {\n    System.debug('x');\n}\nThat is the whole handler."
        ).items
        assert isinstance(items[0], CodeBlock)
        assert items[0].lines == ("public void run() {", "System.debug('x');", "}")
        assert items[1] == Paragraph("That is the whole handler.")

    def test_bridge_short_line(self) -> None:
        """A short non-code line between code lines stays in the block."""
        items = classify("SELECT Id FROM Account", "acct", "WHERE Name = 'Acme'")
        assert items == [CodeBlock(("SELECT Id FROM Account", "acct", "WHERE Name = 'Acme'"))]

    def test_stops_at_prose(self) -> None:
        """A prose sentence ends the block."""
        items = classify(
            "SELECT Id FROM Account",
            "WHERE Name = 'Acme'",
            "This query returns every matching account record for review.",
        )
        assert items[0] == CodeBlock(("SELECT Id FROM Account", "WHERE Name = 'Acme'"))
        assert items[1] == Paragraph(
            "This query returns every matching account record for review."
        )

    def test_single_line_released(self) -> None:
        """A lone line below the single-line threshold is not code."""
        items = classify("SELECT Id FROM Account")
        assert items == [Paragraph("SELECT Id FROM Account")]

    def test_single_line_kept(self) -> None:
        """A lone line scoring 80 or more is a one-line block."""
        items = classify("AND Status__c = 'Active'")
        assert items == [CodeBlock(("AND Status__c = 'Active'",))]


class TestHeadings:
    """Tests for heading inference."""

    def test_keyword_heading(self) -> None:
        """Structural keywords are headings."""
        items = classify("Summary", "The rollout finished on schedule.")
        assert items[0] == Heading(level=1, text="Summary")

    def test_inferred_heading(self) -> None:
        """A short title-case line above a long line is a heading."""
        items = classify(
            "Deployment Checklist",
            "Before you begin, confirm that the sandbox has been refreshed and that "
            "every integration user has been provisioned.",
        )
        assert items[0] == Heading(level=1, text="Deployment Checklist")
        assert isinstance(items[1], Paragraph)

    def test_sub_topic_level(self) -> None:
        """Sub-topic nouns give level 2."""
        items = classify(
            "Example 1 Lead Conversion",
            "The sales rep converts the lead after the discovery call is logged.",
        )
        assert items[0] == Heading(level=2, text="Example 1 Lead Conversion")

    def test_sub_caption_level(self) -> None:
        """A short header right after another header is level 3."""
        items = classify(
            "Implementation Plan",
            "Phase One Tasks",
            "During this phase the team migrates historical records into the new org "
            "and validates totals.",
        )
        assert items[0] == Heading(level=1, text="Implementation Plan")
        assert items[1] == Heading(level=3, text="Phase One Tasks")
        assert isinstance(items[2], Paragraph)


class TestNumberedLists:
    """Tests for numbered-run continuation."""

    def test_run(self) -> None:
        """Consecutive numerals form a run."""
        items = classify("1) Open the console", "2) Run the migration", "3) Verify the logs")
        assert items == [
            NumberedItem(text="Open the console", number=1),
            NumberedItem(text="Run the migration", number=2),
            NumberedItem(text="Verify the logs", number=3),
        ]

    def test_lowercase_is_numbered_not_heading(self) -> None:
        """'1. lowercase' misses the heading override."""
        items = classify("1. open the console", "2. run the migration")
        assert [type(i) for i in items] == [NumberedItem, NumberedItem]

    def test_broken_sequence(self) -> None:
        """A skipped numeral falls through to paragraph."""
        items = classify("1) Open the console", "3) Verify the logs")
        assert items[0] == NumberedItem(text="Open the console", number=1)
        assert items[1] == Paragraph("3) Verify the logs")

    def test_run_reset_by_paragraph(self) -> None:
        """Any other item ends the run."""
        items = classify(
            "1) Open the console",
            "Then wait for the page to load completely before moving on.",
            "2) Run the migration",
        )
        assert isinstance(items[1], Paragraph)
        assert items[2] == Paragraph("2) Run the migration")


class TestBullets:
    """Tests for bullets and sub-bullets."""

    def test_nested(self) -> None:
        """Sub-bullets directly after a bullet are kept."""
        items = classify("• First point", "◦ Nested detail", "• Second point")
        assert items == [
            Bullet("First point"),
            SubBullet("Nested detail"),
            Bullet("Second point"),
        ]

    def test_orphan_sub_bullet(self) -> None:
        """A sub-bullet glyph with no bullet before it is not a sub-bullet."""
        items = classify(
            "Plain sentence that sets context for the reader.",
            "◦ Orphan detail",
        )
        assert items[1] == Paragraph("Orphan detail")
        assert items[1].source[0].text == "◦ Orphan detail"

    def test_sibling_sub_bullets(self) -> None:
        """Later siblings lose their glyph even when they cannot nest."""
        items = classify(
            "• First point",
            "◦ Nested detail",
            "◦ Another detail",
            "• Second point",
        )
        assert items == [
            Bullet("First point"),
            SubBullet("Nested detail"),
            Paragraph("Another detail"),
            Bullet("Second point"),
        ]
        assert not any("◦" in item.text for item in items)

    def test_nested_html_list(self) -> None:
        """Nested HTML list items never carry the glyph into item text."""
        result = classify_text(
            "<ul><li>Alpha<ul><li>One</li><li>Two</li></ul></li></ul>",
            markup=True,
        )
        assert result.items[:2] == [Bullet("Alpha"), SubBullet("One")]
        assert [item.text for item in result.items] == ["Alpha", "One", "Two"]

    def test_result_label(self) -> None:
        """Result labels are bullets."""
        items = classify("Result: Lead converted to an opportunity")
        assert items == [Bullet("Result: Lead converted to an opportunity")]


class TestScanState:
    """Tests for stepping the scan with explicit state."""

    def test_seeded_run_counter(self) -> None:
        """A seeded counter continues a run."""
        lines = lines_of("3) Verify the logs")
        item, state = Segmenter().step(lines, ScanState(run_counter=2))
        assert item == NumberedItem(text="Verify the logs", number=3)
        assert state.cursor == 1
        assert state.run_counter == 3
        assert state.last_kind is ItemKind.NUMBERED

    def test_seeded_last_kind(self) -> None:
        """A seeded bullet allows a sub-bullet."""
        lines = lines_of("◦ Detail")
        item, _ = Segmenter().step(lines, ScanState(last_kind=ItemKind.BULLET))
        assert item == SubBullet("Detail")

    def test_intro_recorded(self) -> None:
        """List introductions are remembered by position."""
        lines = lines_of("The following issues were found:", "Missing field")
        _, state = Segmenter().step(lines, ScanState())
        assert state.last_intro_position == 0
        assert state.run_counter == 0

    def test_code_block_advances_past_block(self) -> None:
        """The cursor moves past every consumed line."""
        lines = lines_of(
            "SELECT Id FROM Account",
            "WHERE Name = 'Acme'",
            "AND Status__c = 'Active'",
            "Done.",
        )
        item, state = Segmenter().step(lines, ScanState(run_counter=4))
        assert isinstance(item, CodeBlock)
        assert state.cursor == 3
        assert state.run_counter == 0

    def test_to_dict(self) -> None:
        """Test serialization."""
        d = ScanState(cursor=2, last_kind=ItemKind.BULLET).to_dict()
        assert d == {
            "cursor": 2,
            "last_intro_position": None,
            "run_counter": 0,
            "last_kind": "bullet",
        }


class TestClassifyText:
    """Tests for the classification facade."""

    def test_runbook(self, runbook_text: str) -> None:
        """A mixed document yields every item type."""
        result = classify_text(runbook_text)
        assert result.stats.to_dict() == {
            "headings": 1,
            "bullets": 5,
            "numbered_items": 3,
            "code_blocks": 1,
            "paragraphs": 3,
            "total": 13,
        }
        assert [i.number for i in result.items if isinstance(i, NumberedItem)] == [1, 2, 3]
        assert SubBullet("Compare with finance export") in result.items

    def test_markup(self) -> None:
        """HTML input is flattened first."""
        result = classify_text("<h1>Overview</h1><ul><li>Alpha</li><li>Beta</li></ul>", markup=True)
        assert result.items == [Heading(1, "Overview"), Bullet("Alpha"), Bullet("Beta")]

    def test_empty(self) -> None:
        """Empty input classifies to nothing."""
        result = classify_text("")
        assert result.items == []
        assert result.stats.total == 0

    def test_to_dict(self) -> None:
        """The serialized result carries a summary line."""
        d = classify_text("Summary\nAll good.").to_dict()
        assert d["summary"].startswith("Formatted: 1 headings")
        assert d["items"][0] == {"type": "heading", "level": 1, "text": "Summary"}

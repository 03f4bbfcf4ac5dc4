"""
Pytest configuration and fixtures for docsmith tests.
"""

import io
from datetime import date

import pytest
from docx import Document

from docsmith.cleaning import normalize_lines
from docsmith.config import ClassifierConfig
from docsmith.core.document import Line
from docsmith.styles.layout import FrontMatter

RUNBOOK_TEXT = "\n".join(
    [
        "Release Runbook",
        "1. Overview",
        "This runbook describes how the billing integration is deployed to production.",
        "The following checks are required:",
        "Missing credentials",
        "Invalid endpoint",
        "1) Open the console",
        "2) Run the migration",
        "3) Verify the logs",
        "SELECT Id FROM Account",
        "WHERE Name = 'Acme'",
        "AND Status__c = 'Active'",
        "• Confirm totals",
        "◦ Compare with finance export",
        "Result: Totals match",
    ]
)

# Inputs the classifier must handle without any special casing
SAMPLE_CORPUS = {
    "numeric_headings": "1. Setup\nInstall the tool\n2. Configure\nEdit the config file",
    "list_intro": (
        "The following issues were found:\nMissing field\nInvalid reference\nDuplicate record"
    ),
    "query": "SELECT Id FROM Account\nWHERE Name = 'Acme'\nAND Status__c = 'Active'",
    "broken_numbering": "5.\n6.\n7.",
    "runbook": RUNBOOK_TEXT,
    "apex": "public void run() {\n    System.debug('x');\n}\nThat is the whole handler.",
    "nested_bullets": "• First point\n◦ Nested detail\n◦ Another detail\n• Second point",
    "orphan_sub_bullet": "◦ Orphan detail\n◦ Second orphan",
    "numbered_reset": (
        "1) Open the console\n"
        "Then wait for the page to load completely before moving on.\n"
        "2) Run the migration"
    ),
    "blank_gaps": "Summary\n\n\nThe rollout finished on schedule.\n\n   \nNext Steps\nSchedule the retro",
    "single_line": "Just one line of prose.",
    "markers_only": "-\n*\n•",
    "long_lines": ("x" * 300) + "\n" + ("Words " * 40),
    "sub_captions": (
        "Implementation Plan\n"
        "Phase One Tasks\n"
        "During this phase the team migrates historical records into the new org "
        "and validates totals."
    ),
}


def lines_of(*texts: str) -> list[Line]:
    """Build contiguous lines from texts."""
    return normalize_lines("\n".join(texts))


@pytest.fixture
def config() -> ClassifierConfig:
    """Default classifier configuration."""
    return ClassifierConfig()


@pytest.fixture
def runbook_text() -> str:
    """A short mixed document touching every item type."""
    return RUNBOOK_TEXT


@pytest.fixture
def front_matter() -> FrontMatter:
    """Title page inputs with a fixed date."""
    return FrontMatter(
        title="Release Runbook",
        organization="Acme Operations",
        version="2.1",
        author="Platform Team",
        as_of=date(2024, 3, 5),
    )


def build_docx_bytes() -> bytes:
    """Create a small Word document in memory."""
    doc = Document()
    doc.add_paragraph("Overview")
    doc.add_paragraph("The sandbox was refreshed on Monday.")
    doc.add_paragraph("First item", style="List Bullet")
    doc.add_paragraph("Nested item", style="List Bullet 2")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Cell A"
    table.rows[0].cells[1].text = "Cell B"
    doc.add_paragraph("Closing remarks follow the table.")

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_bytes() -> bytes:
    """Bytes of a small Word document."""
    return build_docx_bytes()


@pytest.fixture
def docx_file(tmp_path, docx_bytes):
    """A small Word document on disk."""
    path = tmp_path / "notes.docx"
    path.write_bytes(docx_bytes)
    return path

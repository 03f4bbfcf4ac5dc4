"""Tests for the end-to-end formatting pipeline."""

from __future__ import annotations

import io
import json

import pytest
from docx import Document

from docsmith.errors import ExtractionError, ValidationError
from docsmith.exporters import LayoutJSONExporter
from docsmith.loaders import MODE_RAW, MODE_STRUCTURED
from docsmith.pipeline import DocumentFormatter, FormatResult, output_filename
from docsmith.styles.layout import FrontMatter


class TestOutputFilename:
    """Tests for output file naming."""

    def test_sanitized(self) -> None:
        """Punctuation is dropped and whitespace becomes underscores."""
        assert output_filename("Ops Guide: v2") == "Ops_Guide_v2_Formatted.docx"
        assert output_filename("Q3 / Q4 Review") == "Q3_Q4_Review_Formatted.docx"

    def test_keeps_hyphens(self) -> None:
        """Hyphens and underscores survive."""
        assert output_filename("pre-release_notes") == "pre-release_notes_Formatted.docx"

    def test_empty_stem(self) -> None:
        """A title with no word characters falls back to a default stem."""
        assert output_filename("???") == "Document_Formatted.docx"


class TestDocumentFormatter:
    """Tests for DocumentFormatter."""

    def test_format_text(self, runbook_text: str, front_matter: FrontMatter) -> None:
        """Text formats into a Word document with stats."""
        result = DocumentFormatter().format_text(runbook_text, front_matter)

        assert isinstance(result, FormatResult)
        assert result.filename == "Release_Runbook_Formatted.docx"
        assert result.content[:2] == b"PK"
        assert result.stats.code_blocks == 1
        assert result.summary.startswith("Formatted: 1 headings, 5 bullet points")
        assert result.extraction_mode == MODE_STRUCTURED

        doc = Document(io.BytesIO(result.content))
        assert len(doc.tables) == 1

    def test_format_file(self, docx_file, front_matter: FrontMatter) -> None:
        """A Word file on disk is loaded and formatted."""
        result = DocumentFormatter().format_file(docx_file, front_matter)

        assert result.extraction_mode == MODE_STRUCTURED
        assert result.stats.headings == 1
        assert result.stats.bullets >= 2

        texts = [p.text for p in Document(io.BytesIO(result.content)).paragraphs]
        assert "Cell A" in texts

    def test_format_bytes_html(self, front_matter: FrontMatter) -> None:
        """HTML uploads are flattened before classification."""
        html = b"<h1>Overview</h1><ul><li>Alpha</li><li>Beta</li></ul>"
        result = DocumentFormatter().format_bytes(html, "page.html", front_matter)
        assert result.stats.headings == 1
        assert result.stats.bullets == 2

    def test_fallback_reported(self, front_matter: FrontMatter) -> None:
        """Loader fallbacks show up in the result."""
        result = DocumentFormatter().format_bytes(b"caf\xe9 menu", "menu.txt", front_matter)
        assert result.extraction_mode == MODE_RAW
        assert result.warnings

    def test_empty_title(self, front_matter: FrontMatter) -> None:
        """A blank title is rejected."""
        front_matter.title = "   "
        with pytest.raises(ValidationError):
            DocumentFormatter().format_text("Summary", front_matter)

    def test_unsupported_type(self, front_matter: FrontMatter) -> None:
        """Unsupported uploads are rejected before extraction."""
        with pytest.raises(ValidationError, match="Unsupported file type"):
            DocumentFormatter().format_bytes(b"%PDF", "scan.pdf", front_matter)

    def test_unreadable_document(self, front_matter: FrontMatter) -> None:
        """Unreadable documents raise ExtractionError."""
        with pytest.raises(ExtractionError):
            DocumentFormatter().format_bytes(b"garbage", "broken.docx", front_matter)

    def test_missing_file(self, tmp_path, front_matter: FrontMatter) -> None:
        """A missing path is a validation error."""
        with pytest.raises(ValidationError):
            DocumentFormatter().format_file(tmp_path / "absent.docx", front_matter)

    def test_custom_exporter(self, front_matter: FrontMatter) -> None:
        """Any registered exporter can render the layout."""
        formatter = DocumentFormatter(exporter=LayoutJSONExporter())
        result = formatter.format_text("Summary\nAll good.", front_matter)
        records = json.loads(result.content)
        assert records[0]["kind"] == "spacer"

    def test_to_dict(self, front_matter: FrontMatter) -> None:
        """Test serialization."""
        d = DocumentFormatter().format_text("Summary", front_matter).to_dict()
        assert d["filename"] == "Release_Runbook_Formatted.docx"
        assert d["size"] > 0
        assert d["stats"]["headings"] == 1

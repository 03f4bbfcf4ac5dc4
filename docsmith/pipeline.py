"""
End-to-end formatting pipeline.

load → normalize → segment → post-process → layout → render. The
pipeline holds no state between calls; each call works on its own
input and returns the finished document bytes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docsmith.config import ClassifierConfig
from docsmith.core.document import ContentItem, ContentStats
from docsmith.errors import ValidationError
from docsmith.exporters import BaseExporter, DocxExporter
from docsmith.loaders import MODE_STRUCTURED, ExtractedText, LoaderRegistry
from docsmith.segmentation.classifier import classify_text
from docsmith.styles.layout import FrontMatter, LayoutEntry, build_layout

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "_Formatted.docx"
DEFAULT_STEM = "Document"


def output_filename(title: str) -> str:
    """File name for a formatted document.

    Non-word characters are removed from the title and whitespace runs
    become underscores: "Ops Guide: v2" → "Ops_Guide_v2_Formatted.docx".
    """
    stem = re.sub(r"[^\w\s-]", "", title).strip()
    stem = re.sub(r"\s+", "_", stem)
    return f"{stem or DEFAULT_STEM}{OUTPUT_SUFFIX}"


@dataclass
class FormatResult:
    """Outcome of formatting one document.

    Attributes:
        content: Rendered document bytes.
        filename: Suggested output file name.
        items: Classified content items.
        stats: Item counts by type.
        layout: Layout entries that were rendered.
        extraction_mode: "structured", or "raw" after a loader fallback.
        warnings: Non-fatal problems met while loading.
    """

    content: bytes
    filename: str
    items: list[ContentItem]
    stats: ContentStats
    layout: list[LayoutEntry] = field(default_factory=list)
    extraction_mode: str = MODE_STRUCTURED
    warnings: list[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return self.stats.summary()

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "size": len(self.content),
            "stats": self.stats.to_dict(),
            "summary": self.summary,
            "extraction_mode": self.extraction_mode,
            "warnings": self.warnings,
        }


class DocumentFormatter:
    """
    Turn a source document into a house-styled Word document.

    Usage:
        formatter = DocumentFormatter()
        result = formatter.format_file(Path("notes.docx"), FrontMatter(title="Runbook"))
        Path(result.filename).write_bytes(result.content)
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        exporter: BaseExporter | None = None,
    ) -> None:
        self.config = config or ClassifierConfig()
        self.exporter = exporter or DocxExporter()

    def format_file(self, path: Path, front: FrontMatter) -> FormatResult:
        """Format a document on disk."""
        path = Path(path)
        if not path.exists():
            raise ValidationError(f"File not found: {path}")
        return self.format_bytes(path.read_bytes(), path.name, front)

    def format_bytes(self, data: bytes, source_name: str, front: FrontMatter) -> FormatResult:
        """
        Format an uploaded document.

        Args:
            data: Raw file contents.
            source_name: Original file name; its extension selects the loader.
            front: Title page inputs.

        Returns:
            FormatResult with the rendered bytes.

        Raises:
            ValidationError: Empty title or unsupported file type.
            ExtractionError: The document could not be read.
            DocumentBuildError: The output could not be rendered.
        """
        self._validate(front)
        if LoaderRegistry.get_loader(source_name) is None:
            supported = ", ".join(LoaderRegistry.supported_extensions())
            raise ValidationError(
                f"Unsupported file type: {Path(source_name).suffix or source_name}",
                details=f"Supported types: {supported}",
            )

        extracted = LoaderRegistry.load_bytes(data, source_name)
        logger.info(
            "Extracted %d characters from %s (%s mode)",
            len(extracted.text),
            source_name,
            extracted.mode,
        )
        return self._format_extracted(extracted, front)

    def format_text(self, text: str, front: FrontMatter, markup: bool = False) -> FormatResult:
        """Format text that was already extracted (or HTML when ``markup`` is set)."""
        self._validate(front)
        return self._render(text, front, markup=markup, mode=MODE_STRUCTURED, warnings=[])

    def _format_extracted(self, extracted: ExtractedText, front: FrontMatter) -> FormatResult:
        return self._render(
            extracted.text,
            front,
            markup=False,
            mode=extracted.mode,
            warnings=list(extracted.warnings),
        )

    def _render(
        self,
        text: str,
        front: FrontMatter,
        *,
        markup: bool,
        mode: str,
        warnings: list[str],
    ) -> FormatResult:
        classification = classify_text(text, self.config, markup=markup)
        layout = build_layout(classification.items, front)
        content = self.exporter.render(layout)

        result = FormatResult(
            content=content,
            filename=output_filename(front.title),
            items=classification.items,
            stats=classification.stats,
            layout=layout,
            extraction_mode=mode,
            warnings=warnings,
        )
        logger.info("%s -> %s", result.summary, result.filename)
        return result

    def _validate(self, front: FrontMatter) -> None:
        if not front.title or not front.title.strip():
            raise ValidationError("Document title is required")

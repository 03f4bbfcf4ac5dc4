"""
DOCX text extraction using python-docx.

Structured mode walks the document body in order, emitting one line per
paragraph and one line per table-cell paragraph, with list paragraphs
prefixed by a bullet glyph. Raw mode reads ``word/document.xml``
directly and keeps only run text, tabs and breaks.
"""

from __future__ import annotations

import io
import zipfile
from typing import ClassVar

from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from docsmith.cleaning.normalizer import BULLET_PREFIX, SUB_BULLET_PREFIX
from docsmith.loaders.base import BaseLoader, LoaderRegistry

DOCUMENT_PART = "word/document.xml"


@LoaderRegistry.register
class DocxLoader(BaseLoader):
    """
    Load DOCX documents using python-docx.

    Extracts:
    - Body paragraphs in document order
    - Table cell paragraphs, row by row
    - List paragraphs, prefixed with a bullet glyph by nesting level
    """

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".docx"]
    LOADER_NAME: ClassVar[str] = "docx"

    def _extract_structured(self, data: bytes) -> str:
        doc = Document(io.BytesIO(data))
        lines: list[str] = []

        for element in doc.element.body:
            tag = element.tag.split("}")[-1]
            if tag == "p":
                lines.append(self._paragraph_text(Paragraph(element, doc)))
            elif tag == "tbl":
                lines.extend(self._table_lines(Table(element, doc)))

        return "\n".join(lines)

    def _extract_raw(self, data: bytes) -> str:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            root = parse_xml(archive.read(DOCUMENT_PART))

        para_tag = qn("w:p")
        run_tag = qn("w:r")
        text_tag = qn("w:t")
        lines: list[str] = []
        for para in root.iter(para_tag):
            parts: list[str] = []
            for node in para.iter(text_tag, qn("w:tab"), qn("w:br"), qn("w:cr")):
                # Text box paragraphs nested in this one get their own line
                if next(node.iterancestors(para_tag)) is not para:
                    continue
                if node.tag == text_tag:
                    parts.append(node.text or "")
                # w:tab also names tab stops inside paragraph properties
                elif node.getparent().tag != run_tag:
                    continue
                elif node.tag == qn("w:tab"):
                    parts.append("\t")
                else:
                    parts.append("\n")
            lines.append("".join(parts))
        return "\n".join(lines)

    def _paragraph_text(self, para: Paragraph) -> str:
        text = para.text
        if not text.strip():
            return text

        level = self._list_level(para)
        if level is None:
            return text
        return (SUB_BULLET_PREFIX if level > 0 else BULLET_PREFIX) + text.strip()

    def _list_level(self, para: Paragraph) -> int | None:
        """Nesting level of a list paragraph, or None for ordinary paragraphs."""
        ppr = para._element.find(qn("w:pPr"))
        num_pr = ppr.find(qn("w:numPr")) if ppr is not None else None
        if num_pr is not None:
            ilvl = num_pr.find(qn("w:ilvl"))
            if ilvl is not None:
                try:
                    return int(ilvl.get(qn("w:val"), "0"))
                except ValueError:
                    return 0
            return 0

        style_name = para.style.name if para.style is not None else ""
        if style_name and "List" in style_name:
            # "List Bullet 2", "List Number 3" and friends
            suffix = style_name.rsplit(" ", 1)[-1]
            return int(suffix) - 1 if suffix.isdigit() else 0
        return None

    def _table_lines(self, table: Table) -> list[str]:
        lines: list[str] = []
        for row in table.rows:
            seen: set[int] = set()
            for cell in row.cells:
                # Merged cells repeat across the row
                if id(cell._tc) in seen:
                    continue
                seen.add(id(cell._tc))
                lines.extend(para.text for para in cell.paragraphs)
        return lines


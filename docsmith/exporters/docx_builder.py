"""
Word document exporter using python-docx.

Renders layout entries into a .docx: styled paragraphs, code blocks as
shaded single-column tables with a left accent border, a table of
contents field, and a footer page number.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from typing import ClassVar

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips
from docx.table import _Cell
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from docsmith.core.document import ItemKind
from docsmith.errors import DocumentBuildError
from docsmith.exporters.base import BaseExporter, ExporterRegistry
from docsmith.styles.layout import EntryKind, LayoutEntry
from docsmith.styles.mapper import (
    BODY_FONT,
    CODE_BLOCK_STYLE,
    STYLE_TABLE,
    CodeBlockStyle,
    Sizes,
    StyleDirective,
)

logger = logging.getLogger(__name__)

PAGE_MARGIN = Inches(1)
LIST_INDENT_STEP = 0.25
TOC_INSTRUCTION = ' TOC \\o "1-3" \\h \\z \\u '
TOC_PLACEHOLDER = "Right-click and choose Update Field to build the table of contents."

_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
}


@ExporterRegistry.register
class DocxExporter(BaseExporter):
    """
    Export layout entries as a Word document.

    Page setup:
    - 1 inch margins on every side
    - Centered PAGE field in the footer
    - Body font as the Normal style default
    - Heading 1-3 restyled to the house palette so the TOC picks them up
    """

    EXPORTER_NAME: ClassVar[str] = "docx"
    FILE_EXTENSION: ClassVar[str] = ".docx"

    def __init__(self, code_style: CodeBlockStyle = CODE_BLOCK_STYLE) -> None:
        self.code_style = code_style

    def render(self, entries: Sequence[LayoutEntry]) -> bytes:
        """
        Build the document and return its bytes.

        Raises:
            DocumentBuildError: If python-docx fails at any step
        """
        try:
            doc = Document()
            self._setup_page(doc)
            self._setup_styles(doc)
            for entry in entries:
                self._render_entry(doc, entry)

            buffer = io.BytesIO()
            doc.save(buffer)
        except DocumentBuildError:
            raise
        except Exception as exc:
            raise DocumentBuildError(
                f"Failed to build document: {exc}",
                details=repr(exc),
            ) from exc

        data = buffer.getvalue()
        logger.debug("Rendered %d layout entries into %d bytes", len(entries), len(data))
        return data

    # ------------------------------------------------------------------
    # Document setup
    # ------------------------------------------------------------------

    def _setup_page(self, doc: DocxDocument) -> None:
        for section in doc.sections:
            section.top_margin = PAGE_MARGIN
            section.bottom_margin = PAGE_MARGIN
            section.left_margin = PAGE_MARGIN
            section.right_margin = PAGE_MARGIN
        self._add_page_number_to_footer(doc)

    def _add_page_number_to_footer(self, doc: DocxDocument) -> None:
        footer = doc.sections[0].footer
        para = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
        para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = para.add_run()
        run.font.size = Pt(Sizes.BODY)
        _append_field(run, "PAGE")

    def _setup_styles(self, doc: DocxDocument) -> None:
        normal = doc.styles["Normal"]
        normal.font.name = BODY_FONT
        normal.font.size = Pt(Sizes.BODY)
        rpr = normal.element.get_or_add_rPr()
        rpr.get_or_add_rFonts().set(qn("w:eastAsia"), BODY_FONT)

        for level in (1, 2, 3):
            directive = STYLE_TABLE[(ItemKind.HEADING, level)]
            style = doc.styles[f"Heading {level}"]
            style.font.name = directive.font
            style.font.size = Pt(directive.size)
            style.font.bold = directive.bold
            style.font.italic = directive.italic
            style.font.color.rgb = RGBColor.from_string(directive.color)
            style.paragraph_format.space_before = Pt(directive.space_before)
            style.paragraph_format.space_after = Pt(directive.space_after)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _render_entry(self, doc: DocxDocument, entry: LayoutEntry) -> None:
        if entry.kind == EntryKind.TEXT:
            self._add_text(doc, entry.text, entry.style)
        elif entry.kind == EntryKind.SPACER:
            para = doc.add_paragraph()
            para.paragraph_format.space_after = Pt(0)
        elif entry.kind == EntryKind.PAGE_BREAK:
            doc.add_page_break()
        elif entry.kind == EntryKind.TOC:
            self._add_toc(doc)
        elif entry.kind == EntryKind.CODE:
            self._add_code_block(doc, entry.lines)
        else:
            raise DocumentBuildError(f"Unknown layout entry kind: {entry.kind}")

    def _add_text(self, doc: DocxDocument, text: str, style: StyleDirective | None) -> Paragraph:
        if style is not None and style.paragraph_style:
            para = doc.add_paragraph(style=style.paragraph_style)
        else:
            para = doc.add_paragraph()

        run = para.add_run(text)
        if style is not None:
            _apply_paragraph_format(para, style)
            _apply_font(run, style)
        return para

    def _add_toc(self, doc: DocxDocument) -> None:
        """Insert a Word TOC field; Word fills it in on field update."""
        para = doc.add_paragraph()
        run = para.add_run()

        begin = OxmlElement("w:fldChar")
        begin.set(qn("w:fldCharType"), "begin")
        instr = OxmlElement("w:instrText")
        instr.set(qn("xml:space"), "preserve")
        instr.text = TOC_INSTRUCTION
        separate = OxmlElement("w:fldChar")
        separate.set(qn("w:fldCharType"), "separate")
        run._r.append(begin)
        run._r.append(instr)
        run._r.append(separate)

        placeholder = para.add_run(TOC_PLACEHOLDER)
        placeholder.italic = True
        placeholder.font.size = Pt(Sizes.BODY)

        end = OxmlElement("w:fldChar")
        end.set(qn("w:fldCharType"), "end")
        para.add_run()._r.append(end)

    def _add_code_block(self, doc: DocxDocument, lines: Sequence[str]) -> None:
        """One table row per code line; outer border only around the block."""
        cs = self.code_style
        table = doc.add_table(rows=len(lines), cols=1)
        table.autofit = False
        table.alignment = WD_TABLE_ALIGNMENT.LEFT

        last = len(lines) - 1
        for index, line in enumerate(lines):
            cell = table.rows[index].cells[0]
            cell.width = Twips(cs.width_dxa)
            _set_code_cell_borders(cell, cs, first=index == 0, last=index == last)
            _set_cell_shading(cell, cs.background)

            para = cell.paragraphs[0]
            para.paragraph_format.space_before = Pt(cs.row_spacing)
            para.paragraph_format.space_after = Pt(cs.row_spacing)
            run = para.add_run(line)
            run.font.name = cs.font
            run.font.size = Pt(cs.size)
            run.font.color.rgb = RGBColor.from_string(cs.color)


def _apply_paragraph_format(para: Paragraph, style: StyleDirective) -> None:
    fmt = para.paragraph_format
    fmt.space_before = Pt(style.space_before)
    fmt.space_after = Pt(style.space_after)
    para.alignment = _ALIGNMENTS.get(style.alignment, WD_ALIGN_PARAGRAPH.LEFT)
    if style.indent_level:
        # Nested list items sit one step right of the top-level list text
        fmt.left_indent = Inches(LIST_INDENT_STEP * (style.indent_level + 1))


def _apply_font(run: Run, style: StyleDirective) -> None:
    run.font.name = style.font
    run.font.size = Pt(style.size)
    run.font.bold = style.bold
    run.font.italic = style.italic
    run.font.color.rgb = RGBColor.from_string(style.color)


def _append_field(run: Run, instruction: str) -> None:
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = instruction
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    run._r.append(begin)
    run._r.append(instr)
    run._r.append(end)


def _border(name: str, val: str, size: int = 0, color: str = "auto"):
    elem = OxmlElement(f"w:{name}")
    elem.set(qn("w:val"), val)
    if val != "nil":
        elem.set(qn("w:sz"), str(size))
        elem.set(qn("w:space"), "0")
        elem.set(qn("w:color"), color)
    return elem


def _set_code_cell_borders(cell: _Cell, cs: CodeBlockStyle, *, first: bool, last: bool) -> None:
    tc_pr = cell._tc.get_or_add_tcPr()
    borders = OxmlElement("w:tcBorders")
    borders.append(
        _border("top", "single", cs.border_size, cs.border_color) if first else _border("top", "nil")
    )
    borders.append(_border("left", "single", cs.accent_size, cs.accent_color))
    borders.append(
        _border("bottom", "single", cs.border_size, cs.border_color)
        if last
        else _border("bottom", "nil")
    )
    borders.append(_border("right", "single", cs.border_size, cs.border_color))
    tc_pr.append(borders)


def _set_cell_shading(cell: _Cell, fill: str) -> None:
    tc_pr = cell._tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    tc_pr.append(shd)

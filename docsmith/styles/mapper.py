"""
House style table.

Maps each content item type (and heading level) to the typography and
spacing used when rendering it. Sizes and spacing are in points,
colors are RGB hex strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docsmith.core.document import ContentItem, Heading, ItemKind

BODY_FONT = "Aptos"
CODE_FONT = "Consolas"


class Colors:
    """Palette used across the document."""

    HEADING1 = "1F4E79"
    HEADING2 = "2E75B6"
    HEADING3 = "404040"
    BODY = "000000"
    SECONDARY = "666666"
    CODE_TEXT = "2E2E2E"
    CODE_BG = "F5F5F5"
    CODE_BORDER = "BFBFBF"
    CODE_ACCENT = "1F4E79"
    WHITE = "FFFFFF"


class Sizes:
    """Font sizes in points."""

    TITLE = 24.0
    SUBTITLE = 14.0
    ORGANIZATION = 12.0
    HEADING1 = 12.0
    HEADING2 = 11.0
    HEADING3 = 10.0
    DATE = 10.0
    BODY = 9.0
    CODE = 8.0


@dataclass(frozen=True)
class StyleDirective:
    """Typography and spacing for one rendered paragraph.

    Attributes:
        font: Font family.
        size: Font size in points.
        color: RGB hex color of the text.
        space_before: Spacing above, in points.
        space_after: Spacing below, in points.
        indent_level: List nesting depth (0 = top level).
        bold: Bold run.
        italic: Italic run.
        alignment: "left" or "center".
        paragraph_style: Built-in paragraph style to apply, if any.
    """

    font: str
    size: float
    color: str
    space_before: float = 0.0
    space_after: float = 0.0
    indent_level: int = 0
    bold: bool = False
    italic: bool = False
    alignment: str = "left"
    paragraph_style: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "font": self.font,
            "size": self.size,
            "color": self.color,
            "space_before": self.space_before,
            "space_after": self.space_after,
            "indent_level": self.indent_level,
            "bold": self.bold,
            "italic": self.italic,
            "alignment": self.alignment,
            "paragraph_style": self.paragraph_style,
        }


@dataclass(frozen=True)
class CodeBlockStyle:
    """Bordered, shaded single-column table used for code blocks.

    Border sizes are in eighths of a point, widths in twentieths of a
    point (dxa), spacing in points.
    """

    font: str = CODE_FONT
    size: float = Sizes.CODE
    color: str = Colors.CODE_TEXT
    background: str = Colors.CODE_BG
    border_color: str = Colors.CODE_BORDER
    border_size: int = 1
    accent_color: str = Colors.CODE_ACCENT
    accent_size: int = 12
    width_dxa: int = 9360
    row_spacing: float = 1.0


CODE_BLOCK_STYLE = CodeBlockStyle()

STYLE_TABLE: dict[tuple[ItemKind, int], StyleDirective] = {
    (ItemKind.HEADING, 1): StyleDirective(
        font=BODY_FONT,
        size=Sizes.HEADING1,
        color=Colors.HEADING1,
        space_before=15,
        space_after=5,
        bold=True,
        paragraph_style="Heading 1",
    ),
    (ItemKind.HEADING, 2): StyleDirective(
        font=BODY_FONT,
        size=Sizes.HEADING2,
        color=Colors.HEADING2,
        space_before=10,
        space_after=4,
        bold=True,
        paragraph_style="Heading 2",
    ),
    (ItemKind.HEADING, 3): StyleDirective(
        font=BODY_FONT,
        size=Sizes.HEADING3,
        color=Colors.HEADING3,
        space_before=8,
        space_after=3,
        bold=True,
        paragraph_style="Heading 3",
    ),
    (ItemKind.PARAGRAPH, 0): StyleDirective(
        font=BODY_FONT,
        size=Sizes.BODY,
        color=Colors.BODY,
        space_after=8,
    ),
    (ItemKind.BULLET, 0): StyleDirective(
        font=BODY_FONT,
        size=Sizes.BODY,
        color=Colors.BODY,
        space_after=4,
        paragraph_style="List Bullet",
    ),
    (ItemKind.SUB_BULLET, 0): StyleDirective(
        font=BODY_FONT,
        size=Sizes.BODY,
        color=Colors.BODY,
        space_after=4,
        indent_level=1,
        paragraph_style="List Bullet 2",
    ),
    (ItemKind.NUMBERED, 0): StyleDirective(
        font=BODY_FONT,
        size=Sizes.BODY,
        color=Colors.BODY,
        space_after=4,
        paragraph_style="List Paragraph",
    ),
    (ItemKind.CODE_BLOCK, 0): StyleDirective(
        font=CODE_FONT,
        size=Sizes.CODE,
        color=Colors.CODE_TEXT,
        space_before=CODE_BLOCK_STYLE.row_spacing,
        space_after=CODE_BLOCK_STYLE.row_spacing,
    ),
}

# Title page and trailer
TITLE_STYLE = StyleDirective(
    font=BODY_FONT, size=Sizes.TITLE, color=Colors.BODY, bold=True, alignment="center"
)
SUBTITLE_STYLE = StyleDirective(
    font=BODY_FONT, size=Sizes.SUBTITLE, color=Colors.BODY, space_after=10, alignment="center"
)
ORGANIZATION_STYLE = StyleDirective(
    font=BODY_FONT,
    size=Sizes.ORGANIZATION,
    color=Colors.BODY,
    space_after=10,
    italic=True,
    alignment="center",
)
DATE_STYLE = StyleDirective(
    font=BODY_FONT, size=Sizes.DATE, color=Colors.BODY, space_after=10, alignment="center"
)
VERSION_STYLE = StyleDirective(
    font=BODY_FONT, size=Sizes.BODY, color=Colors.SECONDARY, alignment="center"
)
TOC_HEADING_STYLE = StyleDirective(
    font=BODY_FONT,
    size=Sizes.HEADING1,
    color=Colors.HEADING1,
    space_after=10,
    bold=True,
    alignment="center",
)
TRAILER_STYLE = StyleDirective(
    font=BODY_FONT,
    size=Sizes.BODY,
    color=Colors.SECONDARY,
    space_before=20,
    italic=True,
    alignment="center",
)


def style_key(item: ContentItem) -> tuple[ItemKind, int]:
    """Table key for an item: its kind plus heading level (0 otherwise)."""
    level = item.level if isinstance(item, Heading) else 0
    return item.kind, level


def style_for(item: ContentItem) -> StyleDirective:
    """Look up the style directive for an item."""
    return STYLE_TABLE[style_key(item)]

"""House style table and document layout assembly."""

from docsmith.styles.layout import (
    EntryKind,
    FrontMatter,
    LayoutEntry,
    build_layout,
    derive_subtitle,
)
from docsmith.styles.mapper import (
    CODE_BLOCK_STYLE,
    STYLE_TABLE,
    CodeBlockStyle,
    Colors,
    Sizes,
    StyleDirective,
    style_for,
)

__all__ = [
    "CODE_BLOCK_STYLE",
    "STYLE_TABLE",
    "CodeBlockStyle",
    "Colors",
    "EntryKind",
    "FrontMatter",
    "LayoutEntry",
    "Sizes",
    "StyleDirective",
    "build_layout",
    "derive_subtitle",
    "style_for",
]

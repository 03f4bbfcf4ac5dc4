"""Core content model for docsmith."""

from docsmith.core.document import (
    Bullet,
    CodeBlock,
    ContentItem,
    ContentStats,
    Heading,
    ItemKind,
    Line,
    NumberedItem,
    Paragraph,
    SubBullet,
    flatten,
)

__all__ = [
    "Bullet",
    "CodeBlock",
    "ContentItem",
    "ContentStats",
    "Heading",
    "ItemKind",
    "Line",
    "NumberedItem",
    "Paragraph",
    "SubBullet",
    "flatten",
]

"""
Content model for docsmith.

This module defines the line and content item structures that flow
through classification, layout and document building.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class ItemKind(Enum):
    """Semantic roles a classified line (or run of lines) can take."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    SUB_BULLET = "sub_bullet"
    NUMBERED = "numbered"
    CODE_BLOCK = "code_block"


@dataclass(frozen=True)
class Line:
    """
    A trimmed, non-empty line of extracted text.

    ``position`` is the index in the original (pre-filter) sequence, so a
    gap between two consecutive positions means blank lines were dropped
    between them. ``raw`` keeps the untrimmed text for indentation checks.
    """

    text: str
    position: int
    raw: str = field(default="", compare=False)

    @property
    def indent(self) -> str:
        """Leading whitespace of the untrimmed line."""
        raw = self.raw or self.text
        return raw[: len(raw) - len(raw.lstrip())]

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "position": self.position}


@dataclass(frozen=True)
class ContentItem(ABC):
    """
    Base class of the closed set of content item variants.

    ``source`` holds the Lines consumed by the item. It is excluded from
    equality so two items compare on their semantic fields only.
    """

    kind: ClassVar[ItemKind]

    def source_texts(self) -> list[str]:
        """Texts of the consumed lines, in order."""
        return [line.text for line in getattr(self, "source", ())]

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize the item for API responses."""


@dataclass(frozen=True)
class Heading(ContentItem):
    """Section heading at level 1, 2 or 3."""

    kind: ClassVar[ItemKind] = ItemKind.HEADING

    level: int
    text: str
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.level not in (1, 2, 3):
            raise ValueError(f"Heading level must be 1, 2 or 3, got {self.level}")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "level": self.level, "text": self.text}


@dataclass(frozen=True)
class Paragraph(ContentItem):
    """Body text."""

    kind: ClassVar[ItemKind] = ItemKind.PARAGRAPH

    text: str
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text}


@dataclass(frozen=True)
class Bullet(ContentItem):
    """Top-level bullet point, marker already stripped."""

    kind: ClassVar[ItemKind] = ItemKind.BULLET

    text: str
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text}


@dataclass(frozen=True)
class SubBullet(ContentItem):
    """Bullet one indentation level deeper. Only ever follows a Bullet."""

    kind: ClassVar[ItemKind] = ItemKind.SUB_BULLET

    text: str
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text}


@dataclass(frozen=True)
class NumberedItem(ContentItem):
    """Numbered list entry; ``number`` is the declared ordinal."""

    kind: ClassVar[ItemKind] = ItemKind.NUMBERED

    text: str
    number: int
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text, "number": self.number}


@dataclass(frozen=True)
class CodeBlock(ContentItem):
    """One or more code lines, kept verbatim."""

    kind: ClassVar[ItemKind] = ItemKind.CODE_BLOCK

    lines: tuple[str, ...]
    source: tuple[Line, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("CodeBlock requires at least one line")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "lines": list(self.lines)}


def flatten(items: Iterable[ContentItem]) -> list[str]:
    """Re-flatten items into the line texts they consumed.

    For any classification run this equals the texts of the input Lines,
    in order.
    """
    texts: list[str] = []
    for item in items:
        texts.extend(item.source_texts())
    return texts


@dataclass
class ContentStats:
    """
    Counts of emitted items by type, for display after formatting.

    Bullets include sub-bullets.
    """

    headings: int = 0
    bullets: int = 0
    numbered_items: int = 0
    code_blocks: int = 0
    paragraphs: int = 0

    @classmethod
    def from_items(cls, items: Sequence[ContentItem]) -> ContentStats:
        stats = cls()
        for item in items:
            if item.kind is ItemKind.HEADING:
                stats.headings += 1
            elif item.kind in (ItemKind.BULLET, ItemKind.SUB_BULLET):
                stats.bullets += 1
            elif item.kind is ItemKind.NUMBERED:
                stats.numbered_items += 1
            elif item.kind is ItemKind.CODE_BLOCK:
                stats.code_blocks += 1
            else:
                stats.paragraphs += 1
        return stats

    @property
    def total(self) -> int:
        return (
            self.headings
            + self.bullets
            + self.numbered_items
            + self.code_blocks
            + self.paragraphs
        )

    def summary(self) -> str:
        """Human-readable one-line summary."""
        return (
            f"Formatted: {self.headings} headings, {self.bullets} bullet points, "
            f"{self.numbered_items} numbered items, {self.code_blocks} code blocks, "
            f"{self.paragraphs} paragraphs"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "headings": self.headings,
            "bullets": self.bullets,
            "numbered_items": self.numbered_items,
            "code_blocks": self.code_blocks,
            "paragraphs": self.paragraphs,
            "total": self.total,
        }

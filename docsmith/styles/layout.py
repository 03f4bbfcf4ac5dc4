"""
Document layout assembly.

Combines the front matter (title page, optional table of contents),
the style-mapped body and the trailer into one ordered list of layout
entries that a document builder renders without further decisions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from docsmith.core.document import (
    CodeBlock,
    ContentItem,
    Heading,
    NumberedItem,
    Paragraph,
)
from docsmith.styles.mapper import (
    DATE_STYLE,
    ORGANIZATION_STYLE,
    SUBTITLE_STYLE,
    TITLE_STYLE,
    TOC_HEADING_STYLE,
    TRAILER_STYLE,
    VERSION_STYLE,
    StyleDirective,
    style_for,
)

TITLE_PAGE_SPACERS = 4
TOC_TITLE = "Table of Contents"
TRAILER_TEXT = "End of Document"

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


class EntryKind(Enum):
    """Kinds of layout entries a builder must render."""

    TEXT = "text"
    CODE = "code"
    SPACER = "spacer"
    PAGE_BREAK = "page_break"
    TOC = "toc"


@dataclass(frozen=True)
class LayoutEntry:
    """One renderable unit of the output document."""

    kind: EntryKind
    text: str = ""
    lines: tuple[str, ...] = ()
    style: StyleDirective | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "lines": list(self.lines),
            "style": self.style.to_dict() if self.style else None,
        }


@dataclass
class FrontMatter:
    """Title page inputs.

    Attributes:
        title: Document title. Required.
        organization: Organization shown under the title.
        subtitle: Explicit subtitle; None derives one from the content.
        version: Version label.
        author: Optional author appended to the version line.
        include_toc: Emit a table of contents page.
        as_of: Date for the "As of" stamp; None means today.
    """

    title: str
    organization: str = ""
    subtitle: str | None = None
    version: str = "1.0"
    author: str | None = None
    include_toc: bool = True
    as_of: date | None = None

    def stamp(self) -> str:
        """The generated "As of <Month YYYY>" line."""
        when = self.as_of or date.today()
        return f"As of {_MONTHS[when.month - 1]} {when.year}"

    def version_line(self) -> str:
        line = f"Version {self.version}"
        if self.author:
            line += f" | {self.author}"
        return line

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "organization": self.organization,
            "subtitle": self.subtitle,
            "version": self.version,
            "author": self.author,
            "include_toc": self.include_toc,
            "as_of": self.as_of.isoformat() if self.as_of else None,
        }


def derive_subtitle(items: Sequence[ContentItem], title: str) -> tuple[str | None, int | None]:
    """Pick a subtitle from the content.

    The first level-1 heading whose text differs from the title, or the
    first paragraph containing " - ", whichever comes first.

    Args:
        items: Classified content.
        title: Document title.

    Returns:
        Tuple of (subtitle, index of the item it came from), or (None, None).
    """
    for index, item in enumerate(items):
        if isinstance(item, Heading) and item.level == 1 and item.text != title:
            return item.text, index
        if isinstance(item, Paragraph) and " - " in item.text:
            return item.text, index
    return None, None


def build_layout(items: Sequence[ContentItem], front: FrontMatter) -> list[LayoutEntry]:
    """Assemble title page, body and trailer.

    Args:
        items: Classified content.
        front: Title page inputs.

    Returns:
        Ordered layout entries.
    """
    skip_index: int | None = None
    subtitle = front.subtitle
    if subtitle is None:
        subtitle, skip_index = derive_subtitle(items, front.title)

    entries = _title_page(front, subtitle)
    for index, item in enumerate(items):
        if index == skip_index:
            continue
        entries.extend(_body_entries(item))
    entries.append(LayoutEntry(EntryKind.TEXT, text=TRAILER_TEXT, style=TRAILER_STYLE))
    return entries


def _title_page(front: FrontMatter, subtitle: str | None) -> list[LayoutEntry]:
    entries = [LayoutEntry(EntryKind.SPACER) for _ in range(TITLE_PAGE_SPACERS)]
    entries.append(LayoutEntry(EntryKind.TEXT, text=front.title, style=TITLE_STYLE))
    if subtitle:
        entries.append(LayoutEntry(EntryKind.TEXT, text=subtitle, style=SUBTITLE_STYLE))
    entries.append(LayoutEntry(EntryKind.TEXT, text=front.organization, style=ORGANIZATION_STYLE))
    entries.append(LayoutEntry(EntryKind.TEXT, text=front.stamp(), style=DATE_STYLE))
    entries.append(LayoutEntry(EntryKind.TEXT, text=front.version_line(), style=VERSION_STYLE))
    entries.append(LayoutEntry(EntryKind.PAGE_BREAK))
    if front.include_toc:
        entries.append(LayoutEntry(EntryKind.TEXT, text=TOC_TITLE, style=TOC_HEADING_STYLE))
        entries.append(LayoutEntry(EntryKind.TOC))
        entries.append(LayoutEntry(EntryKind.PAGE_BREAK))
    return entries


def _body_entries(item: ContentItem) -> list[LayoutEntry]:
    style = style_for(item)
    if isinstance(item, CodeBlock):
        return [
            LayoutEntry(EntryKind.SPACER),
            LayoutEntry(EntryKind.CODE, lines=item.lines, style=style),
            LayoutEntry(EntryKind.SPACER),
        ]
    if isinstance(item, NumberedItem):
        return [LayoutEntry(EntryKind.TEXT, text=f"{item.number}. {item.text}", style=style)]
    return [LayoutEntry(EntryKind.TEXT, text=item.text, style=style)]

"""Corrective pass over segmented content.

Reclassifies short paragraphs as bullets where the surrounding items
say they belong to a list. Runs exactly once; it never touches code
blocks or headings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from docsmith.analysis.signals import is_list_intro
from docsmith.config import ClassifierConfig
from docsmith.core.document import Bullet, ContentItem, ItemKind, Line, Paragraph

logger = logging.getLogger(__name__)


@dataclass
class PostProcessResult:
    """Corrected items plus an audit of what changed.

    Attributes:
        items: Items after correction.
        reclassified: Indices of items turned from Paragraph into Bullet.
    """

    items: list[ContentItem]
    reclassified: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "reclassified": self.reclassified,
        }


class PostProcessor:
    """Turns isolated short paragraphs into bullets when context warrants.

    A Paragraph becomes a Bullet when either:

    - the line right before it in the input matched a list-introduction
      pattern, or
    - the previous corrected item is a Bullet and the next item (as
      emitted by the scan) is also a Bullet.

    Paragraphs at or above ``config.bullet_max_length`` are left alone.

    Args:
        config: Classifier thresholds. Defaults to ClassifierConfig().
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._config = config or ClassifierConfig()

    def process(self, items: Sequence[ContentItem], lines: Sequence[Line]) -> PostProcessResult:
        """Run the correction pass.

        Args:
            items: Items emitted by the segmentation scan.
            lines: The line sequence the items were built from.

        Returns:
            PostProcessResult with a new item list.
        """
        index_of = {line.position: i for i, line in enumerate(lines)}
        corrected: list[ContentItem] = []
        reclassified: list[int] = []

        for i, item in enumerate(items):
            if isinstance(item, Paragraph) and self._should_be_bullet(
                i, item, items, corrected, lines, index_of
            ):
                corrected.append(Bullet(text=item.text, source=item.source))
                reclassified.append(i)
            else:
                corrected.append(item)

        if reclassified:
            logger.debug("Reclassified %d paragraphs as bullets", len(reclassified))
        return PostProcessResult(items=corrected, reclassified=reclassified)

    def _should_be_bullet(
        self,
        i: int,
        item: Paragraph,
        items: Sequence[ContentItem],
        corrected: Sequence[ContentItem],
        lines: Sequence[Line],
        index_of: dict[int, int],
    ) -> bool:
        if len(item.text) >= self._config.bullet_max_length:
            return False

        if item.source:
            line_index = index_of.get(item.source[0].position, 0)
            if line_index > 0 and is_list_intro(lines[line_index - 1].text):
                return True

        previous_is_bullet = bool(corrected) and corrected[-1].kind is ItemKind.BULLET
        next_is_bullet = i + 1 < len(items) and items[i + 1].kind is ItemKind.BULLET
        return previous_is_bullet and next_is_bullet

"""Classification pipeline: normalize, segment, post-process."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from docsmith.cleaning.normalizer import LineNormalizer
from docsmith.config import ClassifierConfig
from docsmith.core.document import ContentItem, ContentStats, Line
from docsmith.segmentation.engine import Segmenter
from docsmith.segmentation.postprocess import PostProcessor

logger = logging.getLogger(__name__)


@dataclass
class Classification:
    """Output of one classification run.

    Attributes:
        lines: The normalized input lines.
        items: Final content items, in order.
        stats: Item counts by type.
    """

    lines: list[Line]
    items: list[ContentItem]
    stats: ContentStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "stats": self.stats.to_dict(),
            "summary": self.stats.summary(),
        }


def classify_lines(
    lines: Sequence[Line],
    config: ClassifierConfig | None = None,
) -> list[ContentItem]:
    """Segment lines and apply the corrective pass.

    Args:
        lines: Normalized lines.
        config: Classifier thresholds.

    Returns:
        Final content items.
    """
    cfg = config or ClassifierConfig()
    items = Segmenter(cfg).segment(lines)
    return PostProcessor(cfg).process(items, lines).items


def classify_text(
    text: str,
    config: ClassifierConfig | None = None,
    markup: bool = False,
) -> Classification:
    """Classify raw extracted text (or HTML when ``markup`` is set).

    Args:
        text: Extracted text or HTML.
        config: Classifier thresholds.
        markup: Treat ``text`` as HTML and flatten it first.

    Returns:
        Classification with lines, items and stats.
    """
    normalizer = LineNormalizer()
    result = normalizer.normalize_html(text) if markup else normalizer.normalize(text)
    items = classify_lines(result.lines, config)
    stats = ContentStats.from_items(items)
    logger.info(
        "Classified %d lines into %d items (%d dropped blank)",
        len(result.lines),
        len(items),
        result.dropped_blank,
    )
    return Classification(lines=result.lines, items=items, stats=stats)

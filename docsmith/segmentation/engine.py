"""
Single-pass segmentation of a line sequence into content items.

The scan walks the lines once. At each cursor position the rules below
are tried in order and the first one that applies emits an item:

1. code block start (greedy multi-line grouping)
2. explicit numeric heading prefix
3. header probability
4. numbered-list continuation
5. explicit bullet marker
6. sub-bullet marker, directly after a bullet
7. inferred bullet
8. paragraph

All state carried between positions lives in ScanState, which is passed
in and returned explicitly so a scan can be resumed or seeded in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from docsmith.analysis.patterns import SUB_TOPIC_RE
from docsmith.analysis.signals import (
    bullet_marker,
    bullet_signal,
    code_signal,
    header_signal,
    heading_override,
    is_list_intro,
    numbered_item,
    sub_bullet_marker,
)
from docsmith.config import ClassifierConfig
from docsmith.core.document import (
    Bullet,
    CodeBlock,
    ContentItem,
    Heading,
    ItemKind,
    Line,
    NumberedItem,
    Paragraph,
    SubBullet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanState:
    """State threaded through the segmentation scan.

    Attributes:
        cursor: Index of the next line to classify.
        last_intro_position: Position of the most recent list-introduction
            line, or None.
        run_counter: Last number of the current numbered run (0 = no run).
        last_kind: Kind of the most recently emitted item, or None.
    """

    cursor: int = 0
    last_intro_position: int | None = None
    run_counter: int = 0
    last_kind: ItemKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "cursor": self.cursor,
            "last_intro_position": self.last_intro_position,
            "run_counter": self.run_counter,
            "last_kind": self.last_kind.value if self.last_kind else None,
        }


class Segmenter:
    """Classifies a line sequence into content items.

    Each ``segment`` call is a pure function of its input lines and the
    configuration; signal scores are memoized per call only.

    Args:
        config: Classifier thresholds. Defaults to ClassifierConfig().

    Example::

        segmenter = Segmenter()
        items = segmenter.segment(normalize_lines(text))
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._config = config or ClassifierConfig()

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def segment(self, lines: Sequence[Line]) -> list[ContentItem]:
        """Run the scan over every line.

        Args:
            lines: Normalized lines.

        Returns:
            Emitted items; every input line is consumed exactly once.
        """
        scan = _Scan(lines, self._config)
        items: list[ContentItem] = []
        state = ScanState()
        while state.cursor < len(lines):
            item, state = scan.step(state)
            items.append(item)
        return items

    def step(self, lines: Sequence[Line], state: ScanState) -> tuple[ContentItem, ScanState]:
        """Classify the line(s) at ``state.cursor``.

        Args:
            lines: Normalized lines.
            state: Current scan state; ``cursor`` must be in range.

        Returns:
            Tuple of (emitted item, next state).
        """
        return _Scan(lines, self._config).step(state)


class _Scan:
    """One pass over a fixed line sequence, with memoized signals."""

    def __init__(self, lines: Sequence[Line], config: ClassifierConfig) -> None:
        self.lines = lines
        self.config = config
        self._code: dict[int, int] = {}
        self._header: dict[int, int] = {}

    def code_score(self, index: int) -> int:
        if index not in self._code:
            self._code[index] = code_signal(self.lines, index, self.config).score
        return self._code[index]

    def header_score(self, index: int) -> int:
        if index not in self._header:
            self._header[index] = header_signal(self.lines, index).score
        return self._header[index]

    def step(self, state: ScanState) -> tuple[ContentItem, ScanState]:
        index = state.cursor
        line = self.lines[index]

        block = self._code_block(index)
        if block is not None:
            return block, self._advance(state, block, consumed=len(block.lines))

        # Only lines outside code can open a list
        if is_list_intro(line.text):
            state = replace(state, last_intro_position=line.position)

        item = self._classify_line(index, state)
        return item, self._advance(state, item, consumed=1)

    def _advance(self, state: ScanState, item: ContentItem, consumed: int) -> ScanState:
        run_counter = item.number if isinstance(item, NumberedItem) else 0
        return replace(
            state,
            cursor=state.cursor + consumed,
            run_counter=run_counter,
            last_kind=item.kind,
        )

    # -- Rule 1 -----------------------------------------------------------

    def _code_block(self, start: int) -> CodeBlock | None:
        cfg = self.config
        opening = self.code_score(start)
        if opening < cfg.code_start_threshold:
            return None

        end = start + 1
        while end < len(self.lines):
            if self.code_score(end) >= cfg.code_continue_threshold:
                end += 1
            elif (
                len(self.lines[end].text) <= cfg.code_bridge_max_length
                and end + 1 < len(self.lines)
                and self.code_score(end + 1) >= cfg.code_bridge_threshold
            ):
                end += 1
            else:
                break

        consumed = tuple(self.lines[start:end])
        if len(consumed) < 2 and opening < cfg.code_single_line_threshold:
            logger.debug("Released single code-like line %d (score %d)", consumed[0].position, opening)
            return None

        logger.debug("Code block at line %d: %d lines", consumed[0].position, len(consumed))
        return CodeBlock(lines=tuple(line.text for line in consumed), source=consumed)

    # -- Rules 2-8 --------------------------------------------------------

    def _classify_line(self, index: int, state: ScanState) -> ContentItem:
        cfg = self.config
        line = self.lines[index]
        text = line.text
        source = (line,)

        override = heading_override(text)
        if override is not None:
            level, heading_text = override
            return Heading(level=level, text=heading_text, source=source)

        # Nested glyphs are dropped from display text whether or not the
        # line can attach to a preceding bullet
        sub_text = sub_bullet_marker(text)
        plain = text if sub_text is None else sub_text

        if self.header_score(index) >= cfg.header_threshold:
            return Heading(level=self._heading_level(index), text=plain, source=source)

        numbered = numbered_item(text)
        if numbered is not None:
            number, item_text = numbered
            if number == 1 or number == state.run_counter + 1:
                return NumberedItem(text=item_text, number=number, source=source)

        marker_text = bullet_marker(text)
        if marker_text is not None:
            return Bullet(text=marker_text, source=source)

        if sub_text is not None and state.last_kind is ItemKind.BULLET:
            return SubBullet(text=sub_text, source=source)

        inferred = bullet_signal(self.lines, index, state.last_intro_position, cfg)
        if inferred.score >= cfg.bullet_threshold and len(text) < cfg.bullet_max_length:
            return Bullet(text=plain, source=source)

        return Paragraph(text=plain, source=source)

    def _heading_level(self, index: int) -> int:
        cfg = self.config
        text = self.lines[index].text
        if (
            len(text) < cfg.sub_caption_max_length
            and index > 0
            and self.header_score(index - 1) >= cfg.header_previous_threshold
        ):
            return 3
        if SUB_TOPIC_RE.match(text):
            return 2
        return 1


"""Stateless signal analyzers for line classification.

Each analyzer looks at one line (plus a bounded window of neighbours)
and returns a Signal: an integer confidence in [0, 100] and the names
of the rules that contributed. Deterministic overrides (numeric heading
prefixes, explicit list markers) are exposed as separate matchers.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from docsmith.analysis.patterns import (
    BULLET_LABEL_PREFIXES,
    BULLET_MARKER_RE,
    CODE_RULES,
    HEADING_LEVEL_PATTERNS,
    IMPERATIVE_VERBS,
    LABEL_VALUE_RE,
    LIST_INTRO_PATTERNS,
    MINOR_WORDS,
    NUMBERED_ITEM_RE,
    QUESTION_WORDS,
    SENTENCE_END_RE,
    STATUS_WORDS,
    STRUCTURAL_CHARS,
    SUB_BULLET_MARKER_RE,
    clamp,
    keyword_contained,
    keyword_exact,
    weighted_score,
)
from docsmith.config import ClassifierConfig
from docsmith.core.document import Line

HEADING_OVERRIDE_CONFIDENCE = 95
KEYWORD_HEADER_SCORE = 90
EXPLICIT_BULLET_CONFIDENCE = 95

_WORD_RE = re.compile(r"[A-Za-z][\w'-]*")


@dataclass(frozen=True)
class Signal:
    """A clamped confidence score with the rules that produced it."""

    score: int
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "reasons": list(self.reasons)}


# ---------------------------------------------------------------------------
# Deterministic matchers
# ---------------------------------------------------------------------------


def heading_override(text: str) -> tuple[int, str] | None:
    """Match an explicit numeric heading prefix.

    ``1.2.3 Title`` is level 3, ``1.2 Title`` level 2 and ``1. Title``
    level 1. The prefix must be followed by a capital letter.

    Args:
        text: Trimmed line text.

    Returns:
        Tuple of (level, text without the prefix), or None.
    """
    for level, pattern in HEADING_LEVEL_PATTERNS:
        match = pattern.match(text)
        if match:
            return level, match.group("text").strip()
    return None


def numbered_item(text: str) -> tuple[int, str] | None:
    """Match ``<integer>. text`` or ``<integer>) text``.

    Returns:
        Tuple of (declared number, text without the prefix), or None.
    """
    match = NUMBERED_ITEM_RE.match(text)
    if match is None:
        return None
    return int(match.group("number")), match.group("text").strip()


def bullet_marker(text: str) -> str | None:
    """Return the text after a primary bullet marker, or None.

    ``Result:`` labels count as explicit bullets and are kept whole.
    """
    match = BULLET_MARKER_RE.match(text)
    if match:
        return match.group("text").strip()
    if text.startswith(BULLET_LABEL_PREFIXES):
        return text
    return None


def sub_bullet_marker(text: str) -> str | None:
    """Return the text after a secondary (nested) bullet marker, or None."""
    match = SUB_BULLET_MARKER_RE.match(text)
    if match:
        return match.group("text").strip()
    return None


def is_list_intro(text: str) -> bool:
    """True if the line reads as an introduction to a list."""
    return any(p.search(text) for p in LIST_INTRO_PATTERNS)


def title_case_ratio(text: str) -> float:
    """Fraction of significant words starting with a capital letter.

    Minor words (articles, short prepositions) are ignored unless they
    open the line.
    """
    words = _WORD_RE.findall(text)
    considered = [w for i, w in enumerate(words) if i == 0 or w.lower() not in MINOR_WORDS]
    if not considered:
        return 0.0
    capitalized = sum(1 for w in considered if w[0].isupper())
    return capitalized / len(considered)


# ---------------------------------------------------------------------------
# Header probability
# ---------------------------------------------------------------------------


def header_signal(lines: Sequence[Line], index: int) -> Signal:
    """Score how much a line looks like a heading.

    Args:
        lines: Full line sequence.
        index: Index of the line to score.

    Returns:
        Signal in [0, 100]. Structural keywords score a fixed 90.
    """
    line = lines[index]
    text = line.text

    if keyword_exact(text):
        return Signal(KEYWORD_HEADER_SCORE, ("keyword_exact",))

    score = 0
    reasons: list[str] = []

    def add(points: int, reason: str) -> None:
        nonlocal score
        score += points
        reasons.append(reason)

    length = len(text)
    if length <= 40:
        add(25, "short")
    elif length <= 60:
        add(15, "medium")
    elif length <= 80:
        add(5, "long")
    elif length > 120:
        add(-50, "very_long")
    else:
        add(-15, "too_long")

    if keyword_contained(text):
        add(15, "keyword_contained")
    if title_case_ratio(text) >= 0.7:
        add(20, "title_case")
    if not SENTENCE_END_RE.search(text):
        add(10, "no_sentence_end")

    if index == 0 or lines[index - 1].position < line.position - 1:
        add(10, "after_blank")

    if index + 1 < len(lines):
        following = len(lines[index + 1].text)
        if following >= 2 * length and following >= 40:
            add(15, "next_much_longer")

    if LABEL_VALUE_RE.match(text):
        add(10, "label_value")

    letters = [c for c in text if c.isalpha()]
    if length <= 60 and len(letters) >= 2 and all(c.isupper() for c in letters):
        add(20, "all_caps")

    return Signal(clamp(score), tuple(reasons))


# ---------------------------------------------------------------------------
# Code probability
# ---------------------------------------------------------------------------


def line_code_signal(line: Line) -> Signal:
    """Score a single line for code-likeness, without neighbour context."""
    score, matched = weighted_score(line.text, CODE_RULES)
    reasons = list(matched)

    indent = line.indent
    if indent.startswith("\t") or len(indent.expandtabs(4)) >= 4:
        score += 20
        reasons.append("indented")

    punctuation = sum(1 for c in line.text if c in STRUCTURAL_CHARS)
    if punctuation >= 6:
        score += 25
        reasons.append("heavy_punctuation")
    elif punctuation >= 3:
        score += 15
        reasons.append("punctuation")

    return Signal(clamp(score), tuple(reasons))


def code_signal(lines: Sequence[Line], index: int, config: ClassifierConfig) -> Signal:
    """Score a line for code-likeness, including the surrounding window.

    A bonus applies when enough lines within ``config.code_context_window``
    on either side score as code on their own.
    """
    own = line_code_signal(lines[index])
    low = max(0, index - config.code_context_window)
    high = min(len(lines), index + config.code_context_window + 1)
    code_neighbours = sum(
        1
        for j in range(low, high)
        if j != index and line_code_signal(lines[j]).score >= config.code_start_threshold
    )
    if code_neighbours >= config.code_context_min_lines:
        return Signal(
            clamp(own.score + config.code_context_bonus),
            own.reasons + ("code_context",),
        )
    return own


# ---------------------------------------------------------------------------
# Bullet probability
# ---------------------------------------------------------------------------


def bullet_signal(
    lines: Sequence[Line],
    index: int,
    intro_position: int | None,
    config: ClassifierConfig,
) -> Signal:
    """Score how much a marker-less line looks like a list item.

    Args:
        lines: Full line sequence.
        index: Index of the line to score.
        intro_position: Position of the most recent list-introduction
            line, or None if none has been seen.
        config: Classifier thresholds.

    Returns:
        Signal in [0, 100]. Explicit markers score a fixed 95.
    """
    line = lines[index]
    text = line.text

    if bullet_marker(text) is not None:
        return Signal(EXPLICIT_BULLET_CONFIDENCE, ("explicit_marker",))

    score = 0
    reasons: list[str] = []

    if intro_position is not None and 0 < line.position - intro_position <= config.list_intro_window:
        score += 40
        reasons.append("after_list_intro")

    length = len(text)
    if length <= config.short_line_length:
        score += 20
        reasons.append("short")
    elif length <= 100:
        score += 10
        reasons.append("medium")

    words = _WORD_RE.findall(text)
    first = words[0].lower() if words else ""
    if first in STATUS_WORDS:
        score += 15
        reasons.append("status_word")
    if first in IMPERATIVE_VERBS:
        score += 15
        reasons.append("imperative")
    elif len(first) > 4 and first.endswith("ing"):
        score += 10
        reasons.append("gerund")
    elif len(first) > 3 and first.endswith("ed"):
        score += 10
        reasons.append("past_tense")
    if first in QUESTION_WORDS:
        score += 10
        reasons.append("question")

    neighbours = []
    if index > 0:
        neighbours.append(lines[index - 1])
    if index + 1 < len(lines):
        neighbours.append(lines[index + 1])
    if neighbours and all(len(n.text) <= config.short_line_length for n in neighbours):
        score += 10
        reasons.append("short_run")

    return Signal(clamp(score), tuple(reasons))

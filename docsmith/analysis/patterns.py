"""Rule tables for line classification.

Compiled regex rules with weights, plus the closed vocabularies the
signal analyzers consult. Scores are additive: every matching rule
contributes its weight and the caller clamps the total to [0, 100].
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class WeightedPattern:
    """A compiled regex rule contributing a fixed weight when it matches.

    Attributes:
        name: Rule name, reported in signal breakdowns.
        pattern: Compiled regex.
        weight: Points added (or subtracted, if negative) on a match.
        match_type: How to apply: 'prefix' (re.match) or 'contains' (re.search).
    """

    name: str
    pattern: re.Pattern[str]
    weight: int
    match_type: str = "contains"  # "prefix" | "contains"

    def matches(self, text: str) -> bool:
        if self.match_type == "prefix":
            return self.pattern.match(text) is not None
        return self.pattern.search(text) is not None


def weighted_score(text: str, rules: list[WeightedPattern]) -> tuple[int, list[str]]:
    """Sum the weights of every rule matching *text*.

    Args:
        text: Line text to score.
        rules: Rule table to apply.

    Returns:
        Tuple of (unclamped score, names of matching rules).
    """
    score = 0
    matched: list[str] = []
    for rule in rules:
        if rule.matches(text):
            score += rule.weight
            matched.append(rule.name)
    return score, matched


def clamp(score: int) -> int:
    """Clamp a score to the [0, 100] confidence range."""
    return max(0, min(100, score))


# -----------------------------------------------------------------
# Code signals
# -----------------------------------------------------------------

CODE_RULES: list[WeightedPattern] = [
    WeightedPattern(
        name="query_keyword",
        pattern=re.compile(
            r"^(SELECT|FROM|WHERE|AND|OR|ORDER\s+BY|GROUP\s+BY|HAVING|LIMIT|"
            r"INSERT|UPDATE|DELETE|UPSERT|MERGE|VALUES|SET|JOIN|INNER\s+JOIN|"
            r"LEFT\s+JOIN|UNION|WITH)\b"
        ),
        weight=45,
        match_type="prefix",
    ),
    WeightedPattern(
        name="select_from",
        pattern=re.compile(r"\bSELECT\b.+\bFROM\b"),
        weight=30,
    ),
    WeightedPattern(
        name="declaration_keyword",
        pattern=re.compile(
            r"^(public|private|protected|static|final|class|interface|def|"
            r"function|return|import|package|var|let|const|trigger|"
            r"if\s*\(|for\s*\(|while\s*\(|try\s*\{|catch\s*\(|else\s*\{|"
            r"from\s+[\w.]+\s+import)\b"
        ),
        weight=30,
        match_type="prefix",
    ),
    WeightedPattern(
        name="closing_brace",
        pattern=re.compile(r"^[})\]]+[;,)]*$"),
        weight=35,
        match_type="prefix",
    ),
    WeightedPattern(
        name="brace_line_end",
        pattern=re.compile(r"[{};]\s*$"),
        weight=20,
    ),
    WeightedPattern(
        name="method_call",
        pattern=re.compile(r"\b[A-Za-z_]\w*\.[A-Za-z_]\w*\([^)]*\)"),
        weight=25,
    ),
    WeightedPattern(
        name="assignment",
        pattern=re.compile(
            r"^(?:[A-Za-z_][\w<>,\[\]]*\s+)?[A-Za-z_][\w.]*\s*(?:=|\+=|-=|:=)\s*[^=\s]"
        ),
        weight=20,
        match_type="prefix",
    ),
    WeightedPattern(
        name="annotation",
        pattern=re.compile(r"^@[A-Za-z]\w*"),
        weight=30,
        match_type="prefix",
    ),
    WeightedPattern(
        name="comment_marker",
        pattern=re.compile(r"^(//|/\*|\*/|--\s|#!)"),
        weight=30,
        match_type="prefix",
    ),
    WeightedPattern(
        name="platform_suffix",
        pattern=re.compile(r"\b\w+__(c|r|mdt|e|x|b|s)\b"),
        weight=25,
    ),
    WeightedPattern(
        name="record_id_literal",
        pattern=re.compile(r"'[0-9a-zA-Z]{15}(?:[0-9a-zA-Z]{3})?'"),
        weight=15,
    ),
    WeightedPattern(
        name="prose_sentence",
        pattern=re.compile(r"^[A-Z][a-z]+(?:\s+\S+){7,}[.!?]$"),
        weight=-25,
        match_type="prefix",
    ),
]

# Characters counted as structural punctuation
STRUCTURAL_CHARS = frozenset("{}()[];=<>")

# -----------------------------------------------------------------
# Heading signals
# -----------------------------------------------------------------

# Explicit numeric heading prefixes, deepest first
HEADING_LEVEL_PATTERNS: list[tuple[int, re.Pattern[str]]] = [
    (3, re.compile(r"^\d+\.\d+\.\d+\.?\s+(?=[A-Z])(?P<text>.+)$")),
    (2, re.compile(r"^\d+\.\d+\.?\s+(?=[A-Z])(?P<text>.+)$")),
    (1, re.compile(r"^\d+\.\s+(?=[A-Z])(?P<text>.+)$")),
]

HEADING_KEYWORDS: tuple[str, ...] = (
    "Introduction",
    "Summary",
    "Executive Summary",
    "Final Summary",
    "Overview",
    "Conclusion",
    "Conclusions",
    "Background",
    "Recommendations",
    "Next Steps",
    "Purpose",
    "Scope",
    "Objectives",
    "Requirements",
    "Approach",
    "Findings",
    "Key Findings",
    "Results",
    "Assumptions",
    "Risks",
    "Prerequisites",
    "Implementation",
    "Architecture",
    "Solution",
    "Problem Statement",
    "Action Items",
    "Timeline",
    "Deliverables",
    "Appendix",
    "References",
    "Glossary",
)

_KEYWORD_LOOKUP = {k.lower() for k in HEADING_KEYWORDS}

# Leading nouns that mark a sub-topic heading (level 2)
SUB_TOPIC_RE = re.compile(
    r"^(Example|Screen|Step|Phase|Part|Section|Case|Scenario|Stage|Option|Use\s+Case)\b",
    re.IGNORECASE,
)

# Short "Label: value" lines
LABEL_VALUE_RE = re.compile(r"^[A-Z][\w /&-]{0,24}:\s+\S.{0,40}$")

SENTENCE_END_RE = re.compile(r"[.!?,;]$")

# Words ignored when measuring title case
MINOR_WORDS = frozenset(
    {"a", "an", "the", "of", "and", "or", "for", "to", "in", "on", "at", "by", "with", "vs"}
)


def keyword_exact(text: str) -> bool:
    """True if *text* is a structural keyword, alone or as a 'Keyword:' prefix."""
    lowered = text.strip().lower()
    if lowered in _KEYWORD_LOOKUP:
        return True
    head, sep, _ = lowered.partition(":")
    return bool(sep) and head.strip() in _KEYWORD_LOOKUP


def keyword_contained(text: str) -> bool:
    """True if any structural keyword appears as a whole word in *text*."""
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(k)}\b", lowered) for k in _KEYWORD_LOOKUP)


# -----------------------------------------------------------------
# List signals
# -----------------------------------------------------------------

NUMBERED_ITEM_RE = re.compile(r"^(?P<number>\d+)[.)]\s+(?P<text>.+)$")

# Primary bullet glyphs; '-', '*' and en dash need a following space
BULLET_MARKER_RE = re.compile(r"^(?:[•●■▪►➢✓]\s*|[-*–]\s+)(?P<text>.+)$")

# Secondary (nested) bullet glyphs
SUB_BULLET_MARKER_RE = re.compile(r"^(?:[◦○▫□‣⁃]\s*|o\s+)(?P<text>.+)$")

# Labels that read as a bullet without any glyph
BULLET_LABEL_PREFIXES: tuple[str, ...] = ("Result:",)

LIST_INTRO_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\bfollowing\s*:", re.IGNORECASE),
    re.compile(r"\binclud(?:e|es|ing)\s*:", re.IGNORECASE),
    re.compile(r"\bsuch\s+as\b", re.IGNORECASE),
    re.compile(r"\bas\s+follows\b", re.IGNORECASE),
    re.compile(r":\s*$"),
]

STATUS_WORDS = frozenset(
    {
        "missing", "invalid", "duplicate", "incorrect", "incomplete", "failed",
        "unused", "broken", "deprecated", "outdated", "unsupported", "pending",
        "blocked", "resolved", "open", "closed", "error", "warning", "no", "not",
    }
)

IMPERATIVE_VERBS = frozenset(
    {
        "add", "apply", "avoid", "check", "click", "configure", "confirm",
        "create", "define", "delete", "deploy", "disable", "document", "edit",
        "enable", "ensure", "enter", "install", "keep", "log", "navigate",
        "open", "remove", "replace", "review", "run", "save", "set", "test",
        "update", "use", "validate", "verify",
    }
)

QUESTION_WORDS = frozenset({"what", "why", "how", "when", "where", "who", "which"})

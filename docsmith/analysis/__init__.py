"""Signal analyzers and rule tables for line classification.

Pure scoring functions over lines: header, code and bullet
probabilities, list-introduction detection and the deterministic
numeric-heading and list-marker matchers.
"""

from docsmith.analysis.patterns import WeightedPattern, clamp, weighted_score
from docsmith.analysis.signals import (
    Signal,
    bullet_marker,
    bullet_signal,
    code_signal,
    header_signal,
    heading_override,
    is_list_intro,
    line_code_signal,
    numbered_item,
    sub_bullet_marker,
    title_case_ratio,
)

__all__ = [
    "Signal",
    "WeightedPattern",
    "bullet_marker",
    "bullet_signal",
    "clamp",
    "code_signal",
    "header_signal",
    "heading_override",
    "is_list_intro",
    "line_code_signal",
    "numbered_item",
    "sub_bullet_marker",
    "title_case_ratio",
    "weighted_score",
]

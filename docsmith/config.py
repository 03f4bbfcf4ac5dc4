"""
Classifier configuration.

All thresholds used by the signal analyzers, the segmentation scan and
the post-processor live here as named, overridable values.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass
class ClassifierConfig:
    """Thresholds and windows for line classification."""

    # Code detection
    code_start_threshold: int = 60  # Open a code block
    code_continue_threshold: int = 40  # Keep an open block going
    code_bridge_threshold: int = 50  # Line after a short connector line
    code_single_line_threshold: int = 80  # Keep a one-line block
    code_bridge_max_length: int = 20  # "Short" connector line inside a block
    code_context_window: int = 2  # Lines either side checked for context
    code_context_min_lines: int = 2  # Code-like neighbours needed for the bonus
    code_context_bonus: int = 15

    # Heading detection
    header_threshold: int = 70
    header_previous_threshold: int = 50  # Previous line counts as a header
    sub_caption_max_length: int = 30  # Level-3 sub-caption length bound

    # Bullet inference
    bullet_threshold: int = 60
    bullet_max_length: int = 120
    list_intro_window: int = 5  # Lines after an intro treated as list context
    short_line_length: int = 60

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ClassifierConfig:
        """Build a config from a partial mapping; unknown keys are ignored."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: int(v) for k, v in data.items() if k in known and v is not None})

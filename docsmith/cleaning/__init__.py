"""Line normalization for extracted text.

Splits raw or markup-derived text into trimmed, non-empty lines that
remember their original position.
"""

from docsmith.cleaning.normalizer import (
    LineNormalizer,
    NormalizationResult,
    html_to_text,
    normalize_lines,
)

__all__ = [
    "LineNormalizer",
    "NormalizationResult",
    "html_to_text",
    "normalize_lines",
]

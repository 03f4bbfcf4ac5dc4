"""Segmentation of normalized lines into typed content items.

The Segmenter performs the single stateful scan; the PostProcessor
applies one corrective pass; ``classify_text`` chains normalization,
segmentation and correction.
"""

from docsmith.segmentation.classifier import Classification, classify_lines, classify_text
from docsmith.segmentation.engine import ScanState, Segmenter
from docsmith.segmentation.postprocess import PostProcessor, PostProcessResult

__all__ = [
    "Classification",
    "PostProcessResult",
    "PostProcessor",
    "ScanState",
    "Segmenter",
    "classify_lines",
    "classify_text",
]

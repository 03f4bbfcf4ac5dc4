"""
docsmith - turn loosely formatted documents into house-styled Word files.

Classifies the lines of extracted text into headings, paragraphs,
bullets, numbered items and code blocks, then renders them with a
fixed typographic style, title page and table of contents.
"""

__version__ = "0.1.0"

from docsmith.config import ClassifierConfig
from docsmith.core.document import (
    Bullet,
    CodeBlock,
    ContentItem,
    ContentStats,
    Heading,
    Line,
    NumberedItem,
    Paragraph,
    SubBullet,
)
from docsmith.pipeline import DocumentFormatter, FormatResult, output_filename
from docsmith.segmentation import classify_lines, classify_text
from docsmith.styles import FrontMatter

__all__ = [
    "__version__",
    "Bullet",
    "ClassifierConfig",
    "CodeBlock",
    "ContentItem",
    "ContentStats",
    "DocumentFormatter",
    "FormatResult",
    "FrontMatter",
    "Heading",
    "Line",
    "NumberedItem",
    "Paragraph",
    "SubBullet",
    "classify_lines",
    "classify_text",
    "output_filename",
]

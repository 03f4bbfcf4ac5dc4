"""Source document loaders.

Importing this package registers every built-in loader with the
LoaderRegistry.
"""

from docsmith.loaders.base import (
    MODE_RAW,
    MODE_STRUCTURED,
    BaseLoader,
    ExtractedText,
    LoaderRegistry,
)
from docsmith.loaders.docx import DocxLoader
from docsmith.loaders.html import HtmlLoader
from docsmith.loaders.text import TextLoader, decode_text

__all__ = [
    "MODE_RAW",
    "MODE_STRUCTURED",
    "BaseLoader",
    "DocxLoader",
    "ExtractedText",
    "HtmlLoader",
    "LoaderRegistry",
    "TextLoader",
    "decode_text",
]

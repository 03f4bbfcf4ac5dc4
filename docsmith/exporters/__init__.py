"""Layout exporters.

Importing this package registers the built-in exporters.
"""

from docsmith.exporters.base import BaseExporter, ExporterRegistry
from docsmith.exporters.docx_builder import DocxExporter
from docsmith.exporters.layout_json import LayoutJSONExporter

__all__ = [
    "BaseExporter",
    "DocxExporter",
    "ExporterRegistry",
    "LayoutJSONExporter",
]

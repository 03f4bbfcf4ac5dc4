"""
JSON exporter for assembled layouts.

Writes the layout entries with their resolved styles, which is useful
for inspecting classification and styling decisions without opening
a Word document.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import ClassVar

from docsmith.exporters.base import BaseExporter, ExporterRegistry
from docsmith.styles.layout import LayoutEntry


@ExporterRegistry.register
class LayoutJSONExporter(BaseExporter):
    """Export layout entries as a JSON array."""

    EXPORTER_NAME: ClassVar[str] = "json"
    FILE_EXTENSION: ClassVar[str] = ".json"

    def render(self, entries: Sequence[LayoutEntry]) -> bytes:
        records = [entry.to_dict() for entry in entries]
        return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")

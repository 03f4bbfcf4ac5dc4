"""
Base exporter class and registry.

Exporters render an assembled layout (see docsmith.styles.layout) into
an output format and register themselves with the ExporterRegistry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

from docsmith.styles.layout import LayoutEntry


class BaseExporter(ABC):
    """
    Abstract base class for layout exporters.

    Exporters render in memory; writing to disk is a thin wrapper.
    """

    EXPORTER_NAME: ClassVar[str] = "base"
    FILE_EXTENSION: ClassVar[str] = ""

    @abstractmethod
    def render(self, entries: Sequence[LayoutEntry]) -> bytes:
        """
        Render layout entries to the output format.

        Args:
            entries: Ordered layout entries

        Returns:
            Encoded document bytes
        """
        pass

    def export(self, entries: Sequence[LayoutEntry], path: Path) -> Path:
        """
        Render layout entries and write them to a file.

        Args:
            entries: Ordered layout entries
            path: Output file path

        Returns:
            Path to exported file
        """
        path = self._ensure_extension(path)
        path.write_bytes(self.render(entries))
        return path

    def _ensure_extension(self, path: Path) -> Path:
        """Ensure the path has the correct extension."""
        if path.suffix.lower() != self.FILE_EXTENSION.lower():
            return path.with_suffix(self.FILE_EXTENSION)
        return path


class ExporterRegistry:
    """Registry of available exporters."""

    _exporters: ClassVar[dict[str, type[BaseExporter]]] = {}

    @classmethod
    def register(cls, exporter_class: type[BaseExporter]) -> type[BaseExporter]:
        """Register an exporter class."""
        cls._exporters[exporter_class.EXPORTER_NAME] = exporter_class
        return exporter_class

    @classmethod
    def get_exporter(cls, name: str) -> BaseExporter | None:
        """Get an exporter by name."""
        exporter_class = cls._exporters.get(name)
        if exporter_class:
            return exporter_class()
        return None

    @classmethod
    def available_exporters(cls) -> list[str]:
        """Get list of available exporter names."""
        return list(cls._exporters.keys())

    @classmethod
    def render(cls, entries: Sequence[LayoutEntry], format: str) -> bytes:
        """Render layout entries using the specified format."""
        exporter = cls.get_exporter(format)
        if exporter is None:
            available = ", ".join(cls.available_exporters())
            raise ValueError(f"Unknown export format: {format}. Available: {available}")
        return exporter.render(entries)

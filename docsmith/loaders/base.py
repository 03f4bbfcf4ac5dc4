"""
Base loader class and registry for text extraction.

Every loader extracts text in two modes: a structure-preserving mode
(block elements on their own lines, list items prefixed with a bullet
glyph) and a raw-text fallback. The fallback runs only when the
structured mode fails; if both fail an ExtractionError is raised.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from docsmith.errors import ExtractionError

logger = logging.getLogger(__name__)

MODE_STRUCTURED = "structured"
MODE_RAW = "raw"


@dataclass
class ExtractedText:
    """Text pulled out of a source document.

    Attributes:
        text: Extracted multi-line text.
        mode: "structured" or "raw" (fallback).
        source_name: File name of the source.
        warnings: Non-fatal problems met during extraction.
    """

    text: str
    mode: str
    source_name: str
    warnings: list[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.mode == MODE_RAW

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "source_name": self.source_name,
            "warnings": self.warnings,
            "characters": len(self.text),
        }


class BaseLoader(ABC):
    """
    Abstract base class for text extraction loaders.

    Each loader is responsible for:
    1. Detecting if it can handle a file type
    2. Extracting structure-preserving text
    3. Extracting raw text when the structured mode fails
    """

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = []
    LOADER_NAME: ClassVar[str] = "base"

    def __init__(self) -> None:
        self._warnings: list[str] = []

    @classmethod
    def can_load(cls, name: str | Path) -> bool:
        """Check if this loader can handle the given file name."""
        return Path(name).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @abstractmethod
    def _extract_structured(self, data: bytes) -> str:
        """Extract text keeping block and list structure."""

    @abstractmethod
    def _extract_raw(self, data: bytes) -> str:
        """Extract plain text with no structural hints."""

    def load_bytes(self, data: bytes, source_name: str = "document") -> ExtractedText:
        """
        Extract text from in-memory document bytes.

        Args:
            data: Raw file contents.
            source_name: File name, for messages.

        Returns:
            ExtractedText in structured mode, or raw mode after a fallback.

        Raises:
            ExtractionError: If both modes fail.
        """
        self._reset_messages()

        try:
            text = self._extract_structured(data)
            return ExtractedText(text, MODE_STRUCTURED, source_name, list(self._warnings))
        except Exception as exc:
            logger.warning(
                "Structured extraction of %s failed (%s); falling back to raw text",
                source_name,
                exc,
            )
            self._add_warning(f"Structured extraction failed: {exc}")
            structured_error = exc

        try:
            text = self._extract_raw(data)
        except Exception as exc:
            raise ExtractionError(
                f"Failed to extract text from {source_name}",
                source_name=source_name,
                details=f"structured: {structured_error}; raw: {exc}",
            ) from exc

        return ExtractedText(text, MODE_RAW, source_name, list(self._warnings))

    def load(self, path: Path) -> ExtractedText:
        """Extract text from a file on disk."""
        if not path.exists():
            raise ExtractionError(f"File not found: {path}", source_name=path.name)
        if not self.can_load(path):
            raise ExtractionError(
                f"Unsupported file type: {path.suffix}",
                source_name=path.name,
                details=f"Supported types: {', '.join(self.SUPPORTED_EXTENSIONS)}",
            )
        return self.load_bytes(path.read_bytes(), source_name=path.name)

    @property
    def warnings(self) -> list[str]:
        """Get any warnings from the last extraction."""
        return self._warnings

    def _add_warning(self, warning: str) -> None:
        self._warnings.append(warning)

    def _reset_messages(self) -> None:
        self._warnings = []


class LoaderRegistry:
    """
    Registry of available loaders.

    Use this to automatically select the appropriate loader for a file.
    """

    _loaders: ClassVar[list[type[BaseLoader]]] = []

    @classmethod
    def register(cls, loader_class: type[BaseLoader]) -> type[BaseLoader]:
        """
        Register a loader class. Can be used as a decorator.

        @LoaderRegistry.register
        class MyLoader(BaseLoader):
            ...
        """
        if loader_class not in cls._loaders:
            cls._loaders.append(loader_class)
        return loader_class

    @classmethod
    def get_loader(cls, name: str | Path) -> BaseLoader | None:
        """Get an appropriate loader for the given file name."""
        for loader_class in cls._loaders:
            if loader_class.can_load(name):
                return loader_class()
        return None

    @classmethod
    def get_loader_by_name(cls, name: str) -> type[BaseLoader] | None:
        """Get a loader class by its name."""
        for loader_class in cls._loaders:
            if loader_class.LOADER_NAME == name:
                return loader_class
        return None

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Get all supported file extensions, sorted."""
        extensions: set[str] = set()
        for loader_class in cls._loaders:
            extensions.update(loader_class.SUPPORTED_EXTENSIONS)
        return sorted(extensions)

    @classmethod
    def load_bytes(cls, data: bytes, source_name: str) -> ExtractedText:
        """
        Extract text using the loader matching ``source_name``.

        Raises:
            ExtractionError: If no loader is available or extraction fails
        """
        loader = cls.get_loader(source_name)
        if loader is None:
            supported = ", ".join(cls.supported_extensions())
            raise ExtractionError(
                f"No loader available for file type: {Path(source_name).suffix}",
                source_name=source_name,
                details=f"Supported types: {supported}",
            )
        return loader.load_bytes(data, source_name=source_name)

    @classmethod
    def load(cls, path: Path) -> ExtractedText:
        """Extract text from a file using the matching loader."""
        loader = cls.get_loader(path)
        if loader is None:
            supported = ", ".join(cls.supported_extensions())
            raise ExtractionError(
                f"No loader available for file type: {path.suffix}",
                source_name=path.name,
                details=f"Supported types: {supported}",
            )
        return loader.load(path)

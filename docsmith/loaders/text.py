"""
Plain text extraction.

Text needs no structural parsing; the two modes differ only in how
strictly the bytes are decoded.
"""

from __future__ import annotations

from typing import ClassVar

from docsmith.loaders.base import BaseLoader, LoaderRegistry

FALLBACK_ENCODINGS = ["cp1252", "latin-1"]


def decode_text(data: bytes) -> tuple[str, str]:
    """Decode bytes as UTF-8, falling back to single-byte encodings.

    Args:
        data: Raw file contents.

    Returns:
        Tuple of (decoded text, encoding used).
    """
    try:
        return data.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError:
        pass

    for encoding in FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding), encoding
        except UnicodeDecodeError:
            continue

    # latin-1 maps every byte, so this is unreachable in practice
    raise UnicodeDecodeError("utf-8", data, 0, len(data), "no supported encoding")


@LoaderRegistry.register
class TextLoader(BaseLoader):
    """Load plain text and Markdown documents."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".txt", ".text", ".md"]
    LOADER_NAME: ClassVar[str] = "text"

    def _extract_structured(self, data: bytes) -> str:
        return data.decode("utf-8-sig")

    def _extract_raw(self, data: bytes) -> str:
        text, encoding = decode_text(data)
        self._add_warning(f"Used fallback encoding: {encoding}")
        return text

"""
HTML text extraction using BeautifulSoup.

Structured mode flattens block elements onto their own lines and marks
list items; raw mode falls back to newline-joined text nodes.
"""

from __future__ import annotations

from typing import ClassVar

from bs4 import BeautifulSoup

from docsmith.cleaning.normalizer import html_to_text
from docsmith.loaders.base import BaseLoader, LoaderRegistry
from docsmith.loaders.text import decode_text


@LoaderRegistry.register
class HtmlLoader(BaseLoader):
    """Load HTML documents and fragments."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".html", ".htm"]
    LOADER_NAME: ClassVar[str] = "html"

    def _extract_structured(self, data: bytes) -> str:
        return html_to_text(self._decode(data))

    def _extract_raw(self, data: bytes) -> str:
        soup = BeautifulSoup(self._decode(data), "html.parser")
        return soup.get_text("\n")

    def _decode(self, data: bytes) -> str:
        markup, encoding = decode_text(data)
        warning = f"Used fallback encoding: {encoding}"
        if encoding != "utf-8" and warning not in self._warnings:
            self._add_warning(warning)
        return markup

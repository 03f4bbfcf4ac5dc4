"""Error types and user-facing error formatting for docsmith.

Extraction and document-building failures are raised as typed
exceptions carrying technical details; ErrorFormatter turns any caught
exception into a message and suggestion that is safe to show users.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass
from typing import Any


class DocsmithError(Exception):
    """Base exception for docsmith errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "details": self.details}


class ExtractionError(DocsmithError):
    """Raised when no extraction mode could read the source document."""

    def __init__(
        self,
        message: str,
        source_name: str | None = None,
        details: str | None = None,
    ) -> None:
        self.source_name = source_name
        super().__init__(message, details)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source_name": self.source_name,
            "details": self.details,
        }


class DocumentBuildError(DocsmithError):
    """Raised when the output document could not be produced."""


class ValidationError(DocsmithError):
    """Raised when user-provided input is rejected."""


@dataclass
class UserFriendlyError:
    """A structured error designed for end-user consumption.

    Attributes:
        message: Clear description for the user.
        suggestion: Actionable guidance.
        error_code: Machine-readable identifier (e.g. "EXTR_002").
        technical_detail: Debugging info for logs only, never shown to users.
    """

    message: str
    suggestion: str
    error_code: str
    technical_detail: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize for API responses (excludes technical_detail)."""
        return {
            "message": self.message,
            "suggestion": self.suggestion,
            "error_code": self.error_code,
        }


class ErrorFormatter:
    """Convert internal exceptions to user-friendly messages."""

    def format_extraction_error(self, error: Exception) -> UserFriendlyError:
        """Format a failure to read the uploaded document."""
        return self._format(error, code_prefix="EXTR")

    def format_build_error(self, error: Exception) -> UserFriendlyError:
        """Format a failure to produce the formatted document."""
        return self._format(error, code_prefix="BUILD")

    def format_validation_error(self, error: Exception) -> UserFriendlyError:
        """Format rejected user input."""
        return self._format(error, code_prefix="INPUT")

    def _format(self, error: Exception, *, code_prefix: str) -> UserFriendlyError:
        message, suggestion, code_suffix = _classify_error(error)
        return UserFriendlyError(
            message=message,
            suggestion=suggestion,
            error_code=f"{code_prefix}_{code_suffix}",
            technical_detail=repr(error),
        )


def _classify_error(error: Exception) -> tuple[str, str, str]:
    """Map an exception to (message, suggestion, code_suffix).

    Args:
        error: The caught exception.

    Returns:
        Tuple of user message, suggestion text, and error code suffix.
    """
    if isinstance(error, ValidationError):
        return (
            str(error),
            "Check the input values and try again.",
            "001",
        )
    if isinstance(error, ExtractionError):
        return (
            "The document could not be read.",
            "Make sure the file is a valid, unencrypted Word document.",
            "002",
        )
    if isinstance(error, zipfile.BadZipFile):
        return (
            "The file is not a valid Word document.",
            "Re-save the file as .docx and upload it again.",
            "003",
        )
    if isinstance(error, DocumentBuildError):
        return (
            "The formatted document could not be generated.",
            "Try again. If the problem persists, report the issue with the source file.",
            "004",
        )
    if isinstance(error, MemoryError):
        return (
            "The system ran out of memory.",
            "Split the document into smaller parts.",
            "005",
        )
    if isinstance(error, ValueError):
        return (
            "Invalid input was provided.",
            "Check the input values and try again.",
            "006",
        )
    return (
        "An unexpected error occurred.",
        "If this keeps happening, please report the issue.",
        "999",
    )

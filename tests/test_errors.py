"""Tests for error types and user-facing formatting."""

from __future__ import annotations

import zipfile

from docsmith.errors import (
    DocumentBuildError,
    ErrorFormatter,
    ExtractionError,
    UserFriendlyError,
    ValidationError,
)


class TestErrors:
    """Tests for the exception types."""

    def test_extraction_error_to_dict(self) -> None:
        """Test serialization."""
        err = ExtractionError("Failed", source_name="a.docx", details="bad zip")
        assert err.to_dict() == {"error": "Failed", "source_name": "a.docx", "details": "bad zip"}

    def test_build_error_to_dict(self) -> None:
        """Test serialization."""
        assert DocumentBuildError("Nope").to_dict() == {"error": "Nope", "details": None}


class TestErrorFormatter:
    """Tests for ErrorFormatter."""

    def test_extraction(self) -> None:
        """Extraction failures get an EXTR code."""
        err = ErrorFormatter().format_extraction_error(ExtractionError("x"))
        assert err.error_code == "EXTR_002"
        assert "could not be read" in err.message

    def test_bad_zip(self) -> None:
        """Invalid archives have their own code."""
        err = ErrorFormatter().format_extraction_error(zipfile.BadZipFile("bad"))
        assert err.error_code == "EXTR_003"

    def test_build(self) -> None:
        """Build failures get a BUILD code."""
        err = ErrorFormatter().format_build_error(DocumentBuildError("x"))
        assert err.error_code == "BUILD_004"

    def test_validation_message_passes_through(self) -> None:
        """Validation messages are shown as-is."""
        err = ErrorFormatter().format_validation_error(ValidationError("Document title is required"))
        assert err.message == "Document title is required"
        assert err.error_code == "INPUT_001"

    def test_value_error(self) -> None:
        """Plain ValueErrors are invalid input."""
        err = ErrorFormatter().format_validation_error(ValueError("int"))
        assert err.error_code == "INPUT_006"

    def test_unknown(self) -> None:
        """Anything else is unexpected."""
        err = ErrorFormatter().format_build_error(RuntimeError("boom"))
        assert err.error_code == "BUILD_999"
        assert "boom" in err.technical_detail

    def test_to_dict_hides_detail(self) -> None:
        """Technical detail never reaches users."""
        d = UserFriendlyError("m", "s", "C_1", technical_detail="secret").to_dict()
        assert "technical_detail" not in d
        assert d == {"message": "m", "suggestion": "s", "error_code": "C_1"}

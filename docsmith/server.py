"""FastAPI server for docsmith.

Endpoints are registered on an ``APIRouter`` so that a host application
can mount them with ``include_router(router)``. The standalone ``app``
includes the router directly::

    uvicorn docsmith.server:app --reload --port 8430
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal
from urllib.parse import quote

from fastapi import APIRouter, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from docsmith import __version__
from docsmith.config import ClassifierConfig
from docsmith.errors import (
    DocumentBuildError,
    ErrorFormatter,
    ExtractionError,
    ValidationError,
)
from docsmith.pipeline import DocumentFormatter
from docsmith.segmentation.classifier import classify_text
from docsmith.styles.layout import FrontMatter

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SUMMARY_HEADER = "X-Docsmith-Summary"

router = APIRouter()

app = FastAPI(
    title="docsmith API",
    description="Classify extracted document text and render house-styled Word documents",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", SUMMARY_HEADER],
)

_formatter = ErrorFormatter()


# ============================================================================
# Pydantic Models for API
# ============================================================================


class ClassifyRequest(BaseModel):
    """Request model for classifying text."""

    text: str
    format: Literal["text", "html"] = "text"
    config: dict[str, Any] | None = None


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/api/health")
async def health() -> dict[str, Any]:
    """Liveness check."""
    return {"status": "ok", "version": __version__}


@router.post("/api/classify")
async def classify(request: ClassifyRequest) -> dict[str, Any]:
    """Classify text into content items without rendering a document."""
    try:
        config = ClassifierConfig.from_dict(request.config)
    except (TypeError, ValueError) as e:
        logger.exception("Rejected classifier config")
        raise HTTPException(
            status_code=400,
            detail=_formatter.format_validation_error(e).to_dict(),
        ) from e

    classification = classify_text(request.text, config, markup=request.format == "html")
    return classification.to_dict()


@router.post("/api/format")
async def format_document(
    file: UploadFile = File(...),
    title: str = Form(""),
    organization: str = Form(""),
    version: str = Form("1.0"),
    author: str | None = Form(None),
    include_toc: bool = Form(True),
) -> Response:
    """Format an uploaded document and return the .docx.

    Args:
        file: Source document (.docx, .html, .txt, .md)
        title: Document title, required
        organization: Organization line on the title page
        version: Version label
        author: Optional author for the version line
        include_toc: Emit a table of contents page
    """
    content = await file.read()
    source_name = Path(file.filename or "document").name
    front = FrontMatter(
        title=title,
        organization=organization,
        version=version or "1.0",
        author=author or None,
        include_toc=include_toc,
    )

    try:
        result = DocumentFormatter().format_bytes(content, source_name, front)
    except ValidationError as e:
        logger.exception("Rejected format request for %s", source_name)
        raise HTTPException(
            status_code=400,
            detail=_formatter.format_validation_error(e).to_dict(),
        ) from e
    except ExtractionError as e:
        logger.exception("Extraction failed for %s", source_name)
        raise HTTPException(
            status_code=422,
            detail=_formatter.format_extraction_error(e).to_dict(),
        ) from e
    except DocumentBuildError as e:
        logger.exception("Document build failed for %s", source_name)
        raise HTTPException(
            status_code=500,
            detail=_formatter.format_build_error(e).to_dict(),
        ) from e

    headers = {
        "Content-Disposition": f"attachment; filename*=UTF-8''{quote(result.filename)}",
        SUMMARY_HEADER: result.summary,
    }
    return Response(content=result.content, media_type=DOCX_MEDIA_TYPE, headers=headers)


# ============================================================================
# Mount router on the standalone app
# ============================================================================

app.include_router(router)


# ============================================================================
# Main Entry Point
# ============================================================================


def run_server(host: str = "127.0.0.1", port: int = 8430) -> None:
    """Run the docsmith server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    run_server()

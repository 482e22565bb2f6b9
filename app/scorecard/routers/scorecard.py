"""
Router for scorecard analysis endpoints.

Handles:
- Multipart scorecard submission and analysis
- Static endpoint metadata
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..models import AnalysisResult, EndpointInfoResponse, ErrorResponse
from ..services.content_extractor import PDF_CONTENT_TYPE
from ..services.exceptions import ScorecardError, UnhandledError
from ..services.intake import collect_submission
from ..services.scorecard_service import ScorecardService, get_scorecard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scorecard"])


@router.post(
    "/analyze-scorecard",
    response_model=AnalysisResult,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or files"},
        500: {"model": ErrorResponse, "description": "Configuration, upstream or parse failure"},
    },
)
async def analyze_scorecard(
    service: Annotated[ScorecardService, Depends(get_scorecard_service)],
    provider_name: Annotated[str, Form(alias="providerName")] = "",
    reporting_month: Annotated[str, Form(alias="reportingMonth")] = "",
    reporting_year: Annotated[str, Form(alias="reportingYear")] = "",
    files: Annotated[list[UploadFile] | None, File(description="Scorecard PDFs and images")] = None,
) -> AnalysisResult:
    """
    Analyze an uploaded provider scorecard.

    Extracts text from PDFs, attaches images, asks the model for structured
    measures and returns the normalized result. The provider identity in the
    response is always the one submitted here.
    """
    try:
        submission = await collect_submission(
            provider_name, reporting_month, reporting_year, files
        )
        return await service.analyze(submission)

    except ScorecardError:
        raise
    except Exception as e:
        logger.exception("Unexpected error analyzing scorecard")
        raise UnhandledError("Unhandled server error", details=str(e)) from e


@router.get("/analyze-scorecard", response_model=EndpointInfoResponse)
async def analyze_scorecard_info() -> EndpointInfoResponse:
    """Describe the analyze-scorecard endpoint."""
    return EndpointInfoResponse(
        endpoint="/api/analyze-scorecard",
        method="POST",
        description="Extract provider performance measures from scorecard PDFs and images",
        form_fields=["providerName", "reportingMonth", "reportingYear"],
        file_field="files",
        accepted_content_types=[PDF_CONTENT_TYPE, "image/*"],
        response_fields=["provider", "measures", "narrative"],
    )

"""
Collection of the multipart submission into a SubmissionRequest.
"""

import logging

from fastapi import UploadFile

from ..models import SubmissionRequest, UploadedFile
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


async def read_upload(upload: UploadFile) -> UploadedFile:
    """Read an UploadFile into memory and close it."""
    try:
        data = await upload.read()
    finally:
        await upload.close()

    return UploadedFile(
        filename=upload.filename or "",
        content_type=upload.content_type or "",
        data=data,
    )


async def collect_submission(
    provider_name: str | None,
    reporting_month: str | None,
    reporting_year: str | None,
    files: list[UploadFile] | None,
) -> SubmissionRequest:
    """
    Validate the form fields and read the uploaded files.

    Raises:
        ValidationError: If an identity field is blank or no file was sent.
    """
    provider_name = (provider_name or "").strip()
    reporting_month = (reporting_month or "").strip()
    reporting_year = (reporting_year or "").strip()
    uploads = [f for f in files or [] if f is not None]

    if not provider_name or not reporting_month or not reporting_year:
        raise ValidationError("Missing required fields")
    if not uploads:
        raise ValidationError("No files uploaded")

    submission = SubmissionRequest(
        provider_name=provider_name,
        reporting_month=reporting_month,
        reporting_year=reporting_year,
        files=[await read_upload(f) for f in uploads],
    )
    logger.info(
        "Received scorecard for %s (%s %s) with %d file(s)",
        provider_name,
        reporting_month,
        reporting_year,
        len(submission.files),
    )
    return submission

"""
Pydantic models for the scorecard analysis pipeline.

Defines the submission received from the caller, the intermediate content
extracted from uploaded files, and the normalized analysis result returned
to the caller. Wire-facing models serialize with camelCase keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Submission Models
# =============================================================================


class UploadedFile(BaseModel):
    """A single file received in the multipart submission."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="", description="Original filename")
    content_type: str = Field(default="", description="Declared MIME type")
    data: bytes = Field(..., description="Raw file content")


class SubmissionRequest(BaseModel):
    """
    A validated scorecard submission.

    Attributes:
        provider_name: Provider the scorecard belongs to.
        reporting_month: Reporting month as entered by the caller.
        reporting_year: Reporting year as entered by the caller.
        files: Uploaded scorecard files, in submission order.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    provider_name: str = Field(..., min_length=1)
    reporting_month: str = Field(..., min_length=1)
    reporting_year: str = Field(..., min_length=1)
    files: list[UploadedFile] = Field(..., min_length=1)


# =============================================================================
# Extracted Content Models
# =============================================================================


class EncodedImage(BaseModel):
    """An image ready to be attached to a multimodal request."""

    mime_type: str
    base64_data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


class ExtractedContent(BaseModel):
    """Text and images pulled out of a submission's files."""

    combined_text: str = ""
    images: list[EncodedImage] = Field(default_factory=list)


# =============================================================================
# Analysis Result Models
# =============================================================================


class ProviderSummary(CamelModel):
    """
    Provider identity and volume metrics.

    The identity fields are always overwritten with the values the caller
    submitted. Additional keys returned by the model are passed through.
    """

    model_config = ConfigDict(extra="allow")

    provider_name: str = ""
    reporting_month: str = ""
    reporting_year: str = ""
    current_encounters: int | float | None = None
    prior_encounters: int | float | None = None
    awvs_completed: int | float | None = None
    awvs_goal: int | float | None = None
    tocs_completed: int | float | None = None
    tocs_goal: int | float | None = None


class Measure(CamelModel):
    """A quality measure with its numerator and denominator."""

    name: str = Field(..., min_length=1, description="Display name without coding annotations")
    numerator: int | float = 0
    denominator: int | float = 0


class Priority(CamelModel):
    """A single coaching priority: title (t) and description (d)."""

    model_config = ConfigDict(extra="allow")

    t: str | None = ""
    d: str | None = ""


class Narrative(CamelModel):
    """
    Coaching narrative, passed through from the model.

    Three priorities are requested but not enforced. Unknown keys and nulls
    are kept; a priorities value that is not a list of objects is returned
    as-is.
    """

    model_config = ConfigDict(extra="allow")

    why: str | None = ""
    how: str | None = ""
    priorities: list[Priority] | Any = Field(default_factory=list, union_mode="left_to_right")


class AnalysisResult(CamelModel):
    """Normalized result returned by POST /api/analyze-scorecard."""

    provider: ProviderSummary
    measures: list[Measure] = Field(default_factory=list)
    narrative: Narrative = Field(default_factory=Narrative)


# =============================================================================
# API Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str = Field(default="")


class EndpointInfoResponse(BaseModel):
    """Static description of the analyze-scorecard endpoint."""

    endpoint: str
    method: str
    description: str
    form_fields: list[str]
    file_field: str
    accepted_content_types: list[str]
    response_fields: list[str]

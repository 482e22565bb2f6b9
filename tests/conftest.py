"""Pytest configuration and fixtures."""

import json
from types import SimpleNamespace
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.scorecard.main import app
from app.scorecard.models import SubmissionRequest, UploadedFile
from app.scorecard.services.ai import AIService
from app.scorecard.services.content_extractor import ContentExtractor
from app.scorecard.services.pdf_service import PDFService
from app.scorecard.services.scorecard_service import (
    ScorecardService,
    get_scorecard_service,
)


def make_response(text: str) -> SimpleNamespace:
    """Build an object shaped like an OpenAI Responses API result."""
    return SimpleNamespace(
        output=[
            SimpleNamespace(
                type="message",
                content=[SimpleNamespace(type="output_text", text=text)],
            )
        ],
        output_text=text,
    )


class FakeResponses:
    """Stands in for ``AsyncOpenAI().responses``."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeOpenAIClient:
    def __init__(self, response: Any = None, error: Exception | None = None):
        self.responses = FakeResponses(response, error)


class StubPDFService(PDFService):
    """PDFService returning canned text keyed by file content."""

    def __init__(self, texts: dict[bytes, str] | None = None, pages: int = 1):
        super().__init__()
        self.texts = texts or {}
        self.pages = pages

    def extract_text(self, pdf_bytes: bytes) -> str:
        return self.texts.get(pdf_bytes, "")

    def convert_pdf_to_images(self, pdf_bytes: bytes) -> list[Image.Image]:
        return [Image.new("RGB", (10, 10), color="white") for _ in range(self.pages)]


def build_service(
    client: Any = None,
    pdf_texts: dict[bytes, str] | None = None,
    api_key: str | None = "test-key",
) -> ScorecardService:
    """Build a ScorecardService wired to fakes."""
    return ScorecardService(
        ai_service=AIService(api_key=api_key, client=client),
        content_extractor=ContentExtractor(StubPDFService(pdf_texts)),
    )


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_service():
    """Install a ScorecardService for the analyze endpoint."""

    def _install(service: ScorecardService) -> ScorecardService:
        app.dependency_overrides[get_scorecard_service] = lambda: service
        return service

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def model_payload() -> dict[str, Any]:
    """A well-formed model output."""
    return {
        "provider": {
            "providerName": "Model Invented Name",
            "reportingMonth": "January",
            "reportingYear": "1999",
            "currentEncounters": 120,
            "priorEncounters": 110,
            "awvsCompleted": 30,
            "awvsGoal": 40,
            "tocsCompleted": 5,
            "tocsGoal": 8,
        },
        "measures": [
            {"name": "A1c Control (NQF 0059)", "numerator": 45, "denominator": 60},
        ],
        "narrative": {
            "why": "Diabetes control is below goal.",
            "how": "Schedule follow-up visits.",
            "priorities": [
                {"t": "A1c", "d": "Recall patients overdue for testing."},
                {"t": "AWV", "d": "Book annual wellness visits."},
                {"t": "TOC", "d": "Call patients within 2 days of discharge."},
            ],
        },
    }


@pytest.fixture
def model_response(model_payload: dict[str, Any]) -> SimpleNamespace:
    return make_response(json.dumps(model_payload))


@pytest.fixture
def submission() -> SubmissionRequest:
    return SubmissionRequest(
        provider_name="Acme Clinic",
        reporting_month="March",
        reporting_year="2024",
        files=[
            UploadedFile(filename="card.pdf", content_type="application/pdf", data=b"%PDF-1"),
        ],
    )


@pytest.fixture
def form_fields() -> dict[str, str]:
    return {
        "providerName": "Acme Clinic",
        "reportingMonth": "March",
        "reportingYear": "2024",
    }


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Test) Tj
ET
endstream
endobj
xref
0 5
0000000000 65535 f 
0000000009 00000 n 
0000000058 00000 n 
0000000115 00000 n 
0000000214 00000 n 
trailer
<< /Size 5 /Root 1 0 R >>
startxref
306
%%EOF"""
    return pdf_content

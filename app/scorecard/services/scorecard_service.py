"""
Scorecard analysis pipeline.

Runs Collect -> Extract -> Build Prompt -> Infer -> Normalize for a single
submission. No stage is retried; the first failure propagates.
"""

import logging

from ..config import Settings, get_settings
from ..models import AnalysisResult, SubmissionRequest
from .ai import AIService, build_user_text
from .content_extractor import ContentExtractor
from .normalizer import normalize_result
from .pdf_service import PDFService

logger = logging.getLogger(__name__)


class ScorecardService:
    """Extracts provider performance measures from a scorecard submission."""

    def __init__(self, ai_service: AIService, content_extractor: ContentExtractor):
        self.ai_service = ai_service
        self.content_extractor = content_extractor

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScorecardService":
        """Build the service and its collaborators from application settings."""
        return cls(
            ai_service=AIService(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                temperature=settings.openai_temperature,
                timeout=settings.openai_timeout,
            ),
            content_extractor=ContentExtractor(
                PDFService(dpi=settings.pdf_dpi),
                rasterize_scanned_pdfs=settings.rasterize_scanned_pdfs,
            ),
        )

    def check_configured(self) -> None:
        """Raise ConfigurationError if the OpenAI credential is missing."""
        self.ai_service.check_configured()

    async def analyze(self, submission: SubmissionRequest) -> AnalysisResult:
        """
        Run the full pipeline for one submission.

        Args:
            submission: Validated submission with at least one file.

        Returns:
            The normalized AnalysisResult.

        Raises:
            ConfigurationError: If the OpenAI credential is missing.
            UpstreamError: If the OpenAI call fails.
            ParseError: If the model output is not valid analysis JSON.
        """
        self.check_configured()
        logger.info("Analyzing scorecard for %s", submission.provider_name)

        content = await self.content_extractor.extract(submission.files)
        user_text = build_user_text(submission, content.combined_text)
        raw_text = await self.ai_service.complete(user_text, content.images)
        return normalize_result(raw_text, submission)


_scorecard_service: ScorecardService | None = None


def get_scorecard_service() -> ScorecardService:
    """Get or create the scorecard service singleton."""
    global _scorecard_service
    if _scorecard_service is None:
        _scorecard_service = ScorecardService.from_settings(get_settings())
    return _scorecard_service

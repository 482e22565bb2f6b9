"""
Services package for scorecard analysis.

Contains:
- intake: Form validation and file collection
- content_extractor: PDF text and image extraction
- pdf_service: pdfplumber / pdf2image utilities
- ai: OpenAI integration
- normalizer: Model output normalization
- scorecard_service: The end-to-end pipeline
"""

from .pdf_service import PDFService
from .scorecard_service import ScorecardService, get_scorecard_service

__all__ = ["PDFService", "ScorecardService", "get_scorecard_service"]

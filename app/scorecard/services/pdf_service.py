"""
PDF processing service.

Extracts plain text from scorecard PDFs with pdfplumber and, for scanned
documents without a text layer, renders pages to PIL Images with pdf2image
(poppler) so they can be sent to the vision model.
"""

import io
import logging

import pdfplumber
from PIL import Image

logger = logging.getLogger(__name__)


class PDFConversionError(Exception):
    """Raised when a PDF cannot be read."""

    pass


# Readers accept leading bytes before the header within this window
PDF_HEADER_WINDOW = 1024


def _validate_pdf_bytes(pdf_bytes: bytes) -> None:
    if not pdf_bytes:
        raise PDFConversionError("Empty PDF file provided")

    if b"%PDF" not in pdf_bytes[:PDF_HEADER_WINDOW]:
        raise PDFConversionError(
            "Invalid PDF file: no PDF header in the first 1024 bytes"
        )


class PDFService:
    """
    Service for PDF processing operations.

    Text extraction uses pdfplumber (pdfminer.six); page rendering uses
    pdf2image, backed by poppler.
    """

    def __init__(self, dpi: int = 200, image_format: str = "PNG"):
        """
        Initialize the PDF service.

        Args:
            dpi: Resolution for PDF to image conversion. Higher = better quality but slower.
            image_format: Output image format (PNG recommended for quality).
        """
        self.dpi = dpi
        self.image_format = image_format

    def extract_text(self, pdf_bytes: bytes) -> str:
        """
        Extract the text layer of every page, joined by newlines.

        Args:
            pdf_bytes: PDF file content.

        Returns:
            The extracted text. Empty if the PDF has no text layer.

        Raises:
            PDFConversionError: If the content is empty or not a PDF.
        """
        _validate_pdf_bytes(pdf_bytes)

        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]

        text = "\n".join(pages)
        logger.info(
            "Extracted %d characters from %d page(s)", len(text), len(pages)
        )
        return text

    def convert_pdf_to_images(self, pdf_bytes: bytes) -> list[Image.Image]:
        """
        Convert PDF pages to PIL Images.

        Args:
            pdf_bytes: PDF file content.

        Returns:
            List of PIL Image objects, one per page.

        Raises:
            PDFConversionError: If conversion fails for any reason.
        """
        try:
            # Import here to provide clear error if poppler not installed
            from pdf2image import convert_from_bytes
            from pdf2image.exceptions import (
                PDFInfoNotInstalledError,
                PDFPageCountError,
                PDFSyntaxError,
            )
        except ImportError as e:
            logger.error("pdf2image not installed: %s", e)
            raise PDFConversionError(
                "pdf2image library not installed. Run: pip install pdf2image"
            ) from e

        _validate_pdf_bytes(pdf_bytes)

        try:
            logger.info("Rendering PDF pages to images (dpi=%d)", self.dpi)
            images = convert_from_bytes(
                pdf_bytes,
                dpi=self.dpi,
                fmt=self.image_format.lower(),
                thread_count=2,
            )
            logger.info("Successfully rendered %d page(s)", len(images))
            return images

        except PDFInfoNotInstalledError as e:
            logger.error("Poppler not installed: %s", e)
            raise PDFConversionError(
                "Poppler not installed. Install poppler-utils: "
                "brew install poppler (macOS) or apt-get install poppler-utils (Linux)"
            ) from e

        except PDFPageCountError as e:
            logger.error("Could not get PDF page count: %s", e)
            raise PDFConversionError(
                f"Could not determine PDF page count: {e}"
            ) from e

        except PDFSyntaxError as e:
            logger.error("PDF syntax error: %s", e)
            raise PDFConversionError(f"Invalid or corrupted PDF file: {e}") from e

    def image_to_bytes(self, image: Image.Image) -> bytes:
        """
        Encode a PIL Image in the service's image format.

        Args:
            image: PIL Image to convert.

        Returns:
            Image as bytes.
        """
        buffer = io.BytesIO()
        image.save(buffer, format=self.image_format)
        return buffer.getvalue()

    @property
    def mime_type(self) -> str:
        return f"image/{self.image_format.lower()}"

"""
Content extraction from uploaded scorecard files.

PDFs contribute labeled text blocks; images are base64-encoded for the
vision model. Files are processed concurrently but their output keeps the
submission order.
"""

import asyncio
import base64
import logging

from ..models import EncodedImage, ExtractedContent, UploadedFile
from .pdf_service import PDFService

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
NO_TEXT_PLACEHOLDER = "[No readable text extracted]"


def _encode_image(data: bytes, mime_type: str) -> EncodedImage:
    return EncodedImage(
        mime_type=mime_type,
        base64_data=base64.b64encode(data).decode("utf-8"),
    )


def pdf_text_block(filename: str, text: str) -> str:
    """Label a PDF's text, substituting a placeholder when it is blank."""
    body = text if text and text.strip() else NO_TEXT_PLACEHOLDER
    return f"\n\n--- PDF: {filename} ---\n{body}"


class ContentExtractor:
    """
    Turns uploaded files into the text and images sent to the model.

    Args:
        pdf_service: Service used to read PDF text and render pages.
        rasterize_scanned_pdfs: Attach rendered pages of PDFs that have no
            text layer as images.
    """

    def __init__(self, pdf_service: PDFService, rasterize_scanned_pdfs: bool = False):
        self.pdf_service = pdf_service
        self.rasterize_scanned_pdfs = rasterize_scanned_pdfs

    async def extract(self, files: list[UploadedFile]) -> ExtractedContent:
        """
        Extract content from every file, preserving submission order.

        Args:
            files: Uploaded files in the order they were submitted.

        Returns:
            ExtractedContent with the concatenated PDF text and the images.
        """
        parts = await asyncio.gather(*(self._extract_file(f) for f in files))

        content = ExtractedContent()
        for text, images in parts:
            content.combined_text += text
            content.images.extend(images)

        logger.info(
            "Extracted %d characters of text and %d image(s) from %d file(s)",
            len(content.combined_text),
            len(content.images),
            len(files),
        )
        return content

    async def _extract_file(
        self, file: UploadedFile
    ) -> tuple[str, list[EncodedImage]]:
        content_type = file.content_type.lower()

        if content_type == PDF_CONTENT_TYPE:
            return await asyncio.to_thread(self._extract_pdf, file)

        if content_type.startswith("image/"):
            return "", [_encode_image(file.data, content_type)]

        logger.debug(
            "Ignoring %s with unsupported content type %r", file.filename, content_type
        )
        return "", []

    def _extract_pdf(self, file: UploadedFile) -> tuple[str, list[EncodedImage]]:
        text = self.pdf_service.extract_text(file.data)
        images: list[EncodedImage] = []

        if not text.strip():
            logger.warning("No readable text in PDF %s", file.filename)
            if self.rasterize_scanned_pdfs:
                pages = self.pdf_service.convert_pdf_to_images(file.data)
                images = [
                    _encode_image(
                        self.pdf_service.image_to_bytes(page),
                        self.pdf_service.mime_type,
                    )
                    for page in pages
                ]

        return pdf_text_block(file.filename, text), images

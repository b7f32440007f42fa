"""
OCR service: recognise the text in an uploaded image with Tesseract.
"""

import asyncio
from typing import Optional

import pytesseract
from PIL import Image

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class OCRError(Exception):
    """Raised when an image cannot be read or Tesseract fails."""
    pass


class OCRService:
    """
    Extracts text from images using Tesseract.

    Tesseract is a blocking subprocess call, so the async entry point runs it
    in a worker thread.

    Example:
        >>> ocr = OCRService()
        >>> text = await ocr.extract_text("uploads/1718035200123.png")
    """

    def __init__(self, language: Optional[str] = None, tesseract_cmd: Optional[str] = None):
        self.language = language or settings.OCR_LANGUAGE
        cmd = tesseract_cmd or settings.TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    async def extract_text(self, image_path: str) -> str:
        """Asynchronously extract text from the image at image_path."""
        return await asyncio.to_thread(self._extract_text_sync, image_path)

    def _extract_text_sync(self, image_path: str) -> str:
        logger.info("ocr_started", path=image_path, language=self.language)
        try:
            with Image.open(image_path) as image:
                text = pytesseract.image_to_string(image, lang=self.language)
        except Exception as e:
            # Decompression bombs and tesseract timeouts count as OCR failures too
            logger.error("ocr_failed", path=image_path, error=str(e), error_type=type(e).__name__)
            raise OCRError(f"OCR failed for {image_path}: {e}") from e

        logger.info("ocr_completed", path=image_path, chars=len(text), preview=text[:100])
        return text


def get_ocr_service() -> OCRService:
    """FastAPI dependency returning an OCRService."""
    return OCRService()

"""
OCR WORKER
----------
On-device text recognition for label photos via Tesseract.

OcrWorker is an explicitly owned handle: the engine is checked lazily on the
first call and released with close() (or by leaving a ``with`` block). Nothing
is cached at module level, so each caller owns its own worker.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, ImageOps

from config import OCR_LANGUAGE

logger = logging.getLogger(__name__)


class OcrError(RuntimeError):
    """Raised when text cannot be extracted from an image."""
    pass


class OcrWorker:
    def __init__(self, language: str = OCR_LANGUAGE, config: str = ""):
        self.language = language
        self.config = config
        self._version: Optional[str] = None
        self._closed = False

    @property
    def started(self) -> bool:
        return self._version is not None

    def _ensure_started(self) -> None:
        if self._closed:
            raise OcrError("OCR worker has been closed")
        if self._version is None:
            try:
                self._version = str(pytesseract.get_tesseract_version())
            except pytesseract.TesseractNotFoundError as e:
                raise OcrError("Tesseract is not installed or not on PATH") from e
            logger.info("OCR worker started (tesseract %s, lang=%s)", self._version, self.language)

    def extract_text(self, image_bytes: bytes) -> str:
        """Return the trimmed text recognized in ``image_bytes``."""
        self._ensure_started()
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                prepared = ImageOps.exif_transpose(img).convert("L")
                text = pytesseract.image_to_string(prepared, lang=self.language, config=self.config)
        except Exception as e:
            raise OcrError("Failed to extract text from image") from e
        return text.strip()

    def close(self) -> None:
        if self._version is not None:
            logger.info("OCR worker closed")
        self._version = None
        self._closed = True

    def __enter__(self) -> "OcrWorker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

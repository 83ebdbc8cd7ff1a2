"""
Central configuration for the label scanner.

This module defines:
- Hosted model settings (provider base URL, model name, sampling limits).
- The environment variable holding the API credential.
- Limits applied at the UI boundary (raw text preview, upload size).
- Logging format shared by entry points.

All values are constants and should be imported where needed (no runtime logic here).
"""

from __future__ import annotations

import os


API_KEY_ENV = os.getenv("LABEL_SCANNER_API_KEY_ENV", "OPENROUTER_API_KEY")

DEFAULT_BASE_URL = os.getenv("LABEL_SCANNER_BASE_URL", "https://openrouter.ai/api/v1")
DEFAULT_MODEL = os.getenv("LABEL_SCANNER_MODEL", "openai/gpt-4o-mini")
DEFAULT_TEMPERATURE = 0.3
IMAGE_MAX_TOKENS = 1000
HTTP_REFERER = "https://localhost:3000"

RAW_TEXT_PREVIEW_CHARS = 1000
MAX_IMAGE_SIZE_MB = 10
DEFAULT_IMAGE_MIME = "image/png"

OCR_LANGUAGE = "eng"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

from .settings import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_IMAGE_MIME,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    HTTP_REFERER,
    IMAGE_MAX_TOKENS,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    MAX_IMAGE_SIZE_MB,
    OCR_LANGUAGE,
    RAW_TEXT_PREVIEW_CHARS,
)

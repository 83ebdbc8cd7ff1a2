"""
Model gateway: one chat-completion call against the hosted model.

This module loads environment variables (via dotenv) and exposes ModelGateway,
which owns an OpenAI-compatible client pointed at the configured provider.
There is no shared client: every gateway creates its own on first use and
releases it in close().

Failures are translated into the GatewayError hierarchy from the transport's
status and error codes. No retries happen here.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from openai import APIConnectionError, APITimeoutError, OpenAI

from config import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    HTTP_REFERER,
    IMAGE_MAX_TOKENS,
)

from .errors import (
    AuthenticationFailure,
    ConfigurationError,
    EmptyResponse,
    GatewayError,
    QuotaExceeded,
    ServiceUnavailable,
    UpstreamError,
)

load_dotenv()

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODES = frozenset({"insufficient_quota", "RESOURCE_EXHAUSTED", "rate_limit_exceeded"})


class GatewayMode(str, Enum):
    TEXT = "text"
    IMAGE = "image"


def resolve_api_key(api_key: Optional[str] = None) -> Optional[str]:
    """Return the explicit key, else the one from the environment; blank counts as missing."""
    if api_key is None:
        api_key = os.getenv(API_KEY_ENV)
    api_key = (api_key or "").strip()
    return api_key or None


def classify_upstream_error(exc: BaseException) -> GatewayError:
    """Map a transport exception to a GatewayError using its status/error code."""
    if isinstance(exc, GatewayError):
        return exc

    status = getattr(exc, "status_code", None)
    code = getattr(exc, "code", None)
    message = str(exc) or exc.__class__.__name__

    if status in (401, 403):
        return AuthenticationFailure(message, status_code=status, code=code)
    if status in (402, 429) or code in QUOTA_ERROR_CODES:
        return QuotaExceeded(message, status_code=status, code=code)
    if status == 404:
        return ServiceUnavailable(message, status_code=status, code=code)
    if isinstance(exc, APITimeoutError):
        return UpstreamError(f"Model call timed out: {message}", code="timeout")
    if isinstance(exc, APIConnectionError):
        return UpstreamError(f"Could not reach model provider: {message}", code="connection_error")
    return UpstreamError(message, status_code=status, code=code)


class ModelGateway:
    """
    Thin wrapper around ``chat.completions.create``.

    Args:
        api_key: Provider credential; missing or blank raises ConfigurationError
            before any client is built.
        model: Model name in the provider's format.
        base_url: OpenAI-compatible endpoint.
        timeout: Optional request timeout in seconds, imposed by the caller.
        client: Pre-built client (tests, custom transports). Not closed by the gateway.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                f"API key is required. Set {API_KEY_ENV} or pass api_key explicitly."
            )
        self.api_key = api_key.strip()
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> Any:
        if self._client is None:
            kwargs: Dict[str, Any] = {
                "api_key": self.api_key,
                "base_url": self.base_url,
                "default_headers": {"HTTP-Referer": HTTP_REFERER},
            }
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = OpenAI(**kwargs)
        return self._client

    def complete(self, messages: List[Dict[str, Any]], mode: GatewayMode = GatewayMode.TEXT) -> str:
        """Send one request and return the raw response text (expected to be JSON)."""
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
            "temperature": DEFAULT_TEMPERATURE,
        }
        if mode is GatewayMode.IMAGE:
            request["max_tokens"] = IMAGE_MAX_TOKENS

        logger.info("Calling %s (%s mode)", self.model, mode.value)
        try:
            response = self.client.chat.completions.create(**request)
        except Exception as e:
            raise classify_upstream_error(e) from e

        choices = getattr(response, "choices", None) or []
        raw_output = choices[0].message.content if choices else None
        if not raw_output or not raw_output.strip():
            raise EmptyResponse("Model returned an empty response")

        logger.debug("Raw model output: %s", raw_output)
        return raw_output

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ModelGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

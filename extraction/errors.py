"""
Error taxonomy for the extraction pipeline.

Only ConfigurationError is meant to reach callers. Every GatewayError carries
the FailureKind it maps to, so the pipeline can turn it into a ScanOutcome.
"""

from __future__ import annotations

from domain.outcome import FailureKind


class ConfigurationError(RuntimeError):
    """Raised when the API credential is missing; no network call is made."""
    pass


class GatewayError(RuntimeError):
    """Base class for failures of the hosted model call."""

    kind: FailureKind = FailureKind.UPSTREAM_ERROR

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class AuthenticationFailure(GatewayError):
    kind = FailureKind.AUTHENTICATION_FAILURE


class QuotaExceeded(GatewayError):
    kind = FailureKind.QUOTA_EXCEEDED


class ServiceUnavailable(GatewayError):
    kind = FailureKind.SERVICE_UNAVAILABLE


class EmptyResponse(GatewayError):
    kind = FailureKind.EMPTY_RESPONSE


class UpstreamError(GatewayError):
    kind = FailureKind.UPSTREAM_ERROR


class MalformedJson(ValueError):
    """Raised when the model output cannot be read as a JSON object."""
    pass


class SchemaValidationWarning(UserWarning):
    """Logged when strict validation fails and best-effort extraction takes over."""
    pass

"""
Scan outcome: the record plus how the scan went.

Every public extraction entry point returns a ScanOutcome instead of raising,
so the UI can pick an advisory message from ``failure`` without inspecting
exception text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .product import ProductRecord


class FailureKind(str, Enum):
    AUTHENTICATION_FAILURE = "auth_failed"
    QUOTA_EXCEEDED = "quota_exceeded"
    SERVICE_UNAVAILABLE = "model_not_found"
    EMPTY_RESPONSE = "empty_response"
    PARSING_FAILED = "parsing_failed"
    UPSTREAM_ERROR = "upstream_error"


@dataclass(frozen=True)
class ScanOutcome:
    record: ProductRecord = field(default_factory=ProductRecord)
    failure: Optional[FailureKind] = None
    source_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

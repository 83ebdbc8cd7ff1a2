from .errors import (
    AuthenticationFailure,
    ConfigurationError,
    EmptyResponse,
    GatewayError,
    MalformedJson,
    QuotaExceeded,
    SchemaValidationWarning,
    ServiceUnavailable,
    UpstreamError,
)
from .llm_client import GatewayMode, ModelGateway, classify_upstream_error, resolve_api_key
from .shape import GroupKey, classify_shape, flatten_grouped, normalize_shape
from .to_canonical import (
    empty_outcome,
    extract_from_image,
    extract_from_text,
    has_meaningful_data,
    parse_llm_response,
    scan_image,
    scan_text,
)
from .validation import ValidationResult, best_effort_extract, strict_validate, validate_record

"""Core request pipeline: validation, request building, transport, errors, mapping."""

from upstage_adapter.core.api_client import UpstageApiClient, create_client
from upstage_adapter.core.errors import (
    ApiReportedError,
    ErrorCode,
    ItemProcessingError,
    StreamingNotImplementedError,
    UnknownError,
    UpstageApiError,
    classify_error,
    create_error_response,
    log_error,
    normalize_error,
)
from upstage_adapter.core.pipeline import (
    AbortOnFail,
    ChatCompletionPipeline,
    ContinueOnFail,
    FailurePolicy,
    create_pipeline,
    policy_for,
)
from upstage_adapter.core.request_builder import (
    build_chat_request_body,
    build_embedding_request_body,
    build_response_format,
)
from upstage_adapter.core.response_mapper import map_chat_response
from upstage_adapter.core.validation import (
    parse_chat_options,
    parse_messages,
    validate_field_type,
    validate_json_schema,
    validate_message_role,
    validate_messages,
    validate_model_support,
    validate_range,
    validate_required_field,
)

__all__ = [
    "UpstageApiClient",
    "create_client",
    "ApiReportedError",
    "ErrorCode",
    "ItemProcessingError",
    "StreamingNotImplementedError",
    "UnknownError",
    "UpstageApiError",
    "classify_error",
    "create_error_response",
    "log_error",
    "normalize_error",
    "AbortOnFail",
    "ChatCompletionPipeline",
    "ContinueOnFail",
    "FailurePolicy",
    "create_pipeline",
    "policy_for",
    "build_chat_request_body",
    "build_embedding_request_body",
    "build_response_format",
    "map_chat_response",
    "parse_chat_options",
    "parse_messages",
    "validate_field_type",
    "validate_json_schema",
    "validate_message_role",
    "validate_messages",
    "validate_model_support",
    "validate_range",
    "validate_required_field",
]

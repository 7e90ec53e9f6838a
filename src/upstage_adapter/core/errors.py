"""Canonical error type and normalization of arbitrary failures into it."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

import httpx

from upstage_adapter.utils import ErrorSink, get_logger

logger = get_logger(__name__)


class ErrorCode(StrEnum):
    """Stable error codes surfaced to callers."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_MESSAGE_ROLE = "invalid_message_role"
    INVALID_JSON_SCHEMA = "invalid_json_schema"
    API_REQUEST_FAILED = "api_request_failed"
    MODEL_NOT_SUPPORTED = "model_not_supported"
    INVALID_FIELD_TYPE = "invalid_field_type"
    EMPTY_ARRAY = "empty_array"
    EMPTY_STRING = "empty_string"
    VALUE_OUT_OF_RANGE = "value_out_of_range"


# Codes detected locally, before any network call
VALIDATION_CODES = frozenset(
    {
        ErrorCode.MISSING_REQUIRED_FIELD,
        ErrorCode.INVALID_MESSAGE_ROLE,
        ErrorCode.INVALID_JSON_SCHEMA,
        ErrorCode.MODEL_NOT_SUPPORTED,
        ErrorCode.INVALID_FIELD_TYPE,
        ErrorCode.EMPTY_ARRAY,
        ErrorCode.EMPTY_STRING,
        ErrorCode.VALUE_OUT_OF_RANGE,
    }
)


class UpstageApiError(Exception):
    """The single error shape that leaves the core.

    Attributes:
        message: Human readable description
        code: Stable error code (an ``ErrorCode`` value or an upstream code)
        status_code: HTTP status reported upstream, if any
        context: Label of the operation that failed
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.API_REQUEST_FAILED,
        status_code: int | None = None,
        context: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = str(code)
        self.status_code = status_code
        self.context = context

    @property
    def is_validation_error(self) -> bool:
        """Whether the error was raised before any network call."""
        return self.code in VALIDATION_CODES

    def to_dict(self) -> dict[str, Any]:
        """Serialize the four canonical fields."""
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "context": self.context,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpstageApiError):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r}, context={self.context!r})"
        )


class StreamingNotImplementedError(UpstageApiError, NotImplementedError):
    """Raised by the streaming chat variant, which is not supported."""

    MESSAGE = "Streaming not yet implemented"

    def __init__(self, context: str = "StreamChatCompletions") -> None:
        super().__init__(self.MESSAGE, ErrorCode.API_REQUEST_FAILED, None, context)


class ItemProcessingError(UpstageApiError):
    """Canonical error that aborted a multi-item run."""

    def __init__(self, error: UpstageApiError, item_index: int) -> None:
        super().__init__(
            f"Upstage Solar LLM failed for item {item_index}: {error.message}",
            error.code,
            error.status_code,
            error.context,
        )
        self.item_index = item_index


@dataclass(frozen=True)
class ApiReportedError:
    """A failure reported by the API or transport with a message and maybe a code."""

    message: str
    code: str | None = None
    status_code: int | None = None


@dataclass(frozen=True)
class UnknownError:
    """A failure of unrecognized shape."""

    cause: object


ErrorVariant = UpstageApiError | ApiReportedError | UnknownError


def _status_error_variant(exc: httpx.HTTPStatusError) -> ApiReportedError:
    response = exc.response
    message = response.reason_phrase or f"HTTP {response.status_code}"
    code = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        detail = body.get("error", body)
        if isinstance(detail, Mapping):
            message = detail.get("message") or message
            code = detail.get("code") or None
        elif isinstance(detail, str) and detail:
            message = detail
    return ApiReportedError(message=str(message), code=code, status_code=response.status_code)


def _duck_typed_variant(error: object) -> ApiReportedError | None:
    if isinstance(error, Mapping):
        if "code" in error and "message" in error:
            status = error.get("status_code", error.get("statusCode"))
            return ApiReportedError(
                message=str(error["message"]),
                code=error["code"] or None,
                status_code=status if isinstance(status, int) else None,
            )
        return None
    if hasattr(error, "code") and hasattr(error, "message"):
        status = getattr(error, "status_code", getattr(error, "statusCode", None))
        return ApiReportedError(
            message=str(error.message),
            code=error.code or None,
            status_code=status if isinstance(status, int) else None,
        )
    return None


def classify_error(error: object) -> ErrorVariant:
    """Sort an arbitrary failure into one of the known variants.

    Args:
        error: Anything raised (or returned) by a failing operation

    Returns:
        The canonical error itself, an ``ApiReportedError`` or an ``UnknownError``
    """
    if isinstance(error, (UpstageApiError, ApiReportedError, UnknownError)):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        return _status_error_variant(error)
    if isinstance(error, httpx.RequestError):
        return ApiReportedError(message=str(error) or error.__class__.__name__)
    return _duck_typed_variant(error) or UnknownError(cause=error)


def normalize_error(error: object, context: str) -> UpstageApiError:
    """Convert any failure into the canonical error.

    Already-canonical errors are returned unchanged.

    Args:
        error: Failure to convert
        context: Label of the operation that failed, e.g. "ChatCompletions"

    Returns:
        Canonical error carrying message, code, status and context
    """
    variant = classify_error(error)
    if isinstance(variant, UpstageApiError):
        return variant
    if isinstance(variant, ApiReportedError):
        return UpstageApiError(
            f"{context}: {variant.message}",
            variant.code or ErrorCode.API_REQUEST_FAILED,
            variant.status_code,
            context,
        )
    return UpstageApiError(
        f"{context}: Unknown error occurred",
        ErrorCode.API_REQUEST_FAILED,
        None,
        context,
    )


def _error_code(error: object) -> str:
    variant = classify_error(error)
    if isinstance(variant, UpstageApiError):
        return variant.code
    if isinstance(variant, ApiReportedError) and variant.code:
        return str(variant.code)
    return ErrorCode.API_REQUEST_FAILED.value


def _error_message(error: object) -> str:
    if isinstance(error, (UpstageApiError, ApiReportedError)):
        return error.message
    if isinstance(error, Exception):
        return str(error) or error.__class__.__name__
    return "Unknown error"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_error(
    error: object,
    context: str,
    item_index: int | None = None,
    sink: ErrorSink | None = None,
) -> None:
    """Report a failure without ever raising.

    Args:
        error: Failure to report
        context: Label of the operation that failed
        item_index: Index of the item being processed, if any
        sink: Optional event sink, defaults to the module logger
    """
    emit = sink if sink is not None else logger.error
    try:
        emit(
            "api.error",
            error=_error_message(error),
            error_code=_error_code(error),
            item_index=item_index,
            context=context,
            timestamp=_timestamp(),
        )
    except Exception:  # noqa: BLE001
        # Reporting must not replace the failure being reported
        return


def create_error_response(
    error: object,
    context: str,
    item_index: int | None = None,
) -> dict[str, Any]:
    """Build the structured failure record used when failures are recorded per item.

    Args:
        error: Failure to describe
        context: Label of the operation that failed
        item_index: Index of the failed item, if any

    Returns:
        Record with error, error_code, status_code, context and timestamp
    """
    canonical = normalize_error(error, context)
    record: dict[str, Any] = {
        "error": canonical.message,
        "error_code": canonical.code,
        "status_code": canonical.status_code,
        "context": canonical.context,
        "timestamp": _timestamp(),
    }
    if item_index is not None:
        record["item_index"] = item_index
    return record

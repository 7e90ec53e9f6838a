"""Validation layer - rejects bad input before any network call."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from upstage_adapter.constants import MESSAGE_ROLES, OPTION_BOUNDS, VALIDATION_RULES
from upstage_adapter.core.errors import ErrorCode, UpstageApiError
from upstage_adapter.models import ChatOptions, Message


def validate_required_field(value: Any, field_name: str, context: str) -> None:
    """Fail with missing_required_field when value is None or empty string."""
    if value is None or value == "":
        raise UpstageApiError(
            f"{field_name} is required",
            ErrorCode.MISSING_REQUIRED_FIELD,
            None,
            context,
        )


def validate_field_type(
    value: Any,
    expected: type | tuple[type, ...],
    field_name: str,
    context: str,
) -> None:
    """Fail with invalid_field_type when value is not an instance of expected."""
    types = expected if isinstance(expected, tuple) else (expected,)
    # bool is an int subclass but only counts when asked for explicitly
    valid = isinstance(value, types) and not (isinstance(value, bool) and bool not in types)
    if not valid:
        names = ", ".join(t.__name__ for t in types)
        raise UpstageApiError(
            f"{field_name} must be of type {names}, got {type(value).__name__}",
            ErrorCode.INVALID_FIELD_TYPE,
            None,
            context,
        )


def validate_range(
    value: float,
    low: float,
    high: float,
    field_name: str,
    context: str,
) -> None:
    """Fail with value_out_of_range unless low <= value <= high."""
    if not low <= value <= high:
        raise UpstageApiError(
            f"{field_name} must be between {low} and {high}, got {value}",
            ErrorCode.VALUE_OUT_OF_RANGE,
            None,
            context,
        )


def validate_message_role(role: Any, context: str) -> None:
    """Fail with invalid_message_role for anything but system, user or assistant."""
    if role not in MESSAGE_ROLES:
        raise UpstageApiError(
            f"Invalid message role: {role}. Must be one of: {', '.join(MESSAGE_ROLES)}",
            ErrorCode.INVALID_MESSAGE_ROLE,
            None,
            context,
        )


def validate_message_content(content: Any, context: str) -> None:
    """Fail with empty_string when content is missing or whitespace-only."""
    if not isinstance(content, str) or not content.strip():
        raise UpstageApiError(
            "All messages must have non-empty content",
            ErrorCode.EMPTY_STRING,
            None,
            context,
        )


def validate_messages(messages: Sequence[Message | Mapping[str, Any]], context: str) -> None:
    """Check a candidate message list.

    Args:
        messages: Messages as models or raw mappings
        context: Label of the calling operation

    Raises:
        UpstageApiError: missing_required_field for an empty list,
            value_out_of_range for too many messages, empty_string for blank
            content, invalid_message_role for an unknown role
    """
    if not messages:
        raise UpstageApiError(
            "At least one message is required for chat completion",
            ErrorCode.MISSING_REQUIRED_FIELD,
            None,
            context,
        )
    max_messages = VALIDATION_RULES["max_messages"]
    if len(messages) > max_messages:
        raise UpstageApiError(
            f"At most {max_messages} messages are allowed, got {len(messages)}",
            ErrorCode.VALUE_OUT_OF_RANGE,
            None,
            context,
        )
    for message in messages:
        if isinstance(message, Message):
            role, content = message.role.value, message.content
        elif isinstance(message, Mapping):
            role, content = message.get("role"), message.get("content")
        else:
            raise UpstageApiError(
                f"Message must be a mapping, got {type(message).__name__}",
                ErrorCode.INVALID_FIELD_TYPE,
                None,
                context,
            )
        validate_message_content(content, context)
        validate_message_role(role, context)


def parse_messages(raw: Sequence[Mapping[str, Any]] | None, context: str) -> list[Message]:
    """Validate host-supplied message mappings and build Message objects."""
    messages = list(raw or [])
    validate_messages(messages, context)
    return [
        m if isinstance(m, Message) else Message(role=m["role"], content=m["content"])
        for m in messages
    ]


def validate_json_schema(schema: Any, context: str) -> dict[str, Any]:
    """Parse schema text into a JSON object.

    Raises:
        UpstageApiError: invalid_json_schema when the text is missing, does
            not parse, or is not a JSON object
    """
    if isinstance(schema, Mapping):
        return dict(schema)
    try:
        parsed = json.loads(schema)
    except (TypeError, ValueError) as exc:
        raise UpstageApiError(
            "Invalid JSON schema provided",
            ErrorCode.INVALID_JSON_SCHEMA,
            None,
            context,
        ) from exc
    if not isinstance(parsed, dict):
        raise UpstageApiError(
            "Invalid JSON schema provided",
            ErrorCode.INVALID_JSON_SCHEMA,
            None,
            context,
        )
    return parsed


def validate_model_support(model: str, supported_models: Sequence[str], context: str) -> None:
    """Fail with model_not_supported when model is not in supported_models.

    Only needed where the model arrives as a free-form string.
    """
    if model not in supported_models:
        raise UpstageApiError(
            f"Model '{model}' is not supported. Supported models: {', '.join(supported_models)}",
            ErrorCode.MODEL_NOT_SUPPORTED,
            None,
            context,
        )


def parse_chat_options(raw: ChatOptions | Mapping[str, Any] | None, context: str) -> ChatOptions:
    """Build ChatOptions from a host mapping, reporting problems as canonical errors.

    Wrong types, unknown enumerated values and unknown keys become
    invalid_field_type; values outside ``OPTION_BOUNDS`` become
    value_out_of_range. A json_schema response format with schema text
    that does not parse fails with invalid_json_schema.
    """
    if isinstance(raw, ChatOptions):
        options = raw
    else:
        try:
            options = ChatOptions.model_validate(dict(raw or {}))
        except ValidationError as exc:
            first = exc.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"]) or "options"
            raise UpstageApiError(
                f"Invalid option {field_name}: {first['msg']}",
                ErrorCode.INVALID_FIELD_TYPE,
                None,
                context,
            ) from exc

    for name, (low, high) in OPTION_BOUNDS.items():
        value = getattr(options, name)
        if value is not None:
            validate_range(value, low, high, name, context)

    if options.response_format == "json_schema":
        validate_json_schema(options.json_schema, context)
    return options

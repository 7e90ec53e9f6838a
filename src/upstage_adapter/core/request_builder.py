"""Request builder - assembles API payloads from validated input."""

from collections.abc import Sequence

from upstage_adapter.constants import SUPPORTED_EMBEDDING_MODELS, VALIDATION_RULES
from upstage_adapter.core.errors import ErrorCode, UpstageApiError
from upstage_adapter.core.validation import (
    validate_field_type,
    validate_json_schema,
    validate_model_support,
)
from upstage_adapter.models import (
    ChatOptions,
    ChatRequestBody,
    EmbeddingRequestBody,
    Message,
    ResponseFormat,
)


def build_response_format(options: ChatOptions, context: str) -> ResponseFormat | None:
    """Turn the response_format option into the object sent upstream.

    Args:
        options: Chat options
        context: Label of the calling operation

    Returns:
        None for text (or unset), otherwise the structured format
    """
    if options.response_format in (None, "text"):
        return None
    if options.response_format == "json_object":
        return ResponseFormat(type="json_object")
    schema = validate_json_schema(options.json_schema, context)
    return ResponseFormat(type="json_schema", json_schema=schema)


def build_chat_request_body(
    model: str,
    messages: Sequence[Message],
    options: ChatOptions | None = None,
    context: str = "ChatCompletions",
) -> ChatRequestBody:
    """Assemble a chat completion payload.

    Option fields are flattened onto the body. The raw json_schema text is
    never copied; it only feeds the structured response_format.

    Args:
        model: Model identifier
        messages: Validated messages, in order
        options: Tuning options
        context: Label of the calling operation

    Returns:
        Request body ready for the transport client
    """
    options = options or ChatOptions()
    flattened = options.model_dump(exclude={"json_schema", "response_format"}, exclude_none=True)
    return ChatRequestBody(
        model=model,
        messages=list(messages),
        response_format=build_response_format(options, context),
        **flattened,
    )


def build_embedding_request_body(
    model: str,
    input: str | Sequence[str],
    context: str = "Embeddings",
) -> EmbeddingRequestBody:
    """Assemble an embedding payload after checking model and inputs.

    Raises:
        UpstageApiError: model_not_supported, empty_string, empty_array or
            value_out_of_range
    """
    validate_model_support(model, SUPPORTED_EMBEDDING_MODELS, context)
    if isinstance(input, str):
        if not input.strip():
            raise UpstageApiError("Input text must not be empty", ErrorCode.EMPTY_STRING, None, context)
        return EmbeddingRequestBody(model=model, input=input)

    inputs = list(input)
    if not inputs:
        raise UpstageApiError("Input list must not be empty", ErrorCode.EMPTY_ARRAY, None, context)
    max_inputs = VALIDATION_RULES["max_embedding_inputs"]
    if len(inputs) > max_inputs:
        raise UpstageApiError(
            f"At most {max_inputs} inputs are allowed, got {len(inputs)}",
            ErrorCode.VALUE_OUT_OF_RANGE,
            None,
            context,
        )
    for text in inputs:
        validate_field_type(text, str, "input", context)
        if not text.strip():
            raise UpstageApiError("Input text must not be empty", ErrorCode.EMPTY_STRING, None, context)
    return EmbeddingRequestBody(model=model, input=inputs)

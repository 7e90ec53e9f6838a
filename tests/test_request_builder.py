"""Tests for request body assembly."""

import pytest

from upstage_adapter.core import (
    ErrorCode,
    UpstageApiError,
    build_chat_request_body,
    build_embedding_request_body,
)
from upstage_adapter.models import (
    ChatOptions,
    DocumentParsingOptions,
    DocumentParsingRequest,
    InformationExtractionOptions,
    InformationExtractionRequest,
    Message,
    Role,
)

MESSAGES = [Message(role=Role.user, content="hi")]


class TestChatRequestBody:
    """Chat payload construction."""

    def test_no_options_gives_model_and_messages_only(self) -> None:
        body = build_chat_request_body("solar-mini", MESSAGES, ChatOptions())

        assert body.to_payload() == {
            "model": "solar-mini",
            "messages": [{"role": "user", "content": "hi"}],
        }

    def test_options_are_flattened(self) -> None:
        options = ChatOptions(
            temperature=0.3,
            max_tokens=200,
            top_p=0.9,
            reasoning_effort="high",
            frequency_penalty=0.5,
            presence_penalty=-0.5,
            stream=False,
        )

        payload = build_chat_request_body("solar-pro2", MESSAGES, options).to_payload()

        assert payload["temperature"] == 0.3
        assert payload["max_tokens"] == 200
        assert payload["top_p"] == 0.9
        assert payload["reasoning_effort"] == "high"
        assert payload["frequency_penalty"] == 0.5
        assert payload["presence_penalty"] == -0.5
        assert payload["stream"] is False

    def test_text_format_adds_nothing(self) -> None:
        options = ChatOptions(response_format="text", json_schema='{"type":"object"}')

        payload = build_chat_request_body("solar-mini", MESSAGES, options).to_payload()

        assert "response_format" not in payload
        assert "json_schema" not in payload

    def test_json_object_format(self) -> None:
        options = ChatOptions(response_format="json_object", json_schema='{"type":"object"}')

        payload = build_chat_request_body("solar-pro2", MESSAGES, options).to_payload()

        assert payload["response_format"] == {"type": "json_object"}
        assert "json_schema" not in payload

    def test_json_schema_format(self) -> None:
        options = ChatOptions(response_format="json_schema", json_schema='{"type":"object"}')

        payload = build_chat_request_body("solar-pro2", MESSAGES, options).to_payload()

        assert payload["response_format"] == {
            "type": "json_schema",
            "json_schema": {"type": "object"},
        }
        assert "json_schema" not in payload

    def test_malformed_schema_fails(self) -> None:
        options = ChatOptions(response_format="json_schema", json_schema="{bad")

        with pytest.raises(UpstageApiError) as exc_info:
            build_chat_request_body("solar-pro2", MESSAGES, options)

        assert exc_info.value.code == ErrorCode.INVALID_JSON_SCHEMA
        assert exc_info.value.context == "ChatCompletions"

    def test_deterministic(self) -> None:
        options = ChatOptions(temperature=1.0, response_format="json_schema", json_schema='{"a": 1}')

        first = build_chat_request_body("solar-mini", MESSAGES, options).to_payload()
        second = build_chat_request_body("solar-mini", MESSAGES, options).to_payload()

        assert first == second

    def test_message_order_kept(self) -> None:
        messages = [
            Message(role=Role.system, content="sys"),
            Message(role=Role.user, content="q"),
            Message(role=Role.assistant, content="a"),
        ]

        payload = build_chat_request_body("solar-mini", messages).to_payload()

        assert [m["role"] for m in payload["messages"]] == ["system", "user", "assistant"]


class TestEmbeddingRequestBody:
    """Embedding payload construction."""

    def test_single_input(self) -> None:
        body = build_embedding_request_body("embedding-query", "what is solar?")

        assert body.model_dump() == {"model": "embedding-query", "input": "what is solar?"}

    def test_list_input(self) -> None:
        body = build_embedding_request_body("embedding-passage", ["a", "b"])

        assert body.input == ["a", "b"]

    def test_unsupported_model(self) -> None:
        with pytest.raises(UpstageApiError) as exc_info:
            build_embedding_request_body("solar-mini", "text")

        assert exc_info.value.code == ErrorCode.MODEL_NOT_SUPPORTED
        assert exc_info.value.context == "Embeddings"

    def test_empty_list(self) -> None:
        with pytest.raises(UpstageApiError) as exc_info:
            build_embedding_request_body("embedding-query", [])

        assert exc_info.value.code == ErrorCode.EMPTY_ARRAY

    @pytest.mark.parametrize("value", ["", "  ", ["ok", " "]])
    def test_blank_input(self, value: str | list[str]) -> None:
        with pytest.raises(UpstageApiError) as exc_info:
            build_embedding_request_body("embedding-query", value)

        assert exc_info.value.code == ErrorCode.EMPTY_STRING

    def test_too_many_inputs(self) -> None:
        with pytest.raises(UpstageApiError) as exc_info:
            build_embedding_request_body("embedding-query", ["x"] * 101)

        assert exc_info.value.code == ErrorCode.VALUE_OUT_OF_RANGE

    def test_non_string_input(self) -> None:
        with pytest.raises(UpstageApiError) as exc_info:
            build_embedding_request_body("embedding-query", ["ok", 3])

        assert exc_info.value.code == ErrorCode.INVALID_FIELD_TYPE


class TestDocumentPayloads:
    """Parse and extract request serialization."""

    def test_document_parsing_payload(self) -> None:
        request = DocumentParsingRequest(
            document="https://example.test/a.pdf",
            format="markdown",
            options=DocumentParsingOptions(extract_tables=True),
        )

        assert request.to_payload() == {
            "document": "https://example.test/a.pdf",
            "format": "markdown",
            "options": {"extractTables": True},
        }

    def test_information_extraction_payload(self) -> None:
        request = InformationExtractionRequest(
            text="Invoice 42 from ACME",
            schema={"type": "object"},
            options=InformationExtractionOptions(max_results=1),
        )

        assert request.to_payload() == {
            "text": "Invoice 42 from ACME",
            "schema": {"type": "object"},
            "options": {"max_results": 1},
        }

"""Pydantic models for Upstage API requests and responses."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Role(StrEnum):
    """Chat message roles accepted by the API."""

    system = "system"
    user = "user"
    assistant = "assistant"


class Message(BaseModel):
    """Single chat message."""

    role: Role
    content: str

    model_config = ConfigDict(frozen=True)


class ChatOptions(BaseModel):
    """Optional tuning parameters for a chat completion.

    Every field defaults to None, meaning "not sent". ``json_schema`` is the
    raw schema text and is only read when ``response_format`` is
    ``json_schema``; it never reaches the request payload as-is.
    """

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    stream: bool | None = None
    reasoning_effort: Literal["low", "high"] | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    response_format: Literal["text", "json_object", "json_schema"] | None = None
    json_schema: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)


class ResponseFormat(BaseModel):
    """Normalized response_format object sent upstream."""

    type: Literal["json_object", "json_schema"]
    json_schema: dict[str, Any] | None = None


class ChatRequestBody(BaseModel):
    """Fully assembled chat completion payload."""

    model: str
    messages: list[Message]
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    stream: bool | None = None
    reasoning_effort: str | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    response_format: ResponseFormat | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, omitting unset options."""
        return self.model_dump(mode="json", exclude_none=True)


class Usage(BaseModel):
    """Token usage accounting."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    model_config = ConfigDict(extra="allow")


class ChoiceMessage(BaseModel):
    """Message inside a completion choice."""

    role: str = "assistant"
    content: str | None = None

    model_config = ConfigDict(extra="allow")


class Choice(BaseModel):
    """Chat completion choice."""

    index: int = 0
    message: ChoiceMessage
    finish_reason: str | None = None

    model_config = ConfigDict(extra="allow")


class ChatCompletionResponse(BaseModel):
    """Upstage chat completion response."""

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None

    model_config = ConfigDict(extra="allow")


class EmbeddingRequestBody(BaseModel):
    """Embedding request payload."""

    model: str
    input: str | list[str]


class EmbeddingData(BaseModel):
    """Single embedding vector."""

    embedding: list[float]
    index: int = 0
    object: str = "embedding"


class EmbeddingResponse(BaseModel):
    """Upstage embedding response."""

    data: list[EmbeddingData]
    model: str
    object: str = "list"
    usage: dict[str, int] | None = None

    model_config = ConfigDict(extra="allow")


class DocumentParsingOptions(BaseModel):
    """Extraction switches for document parsing."""

    extract_tables: bool | None = Field(default=None, serialization_alias="extractTables")
    extract_images: bool | None = Field(default=None, serialization_alias="extractImages")
    extract_links: bool | None = Field(default=None, serialization_alias="extractLinks")
    language: str | None = None


class DocumentParsingRequest(BaseModel):
    """Document parsing request payload."""

    document: str
    format: Literal["text", "markdown", "html"] | None = None
    options: DocumentParsingOptions | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, omitting unset options."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class InformationExtractionOptions(BaseModel):
    """Tuning knobs for information extraction."""

    confidence_threshold: float | None = Field(default=None, ge=0, le=1)
    max_results: int | None = Field(default=None, ge=1)
    language: str | None = None


class InformationExtractionRequest(BaseModel):
    """Information extraction request payload."""

    text: str
    schema_: dict[str, Any] | str = Field(alias="schema", serialization_alias="schema")
    options: InformationExtractionOptions | None = None

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, omitting unset options."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class ChatItem(BaseModel):
    """One unit of work for the chat pipeline, as handed over by the host.

    Messages and options stay as raw mappings so the validation layer can
    report failures with the canonical error codes.
    """

    model: str = "solar-mini"
    messages: list[dict[str, Any]] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class ItemResult(BaseModel):
    """Output record for one processed item."""

    item_index: int
    json_: dict[str, Any] = Field(alias="json", serialization_alias="json")

    model_config = ConfigDict(populate_by_name=True)

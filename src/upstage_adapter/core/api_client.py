"""Upstage API client - one HTTP call per operation."""

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from upstage_adapter.constants import API_ENDPOINTS, DEFAULT_BASE_URL, DEFAULT_VALUES
from upstage_adapter.core.errors import (
    ApiReportedError,
    StreamingNotImplementedError,
    normalize_error,
)
from upstage_adapter.models import (
    ChatCompletionResponse,
    ChatRequestBody,
    DocumentParsingRequest,
    EmbeddingRequestBody,
    EmbeddingResponse,
    InformationExtractionRequest,
)
from upstage_adapter.utils import get_logger, get_proxy_url

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

Payload = BaseModel | dict[str, Any]


def _to_json(body: Payload) -> dict[str, Any]:
    to_payload = getattr(body, "to_payload", None)
    if to_payload is not None:
        return to_payload()
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


class UpstageApiClient:
    """Client for the Upstage REST API.

    Every failure (network, non-2xx status, malformed body) is raised as
    ``UpstageApiError``. Reporting it is left to the caller handling it.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_VALUES["request_timeout_ms"],
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            api_key: Bearer token
            base_url: API base URL, endpoint paths are appended to it
            timeout_ms: Per-call timeout in milliseconds
            transport: Optional httpx transport, mainly for tests
        """
        self.api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_ms = timeout_ms
        self._transport = transport

    def set_timeout(self, timeout_ms: int) -> None:
        """Change the timeout used by subsequent calls."""
        self._timeout_ms = timeout_ms

    def set_base_url(self, base_url: str) -> None:
        """Change the base URL used by subsequent calls."""
        self._base_url = base_url.rstrip("/")

    def get_base_url(self) -> str:
        """Current base URL."""
        return self._base_url

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client_options(self, timeout_ms: int) -> dict[str, Any]:
        # Proxy selection is ours; httpx must not read the environment itself
        return {
            "timeout": timeout_ms / 1000,
            "proxy": get_proxy_url(),
            "transport": self._transport,
            "trust_env": False,
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        context: str,
        body: Payload | None = None,
        response_model: type[ModelT] | None = None,
    ) -> Any:
        """Send one request and decode the response.

        Args:
            method: HTTP method
            endpoint: Key into ``API_ENDPOINTS``
            context: Operation label used for errors
            body: JSON body for POST requests
            response_model: Model used to type the decoded body

        Returns:
            Decoded body, typed with ``response_model`` when given

        Raises:
            UpstageApiError: On any transport or API failure
        """
        # Snapshot so later mutators never affect this call
        url = f"{self._base_url}{API_ENDPOINTS[endpoint]}"
        timeout_ms = self._timeout_ms
        json_body = _to_json(body) if body is not None else None

        logger.debug("api.request", method=method, url=url, context=context)

        try:
            async with httpx.AsyncClient(**self._client_options(timeout_ms)) as client:
                response = await client.request(method, url, headers=self._headers(), json=json_body)
                response.raise_for_status()
        except Exception as exc:
            raise normalize_error(exc, context) from exc

        try:
            data = response.json()
            result = response_model.model_validate(data) if response_model else data
        except ValueError as exc:
            failure = ApiReportedError(
                message=f"Malformed response body: {exc}",
                status_code=response.status_code,
            )
            raise normalize_error(failure, context) from exc

        logger.debug("api.response", status=response.status_code, context=context)
        return result

    async def chat_completions(
        self,
        body: ChatRequestBody | dict[str, Any],
        context: str = "ChatCompletions",
    ) -> ChatCompletionResponse:
        """POST /chat/completions."""
        return await self._request(
            "POST", "chat_completions", context, body, ChatCompletionResponse
        )

    async def embeddings(
        self,
        body: EmbeddingRequestBody | dict[str, Any],
        context: str = "Embeddings",
    ) -> EmbeddingResponse:
        """POST /embeddings."""
        return await self._request("POST", "embeddings", context, body, EmbeddingResponse)

    async def get_models(self, context: str = "GetModels") -> dict[str, Any]:
        """GET /models."""
        return await self._request("GET", "models", context)

    async def document_parsing(
        self,
        body: DocumentParsingRequest | dict[str, Any],
        context: str = "DocumentParsing",
    ) -> dict[str, Any]:
        """POST /parse."""
        return await self._request("POST", "document_parsing", context, body)

    async def information_extraction(
        self,
        body: InformationExtractionRequest | dict[str, Any],
        context: str = "InformationExtraction",
    ) -> dict[str, Any]:
        """POST /extract."""
        return await self._request("POST", "information_extraction", context, body)

    async def stream_chat_completions(
        self,
        body: ChatRequestBody | dict[str, Any],
        on_chunk: Callable[[Any], None],
        context: str = "StreamChatCompletions",
    ) -> None:
        """Streaming chat completions. Not supported; always raises."""
        raise StreamingNotImplementedError(context)


def create_client(
    api_key: str,
    *,
    base_url: str | None = None,
    timeout_ms: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UpstageApiClient:
    """Factory for the API client.

    Args:
        api_key: Bearer token
        base_url: Override for the API base URL
        timeout_ms: Override for the per-call timeout
        transport: Optional httpx transport

    Returns:
        Configured client
    """
    return UpstageApiClient(
        api_key,
        base_url or DEFAULT_BASE_URL,
        timeout_ms or DEFAULT_VALUES["request_timeout_ms"],
        transport=transport,
    )

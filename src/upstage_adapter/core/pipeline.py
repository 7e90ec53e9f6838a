"""Processing pipeline - runs chat items one at a time."""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from upstage_adapter.constants import SUPPORTED_MODELS
from upstage_adapter.core.api_client import UpstageApiClient
from upstage_adapter.core.errors import (
    ErrorCode,
    ItemProcessingError,
    UpstageApiError,
    create_error_response,
    log_error,
    normalize_error,
)
from upstage_adapter.core.request_builder import build_chat_request_body
from upstage_adapter.core.response_mapper import map_chat_response
from upstage_adapter.core.validation import (
    parse_chat_options,
    parse_messages,
    validate_model_support,
    validate_required_field,
)
from upstage_adapter.models import ChatItem, ItemResult
from upstage_adapter.utils import ErrorSink, get_logger

logger = get_logger(__name__)

CHAT_CONTEXT = "ChatCompletions"


class FailurePolicy(Protocol):
    """Decides what a failed item does to the rest of the run."""

    def handle(self, error: UpstageApiError, item_index: int) -> ItemResult:
        """Return a result to record, or raise to abort the run."""
        ...


class ContinueOnFail:
    """Record the failure for the item and carry on."""

    def handle(self, error: UpstageApiError, item_index: int) -> ItemResult:
        return ItemResult(
            item_index=item_index,
            json=create_error_response(error, error.context or CHAT_CONTEXT, item_index),
        )


class AbortOnFail:
    """Stop the run at the first failure."""

    def handle(self, error: UpstageApiError, item_index: int) -> ItemResult:
        raise ItemProcessingError(error, item_index) from error


def policy_for(continue_on_fail: bool) -> FailurePolicy:
    """Pick the failure policy matching a host's continue-on-fail switch."""
    return ContinueOnFail() if continue_on_fail else AbortOnFail()


class ChatCompletionPipeline:
    """Per-item chat driver.

    For each item:
    1. Validate model, messages and options (no network call on failure)
    2. Build the request body
    3. Send it
    4. Map the response
    """

    def __init__(self, client: UpstageApiClient, sink: ErrorSink | None = None) -> None:
        """Initialize pipeline.

        Args:
            client: API client used for every item
            sink: Optional error sink for per-item failures
        """
        self.client = client
        self.sink = sink

    async def process_item(self, item: ChatItem | Mapping[str, Any]) -> dict[str, Any]:
        """Run one item through validate, build, send and map.

        Args:
            item: Chat item

        Returns:
            Mapped response record

        Raises:
            UpstageApiError: On any failure
        """
        if not isinstance(item, ChatItem):
            try:
                item = ChatItem.model_validate(dict(item))
            except ValidationError as exc:
                raise UpstageApiError(
                    f"Invalid item: {exc.errors()[0]['msg']}",
                    ErrorCode.INVALID_FIELD_TYPE,
                    None,
                    CHAT_CONTEXT,
                ) from exc

        validate_required_field(item.model, "model", CHAT_CONTEXT)
        validate_model_support(item.model, SUPPORTED_MODELS, CHAT_CONTEXT)
        messages = parse_messages(item.messages, CHAT_CONTEXT)
        options = parse_chat_options(item.options, CHAT_CONTEXT)
        body = build_chat_request_body(item.model, messages, options, CHAT_CONTEXT)

        response = await self.client.chat_completions(body, CHAT_CONTEXT)
        return map_chat_response(response, stream=bool(options.stream))

    async def run(
        self,
        items: Iterable[ChatItem | Mapping[str, Any]],
        policy: FailurePolicy | None = None,
    ) -> list[ItemResult]:
        """Process items sequentially.

        Args:
            items: Items to process, in order
            policy: Failure policy, aborting on the first failure by default

        Returns:
            One result per processed item
        """
        policy = policy or AbortOnFail()
        results: list[ItemResult] = []

        for index, item in enumerate(items):
            try:
                record = await self.process_item(item)
            except Exception as exc:
                error = normalize_error(exc, CHAT_CONTEXT)
                log_error(error, error.context, item_index=index, sink=self.sink)
                results.append(policy.handle(error, index))
                continue
            results.append(ItemResult(item_index=index, json=record))

        logger.info("pipeline.complete", items=len(results))
        return results


def create_pipeline(client: UpstageApiClient, sink: ErrorSink | None = None) -> ChatCompletionPipeline:
    """Factory for the chat pipeline.

    Args:
        client: API client
        sink: Optional error sink

    Returns:
        Configured pipeline
    """
    return ChatCompletionPipeline(client, sink)

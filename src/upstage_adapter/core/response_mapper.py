"""Response mapper - shapes API responses into host records."""

from typing import Any

from upstage_adapter.models import ChatCompletionResponse


def map_chat_response(response: ChatCompletionResponse, stream: bool = False) -> dict[str, Any]:
    """Extract the host-relevant part of a chat completion.

    Streaming responses are passed through untouched.

    Args:
        response: Successful chat completion
        stream: Whether the request asked for streaming

    Returns:
        Record with content, usage, model, created and full_response
    """
    full_response = response.model_dump(mode="json")
    if stream:
        return full_response

    content = ""
    if response.choices:
        content = response.choices[0].message.content or ""

    return {
        "content": content,
        "usage": response.usage.model_dump() if response.usage else None,
        "model": response.model,
        "created": response.created,
        "full_response": full_response,
    }

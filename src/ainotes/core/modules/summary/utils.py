from typing import Any

from ainotes.errors import NoSummaryExtractedError


def _chat_message_content(payload: dict[str, Any]) -> Any:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def extract_summary(payload: Any) -> str:
    """
    Pull summary text out of a provider response.

    Providers do not agree on a response schema, so the known shapes are
    tried in order and the first non-empty text wins:

    1. chat completion: choices[0].message.content
    2. flat "summary" field
    3. flat "content" field

    Raises:
        NoSummaryExtractedError: If none of the shapes holds text
    """
    if not isinstance(payload, dict):
        raise NoSummaryExtractedError(f"Unexpected response type: {type(payload).__name__}")

    candidates = (_chat_message_content(payload), payload.get("summary"), payload.get("content"))
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()

    raise NoSummaryExtractedError("No summary received from provider")

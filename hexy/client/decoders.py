"""Decoders for the response shapes the Hexy API has used over time.

Each decoder tries the known envelopes in a fixed order and falls back to
an empty value instead of raising.
"""

from typing import Any

# Envelope keys for history payloads, in lookup order.
HISTORY_ENVELOPE_KEYS = ("messages", "data")

# Keys that may carry the assistant reply, in lookup order.
REPLY_CONTENT_KEYS = ("content", "message", "text")


def unwrap_list(payload: Any, envelope_keys: tuple[str, ...]) -> list[Any]:
    """Return the list carried by ``payload``.

    Args:
        payload: A bare list or a dict wrapping one under an envelope key.
        envelope_keys: Keys to try, in order.

    Returns:
        The first list found, or an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in envelope_keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def decode_history(payload: Any) -> list[dict[str, Any]]:
    """Flatten a chat history response into its message list."""
    return unwrap_list(payload, HISTORY_ENVELOPE_KEYS)


def extract_reply(payload: Any) -> str:
    """Pull the assistant text out of a send response.

    A plain string response is the reply itself; a dict carries it under
    ``content``, ``message`` or ``text``. Anything else yields ``""``.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        for key in REPLY_CONTENT_KEYS:
            value = payload.get(key)
            if value and isinstance(value, str):
                return value
    return ""

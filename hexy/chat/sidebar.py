"""Ordering, search and grouping for the conversation list."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from hexy.models.schemas import Conversation

logger = logging.getLogger(__name__)


def parse_conversations(payload: Any) -> list[Conversation]:
    """Validate a conversation list response, skipping malformed entries."""
    if not isinstance(payload, list):
        return []
    conversations = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        try:
            conversations.append(Conversation.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed conversation: {e}")
    return conversations


def arrange_conversations(
    conversations: Iterable[Conversation],
    query: str = "",
) -> list[Conversation]:
    """Most recently active first, limited to those matching ``query``.

    Conversations without a usable timestamp sort last, keeping server order.
    """
    ordered = sorted(conversations, key=lambda c: c.activity_timestamp, reverse=True)
    return [c for c in ordered if c.matches(query)]


def split_pinned(
    conversations: Iterable[Conversation],
) -> tuple[list[Conversation], list[Conversation]]:
    """Split into (pinned, regular), preserving order within each group."""
    pinned: list[Conversation] = []
    regular: list[Conversation] = []
    for conversation in conversations:
        (pinned if conversation.is_pinned else regular).append(conversation)
    return pinned, regular

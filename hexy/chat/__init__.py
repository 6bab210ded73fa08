"""Conversation state for chat front ends.

Contains no rendering. Front ends read ``ChatSession`` state and call its
coroutines; all network access goes through ``HexyClient``.
"""

from hexy.chat.session import ChatSession
from hexy.chat.sidebar import arrange_conversations, parse_conversations, split_pinned

__all__ = ["ChatSession", "arrange_conversations", "parse_conversations", "split_pinned"]

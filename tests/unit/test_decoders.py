"""Unit tests for response shape decoders."""

import pytest

from hexy.client.decoders import decode_history, extract_reply

MESSAGES = [
    {"id": 1, "content": "hi", "message_role": "user"},
    {"id": 2, "content": "hello", "message_role": "assistant"},
]


class TestDecodeHistory:
    """Tests for chat history flattening."""

    def test_bare_list(self) -> None:
        assert decode_history(MESSAGES) == MESSAGES

    def test_messages_envelope(self) -> None:
        assert decode_history({"messages": MESSAGES}) == MESSAGES

    def test_data_envelope(self) -> None:
        assert decode_history({"data": MESSAGES}) == MESSAGES

    def test_messages_envelope_takes_precedence(self) -> None:
        """When both envelopes exist, 'messages' wins."""
        assert decode_history({"messages": MESSAGES[:1], "data": MESSAGES}) == MESSAGES[:1]

    @pytest.mark.parametrize(
        "payload",
        [None, {}, {"messages": "nope"}, {"data": {"id": 1}}, "text", 42],
    )
    def test_other_shapes_are_empty(self, payload: object) -> None:
        """Anything that is not one of the known shapes yields []."""
        assert decode_history(payload) == []


class TestExtractReply:
    """Tests for assistant reply extraction."""

    def test_content_key(self) -> None:
        assert extract_reply({"content": "a", "message": "b"}) == "a"

    def test_message_key(self) -> None:
        assert extract_reply({"message": "b", "text": "c"}) == "b"

    def test_text_key(self) -> None:
        assert extract_reply({"text": "c"}) == "c"

    def test_empty_content_falls_through(self) -> None:
        """Empty values are skipped in favour of later keys."""
        assert extract_reply({"content": "", "text": "c"}) == "c"

    def test_plain_string(self) -> None:
        assert extract_reply("just text") == "just text"

    def test_unknown_shape(self) -> None:
        assert extract_reply({"reply": "x"}) == ""
        assert extract_reply(None) == ""

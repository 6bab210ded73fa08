"""Chat state for one conversation window.

Mirrors what the chat screen keeps: the message list with optimistic
placeholders, the selected model, the input draft and a pending image.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from hexy.catalog.models import DEFAULT_MODEL_OPTIONS, load_model_options
from hexy.chat.sidebar import arrange_conversations, parse_conversations
from hexy.client.api_client import HexyClient
from hexy.client.decoders import extract_reply
from hexy.client.errors import ApiError
from hexy.models.schemas import (
    Conversation,
    ImageFile,
    Message,
    MessageRole,
    ModelDescriptor,
)

logger = logging.getLogger(__name__)

IMAGE_ONLY_CONTENT = "Sent an image"
SEND_FAILED_MESSAGE = "Failed to send message. Please try again."
CREATE_FAILED_MESSAGE = "Failed to create chat. Please try again."


class ChatSession:
    """Manages chat state for one conversation."""

    def __init__(
        self,
        client: HexyClient,
        chat_id: str | int | None = None,
        model: str | None = None,
    ) -> None:
        self.client = client
        self.chat_id = chat_id
        self.messages: list[dict[str, Any]] = []
        self.model_options: list[ModelDescriptor] = list(DEFAULT_MODEL_OPTIONS)
        self.selected_model: str = model or client.config.default_model
        self.model_error: str | None = None
        self.is_loading: bool = False
        self.draft: str = ""
        self.pending_image: ImageFile | None = None
        self.last_error: str | None = None

    @property
    def selected_model_label(self) -> str:
        for option in self.model_options:
            if option.value == self.selected_model:
                return option.label
        return self.selected_model

    def _make_message(self, role: MessageRole, content: str, image_url: str | None = None) -> dict[str, Any]:
        message = {
            "id": f"temp-{role.value}-{uuid.uuid4().hex[:12]}",
            "content": content,
            "message_role": role.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "model": self.selected_model,
        }
        if image_url:
            message["image_url"] = image_url
        return message

    async def load_models(self) -> None:
        selection = await load_model_options(self.client, self.selected_model)
        self.model_options = selection.options
        self.selected_model = selection.selected or self.selected_model
        self.model_error = selection.error

    def select_model(self, value: str) -> None:
        if not any(option.value == value for option in self.model_options):
            raise ValueError(f"Unknown model: {value}")
        self.selected_model = value

    async def load_history(self) -> None:
        if self.chat_id is None:
            self.messages = []
            return
        try:
            self.messages = await self.client.get_chat_history(self.chat_id)
        except ApiError as e:
            logger.error(f"Error fetching chat history: {e}")
            self.messages = []

    async def ensure_conversation(self) -> str | int:
        """Return the current conversation id, creating one if needed.

        Raises:
            ApiError: If the conversation could not be created.
        """
        if self.chat_id is not None:
            return self.chat_id
        created = await self.client.create_conversation()
        try:
            new_id = Conversation.model_validate(created).identifier
        except ValidationError:
            new_id = None
        if new_id is None:
            raise ApiError("Conversation response did not include an id")
        self.chat_id = new_id
        logger.info(f"Created conversation {new_id}")
        return new_id

    async def send(self, text: str, image: ImageFile | None = None) -> bool:
        """Send a message and record the assistant reply.

        Temporary user and assistant messages are shown right away. On
        failure both are removed and the input (text and image) is restored
        into ``draft`` and ``pending_image``.

        Args:
            text: Message text; may be empty when an image is attached.
            image: Optional image to send instead of a plain text message.

        Returns:
            True when the reply was received.
        """
        text = text.strip()
        if (not text and image is None) or self.is_loading:
            return False

        try:
            chat_id = await self.ensure_conversation()
        except ApiError as e:
            logger.error(f"Error creating chat: {e}")
            self.last_error = CREATE_FAILED_MESSAGE
            return False

        content = text or IMAGE_ONLY_CONTENT
        user_message = self._make_message(
            MessageRole.USER, content, image.uri if image else None
        )
        assistant_message = self._make_message(MessageRole.ASSISTANT, "")
        self.messages.extend([user_message, assistant_message])
        self.draft = ""
        self.pending_image = None
        self.last_error = None
        self.is_loading = True

        failed = False

        def on_token(token: str) -> None:
            assistant_message["content"] += token

        def on_error(error: str) -> None:
            nonlocal failed
            failed = True
            logger.error(f"Streaming error: {error}")
            placeholders = {user_message["id"], assistant_message["id"]}
            self.messages = [m for m in self.messages if m.get("id") not in placeholders]
            self.draft = text
            self.pending_image = image
            self.last_error = SEND_FAILED_MESSAGE

        try:
            if image is not None:
                try:
                    reply = await self.client.send_message_with_image(chat_id, content, image)
                except (ApiError, OSError) as e:
                    on_error(str(e))
                else:
                    on_token(extract_reply(reply))
            else:
                await self.client.send_message_with_callbacks(
                    chat_id,
                    content,
                    self.selected_model,
                    on_token=on_token,
                    on_error=on_error,
                )
        finally:
            self.is_loading = False

        return not failed

    def new_chat(self) -> None:
        self.chat_id = None
        self.messages.clear()
        self.draft = ""
        self.pending_image = None

    async def select_chat(self, chat_id: str | int | None) -> None:
        self.chat_id = chat_id
        await self.load_history()

    def is_open(self, chat_id: str | int | None) -> bool:
        """Whether ``chat_id`` names the open conversation.

        Ids typed by a user arrive as strings while the server returns
        integers, so they are compared as text.
        """
        if chat_id is None or self.chat_id is None:
            return False
        return str(chat_id) == str(self.chat_id)

    def transcript(self) -> list[Message]:
        """The message list as validated ``Message`` models."""
        return [Message.model_validate(message) for message in self.messages]

    async def list_chats(self, query: str = "") -> list[Conversation]:
        """Conversations for the history sidebar, newest activity first.

        Args:
            query: Case-insensitive filter on title and last message.

        Returns:
            Matching conversations; empty on failure.
        """
        try:
            payload = await self.client.get_conversations()
        except ApiError as e:
            logger.error(f"Error loading chats: {e}")
            return []
        return arrange_conversations(parse_conversations(payload), query)

    async def delete_chat(self, chat_id: str | int) -> bool:
        """Delete a conversation, leaving it if it was the open one."""
        try:
            await self.client.delete_conversation(chat_id)
        except ApiError as e:
            logger.error(f"Error deleting chat: {e}")
            return False
        if self.is_open(chat_id):
            self.new_chat()
        return True

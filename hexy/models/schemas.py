from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

PREVIEW_LENGTH = 80
NO_MESSAGES_PREVIEW = "No messages yet • Start chatting"


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Credential(BaseModel):
    """Persisted session credential.

    Attributes:
        token: Bearer token issued by the login endpoint.
        token_type: Auth scheme prefixed to the token in the header.
    """

    token: str
    token_type: str = "bearer"

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.token}"


class TokenResponse(BaseModel):
    """Body returned by POST /auth/login."""

    access_token: str = Field(..., min_length=1)
    token_type: str = "bearer"

    @field_validator("token_type", mode="before")
    @classmethod
    def default_token_type(cls, v: str | None) -> str:
        """Fall back to bearer when the server omits the scheme."""
        return v or "bearer"


class RegisterRequest(BaseModel):
    """JSON body for POST /users/."""

    username: str
    email: str
    password: str


class User(BaseModel):
    """Account as reported by the server.

    Attributes:
        username: Display and login name.
        email: Account email address.
        image_url: Profile picture, if one was uploaded.
        subscription_type: Plan name (free, premium, ...).
        free_usage_text: Remaining free text generations.
        free_usage_image: Remaining free image generations.
        date_created: ISO timestamp of account creation.
    """

    model_config = ConfigDict(extra="allow")

    username: str
    email: str | None = None
    image_url: str | None = None
    subscription_type: str | None = None
    free_usage_text: int | None = None
    free_usage_image: int | None = None
    date_created: str | None = None


class UserUpdate(BaseModel):
    """Partial body for PUT /users/.

    Unset fields are left out of the request and an empty password is
    never sent.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None

    def to_payload(self) -> dict[str, str]:
        payload = self.model_dump(exclude_none=True)
        if not payload.get("password"):
            payload.pop("password", None)
        return payload


class Conversation(BaseModel):
    """A server-side chat thread.

    The server has used both ``id`` and ``chat_id`` for the identifier,
    ``is_pinned`` and ``pinned`` for the pin flag, and several names for the
    activity timestamps.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    chat_id: str | int | None = None
    title: str | None = None
    last_message: str | None = None
    created_at: str | None = None
    date_created: str | None = None
    updated_at: str | None = None
    last_activity: str | None = None
    last_message_at: str | None = None
    is_pinned: bool = False

    @model_validator(mode="before")
    @classmethod
    def merge_pin_flag(cls, data: Any) -> Any:
        if isinstance(data, dict) and "pinned" in data:
            data = {**data, "is_pinned": bool(data.get("is_pinned") or data.get("pinned"))}
        return data

    @field_validator("is_pinned", mode="before")
    @classmethod
    def none_is_unpinned(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def identifier(self) -> str | int | None:
        return self.id or self.chat_id

    @property
    def activity_at(self) -> str | None:
        """Most relevant timestamp for ordering, newest activity first."""
        return (
            self.updated_at
            or self.last_activity
            or self.last_message_at
            or self.created_at
            or self.date_created
        )

    @property
    def activity_timestamp(self) -> float:
        """``activity_at`` as epoch seconds; 0 when absent or unparsable."""
        if not self.activity_at:
            return 0.0
        try:
            moment = datetime.fromisoformat(self.activity_at)
        except ValueError:
            return 0.0
        return moment.timestamp()

    def matches(self, query: str) -> bool:
        """Case-insensitive search over the title and last message."""
        query = query.strip().lower()
        if not query:
            return True
        haystack = f"{self.title or ''} {self.last_message or ''}".lower()
        return query in haystack

    @property
    def preview(self) -> str:
        if not self.last_message:
            return NO_MESSAGES_PREVIEW
        if len(self.last_message) > PREVIEW_LENGTH:
            return self.last_message[:PREVIEW_LENGTH] + "..."
        return self.last_message


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(extra="allow")

    id: str | int
    content: str = ""
    message_role: MessageRole
    timestamp: str | None = None
    model: str | None = None
    image_url: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ModelDescriptor(BaseModel):
    """A selectable generation model.

    Attributes:
        value: Identifier sent as the ``model`` query parameter.
        label: Human readable name.
        tier: Plan required to use the model (free or premium).
        recommended: Whether the model is highlighted in pickers.
    """

    value: str
    label: str
    tier: str = "free"
    recommended: bool = False


class ImageFile(BaseModel):
    """A locally picked image to upload as multipart field ``image``.

    Attributes:
        uri: Local path or ``file://`` URI of the image.
        type: MIME type sent with the part.
        name: File name sent with the part.
    """

    uri: str
    type: str = "image/jpeg"
    name: str = "image.jpg"

    @field_validator("type", "name", mode="before")
    @classmethod
    def blank_to_default(cls, v: str | None, info: ValidationInfo) -> str:
        """Treat missing or blank values as the defaults."""
        if v:
            return v
        return "image/jpeg" if info.field_name == "type" else "image.jpg"

    @property
    def path(self) -> Path:
        return Path(self.uri.removeprefix("file://"))

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class ModelSelection(BaseModel):
    """Outcome of loading the model catalog for a picker.

    Attributes:
        options: Models the user can choose from.
        selected: Currently selected model value.
        error: Message to show when the catalog fell back to defaults.
    """

    options: list[ModelDescriptor]
    selected: str | None = None
    error: str | None = None

"""Pydantic models for the Hexy API payloads.

Provides type safety and validation for the shapes the client sends and reads.

Models:
    - Credential: Stored session token and its scheme
    - TokenResponse: Login response
    - User / UserUpdate / RegisterRequest: Account payloads
    - Conversation / Message: Chat threads and their messages
    - ModelDescriptor / ModelSelection: Normalized model catalog entries
    - ImageFile: A local image picked for upload
"""

from hexy.models.schemas import (
    Conversation,
    Credential,
    ImageFile,
    Message,
    MessageRole,
    ModelDescriptor,
    ModelSelection,
    RegisterRequest,
    TokenResponse,
    User,
    UserUpdate,
)

__all__ = [
    "Conversation",
    "Credential",
    "ImageFile",
    "Message",
    "MessageRole",
    "ModelDescriptor",
    "ModelSelection",
    "RegisterRequest",
    "TokenResponse",
    "User",
    "UserUpdate",
]

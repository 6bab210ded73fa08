"""HTTP client for the Hexy chat API.

Responsibilities:
    - Endpoint wrappers for auth, users, conversations, messages and models
    - Authorization header from the stored credential
    - Normalization of failed responses into typed errors
    - Decoding of the response envelopes the server has used

Holds no UI state. Callers decide how to recover from errors.
"""

from hexy.client.api_client import HexyClient
from hexy.client.config import ClientConfig, get_client_config
from hexy.client.errors import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    InvalidDataError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
)

__all__ = [
    "ApiConnectionError",
    "ApiError",
    "AuthenticationError",
    "ClientConfig",
    "HexyClient",
    "InvalidDataError",
    "NotFoundError",
    "PermissionDeniedError",
    "ServerError",
    "get_client_config",
]

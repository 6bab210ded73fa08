"""Credential persistence and token lifecycle.

Components:
    - store: CredentialStore protocol with memory and JSON file backends
    - session: AuthSession reading/writing the token and building headers
    - account: AccountService flows (import from hexy.auth.account)
"""

from hexy.auth.session import DEFAULT_TOKEN_TYPE, AuthSession
from hexy.auth.store import (
    TOKEN_KEY,
    TOKEN_TYPE_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)

__all__ = [
    "DEFAULT_TOKEN_TYPE",
    "TOKEN_KEY",
    "TOKEN_TYPE_KEY",
    "AuthSession",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
]

"""Session token lifecycle on top of a credential store.

The token is read from the store before every authenticated request and
never cached here, so a login or logout takes effect on the next call.
"""

import logging

from hexy.auth.store import (
    TOKEN_KEY,
    TOKEN_TYPE_KEY,
    CredentialStore,
    MemoryCredentialStore,
)
from hexy.models.schemas import Credential

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TYPE = "bearer"


class AuthSession:
    """Reads, writes and clears the stored credential.

    Store failures are logged and treated as "no value" so that a broken
    store degrades to an unauthenticated session instead of crashing.
    """

    def __init__(self, store: CredentialStore | None = None) -> None:
        self._store = store if store is not None else MemoryCredentialStore()

    @property
    def store(self) -> CredentialStore:
        return self._store

    async def get_token(self) -> str | None:
        try:
            return await self._store.get(TOKEN_KEY) or None
        except Exception as e:
            logger.error(f"Error getting token: {e}")
            return None

    async def get_token_type(self) -> str:
        try:
            return await self._store.get(TOKEN_TYPE_KEY) or DEFAULT_TOKEN_TYPE
        except Exception as e:
            logger.warning(f"Error getting token type: {e}")
            return DEFAULT_TOKEN_TYPE

    async def get_credential(self) -> Credential | None:
        token = await self.get_token()
        if not token:
            return None
        return Credential(token=token, token_type=await self.get_token_type())

    async def set_token(self, token: str, token_type: str = DEFAULT_TOKEN_TYPE) -> None:
        try:
            await self._store.set(TOKEN_KEY, token)
            await self._store.set(TOKEN_TYPE_KEY, token_type or DEFAULT_TOKEN_TYPE)
        except Exception as e:
            logger.error(f"Error saving token: {e}")

    async def clear_token(self) -> None:
        try:
            await self._store.remove(TOKEN_KEY)
            await self._store.remove(TOKEN_TYPE_KEY)
        except Exception as e:
            logger.error(f"Error clearing token: {e}")

    async def is_authenticated(self) -> bool:
        return bool(await self.get_token())

    async def get_auth_headers(self) -> dict[str, str]:
        """Authorization header for the stored credential.

        Returns:
            ``{"Authorization": "<type> <token>"}``, or an empty dict when no
            token is stored.
        """
        credential = await self.get_credential()
        if credential is None:
            return {}
        return {"Authorization": credential.authorization}

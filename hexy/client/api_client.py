"""Async client for the Hexy chat API.

Wraps every endpoint the app uses behind one class:
- attaches the stored credential as the Authorization header
- normalizes failed responses into typed ApiError subclasses
- persists the token returned by login

Requests are independent and never retried. There is no request queue and
no cancellation; a request runs until it completes or the transport fails.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from hexy.auth.session import AuthSession
from hexy.client.config import ClientConfig, get_client_config
from hexy.client.decoders import decode_history, extract_reply
from hexy.client.errors import ApiConnectionError, ApiError, raise_for_api_error
from hexy.models.schemas import ImageFile, RegisterRequest, TokenResponse, UserUpdate

logger = logging.getLogger(__name__)

TokenCallback = Callable[[str], None]
CompleteCallback = Callable[[], None]
ErrorCallback = Callable[[str], None]


class HexyClient:
    """Client for the Hexy HTTP API.

    Usage:
        async with HexyClient() as client:
            await client.login("ana", "secret")
            chats = await client.get_conversations()

    The credential is read from the session's store before each
    authenticated request, so tokens written or cleared elsewhere are
    picked up immediately.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: AuthSession | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            session: Token lifecycle wrapper. Defaults to an in-memory store.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_client_config()
        self._session = session or AuthSession()
        self._http = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            transport=transport,
            headers={"accept": "application/json"},
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> AuthSession:
        return self._session

    async def __aenter__(self) -> "HexyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        **kwargs: Any,
    ) -> Any:
        """Send one request and return its parsed JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the configured base URL.
            auth: Attach the stored credential when one exists.
            **kwargs: Forwarded to ``httpx.AsyncClient.request``.

        Returns:
            Parsed JSON body, or None for an empty success response.

        Raises:
            ApiError: Normalized error for a non-2xx response.
            ApiConnectionError: When no response was received.
        """
        headers: dict[str, str] = {}
        if auth:
            headers.update(await self._session.get_auth_headers())

        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiConnectionError(f"Connection failed: {e}") from e

        try:
            raise_for_api_error(response)
        except ApiError as e:
            logger.warning(f"{method} {path} failed with {response.status_code}: {e}")
            raise

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                "Invalid response from server", response.status_code
            ) from e

    # --- Auth & users -------------------------------------------------------

    async def register(self, username: str, email: str, password: str) -> Any:
        body = RegisterRequest(username=username, email=email, password=password)
        return await self._request("POST", "/users/", auth=False, json=body.model_dump())

    async def login(self, username: str, password: str) -> Any:
        """Log in with the OAuth2 password grant and store the token.

        Returns:
            The login response body (``access_token``, ``token_type``).

        Raises:
            ApiError: If the credentials are rejected or the response has
                no token.
        """
        form = {
            "grant_type": "password",
            "username": username,
            "password": password,
            "scope": "",
            "client_id": "",
            "client_secret": "",
        }
        data = await self._request("POST", "/auth/login", auth=False, data=form)

        try:
            token = TokenResponse.model_validate(data)
        except ValidationError as e:
            raise ApiError("Login response did not include a token", 200) from e

        await self._session.set_token(token.access_token, token.token_type)
        logger.info(f"Logged in as {username}")
        return data

    async def logout(self) -> None:
        await self._session.clear_token()

    async def is_authenticated(self) -> bool:
        return await self._session.is_authenticated()

    async def get_current_user(self) -> Any:
        return await self._request("GET", "/auth/me")

    async def update_user(self, update: UserUpdate | dict[str, Any]) -> Any:
        """Update account fields; an empty password is not sent."""
        if not isinstance(update, UserUpdate):
            update = UserUpdate.model_validate(update)
        return await self._request("PUT", "/users/", json=update.to_payload())

    async def upload_profile_image(self, image: ImageFile | dict[str, Any]) -> Any:
        return await self._request(
            "POST", "/users/upload/image", files=self._image_part(image)
        )

    async def delete_user(self) -> Any:
        return await self._request("DELETE", "/users/")

    # --- Conversations ------------------------------------------------------

    async def get_conversations(self) -> Any:
        return await self._request("GET", "/chat/")

    async def create_conversation(self) -> Any:
        return await self._request("POST", "/chat/")

    async def delete_conversation(self, chat_id: str | int) -> Any:
        return await self._request("DELETE", f"/chat/{chat_id}")

    async def get_chat_history(self, chat_id: str | int) -> list[dict[str, Any]]:
        """Messages of a conversation, oldest first.

        The server has returned a bare list, ``{"messages": [...]}`` and
        ``{"data": [...]}``; all three are flattened. Any other shape gives
        an empty list.
        """
        payload = await self._request("GET", f"/chat/history/{chat_id}")
        return decode_history(payload)

    # --- Messages -----------------------------------------------------------

    async def send_message(
        self,
        chat_id: str | int,
        message: str,
        model: str | None = None,
    ) -> Any:
        """Send a text message and return the assistant reply payload."""
        params = {"model": model or self._config.default_model, "message": message}
        return await self._request("POST", f"/chat/{chat_id}", params=params)

    async def send_message_with_callbacks(
        self,
        chat_id: str | int,
        message: str,
        model: str | None = None,
        on_token: TokenCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Send a message and report the reply through callbacks.

        The endpoint answers in one response, so ``on_token`` receives the
        whole reply once, followed by ``on_complete``. Failures, including
        transport errors, are passed to ``on_error`` instead of raised, and
        then neither of the other callbacks runs.

        Args:
            chat_id: Conversation to post to.
            message: User message text.
            model: Model value; the configured default when omitted.
            on_token: Receives the reply text.
            on_complete: Called after the reply was delivered.
            on_error: Receives the normalized error message.
        """
        try:
            payload = await self.send_message(chat_id, message, model)
        except ApiError as e:
            logger.error(f"Error sending message: {e}")
            if on_error:
                on_error(e.message)
            return

        content = extract_reply(payload)
        if content and on_token:
            on_token(content)
        if on_complete:
            on_complete()

    # Name used by the mobile app; delivery is single-shot, see above.
    send_message_stream = send_message_with_callbacks

    async def send_message_with_image(
        self,
        chat_id: str | int,
        message: str,
        image: ImageFile | dict[str, Any],
    ) -> Any:
        return await self._request(
            "POST",
            f"/chat/{chat_id}/image",
            params={"message": message},
            files=self._image_part(image),
        )

    # --- Models -------------------------------------------------------------

    async def get_all_models(self) -> Any:
        return await self._request("GET", "/models/all", auth=False)

    async def get_user_models(self) -> Any:
        return await self._request("GET", "/models/all/me")

    # --- Legacy names -------------------------------------------------------

    async def signup(self, username: str, email: str, password: str) -> Any:
        return await self.register(username, email, password)

    async def get_chats(self) -> Any:
        return await self.get_conversations()

    async def create_chat(self) -> Any:
        return await self.create_conversation()

    async def delete_chat(self, chat_id: str | int) -> Any:
        return await self.delete_conversation(chat_id)

    @staticmethod
    def _image_part(image: ImageFile | dict[str, Any]) -> dict[str, tuple[str, bytes, str]]:
        if not isinstance(image, ImageFile):
            image = ImageFile.model_validate(image)
        return {"image": (image.name, image.read_bytes(), image.type)}

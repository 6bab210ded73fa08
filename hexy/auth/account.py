"""Account flows used by the login, signup and profile screens.

Recovery from an expired session is decided on the error type: an
``AuthenticationError`` (HTTP 401) clears the stored credential so the app
falls back to the login screen.
"""

import logging
from typing import Any

from hexy.catalog.models import normalize_models
from hexy.client.api_client import HexyClient
from hexy.client.errors import ApiError, AuthenticationError
from hexy.models.schemas import ImageFile, ModelDescriptor, User, UserUpdate

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class SignupValidationError(ValueError):
    """Raised when signup input is rejected before reaching the server."""


class LoginValidationError(ValueError):
    """Raised when login input is incomplete."""


class AccountService:
    """Signup, login, profile and session management on top of HexyClient."""

    def __init__(self, client: HexyClient) -> None:
        self._client = client

    @staticmethod
    def validate_signup(
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> None:
        """Check signup input.

        Raises:
            SignupValidationError: If a field is blank, the passwords differ
                or the password is too short.
        """
        if not username.strip() or not email.strip() or not password.strip():
            raise SignupValidationError("Please fill in all fields")
        if password != confirm_password:
            raise SignupValidationError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise SignupValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> Any:
        """Register an account and log straight into it.

        Returns:
            The login response body.
        """
        self.validate_signup(username, email, password, confirm_password)
        await self._client.register(username.strip(), email.strip(), password)
        logger.info(f"Registered account {username.strip()}")
        return await self._client.login(username.strip(), password)

    async def login(self, username: str, password: str) -> Any:
        if not username.strip() or not password.strip():
            raise LoginValidationError("Please enter username and password")
        return await self._client.login(username.strip(), password)

    async def restore_session(self) -> User | None:
        """Return the signed-in user, or None when a new login is needed.

        A stored token that the server no longer accepts is cleared. Other
        errors propagate so the caller can tell "offline" from "signed out".
        """
        if not await self._client.is_authenticated():
            return None
        try:
            return User.model_validate(await self._client.get_current_user())
        except AuthenticationError:
            logger.info("Stored session was rejected; clearing credential")
            await self._client.logout()
            return None

    async def load_profile(self) -> tuple[User, list[ModelDescriptor]]:
        """Fetch the current user and the models their plan allows.

        A failure to load the models is logged and yields an empty list.

        Raises:
            AuthenticationError: After clearing the credential, when the
                session expired.
        """
        try:
            user = User.model_validate(await self._client.get_current_user())
        except AuthenticationError:
            await self._client.logout()
            raise

        try:
            models = normalize_models(await self._client.get_user_models())
        except ApiError as e:
            logger.warning(f"Error fetching user models: {e}")
            models = []
        return user, models

    async def update_profile(
        self,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> Any:
        update = UserUpdate(username=username, email=email, password=password)
        return await self._client.update_user(update)

    async def upload_avatar(self, image: ImageFile | dict[str, Any]) -> Any:
        return await self._client.upload_profile_image(image)

    async def logout(self) -> None:
        await self._client.logout()
        logger.info("Logged out")

    async def delete_account(self) -> None:
        """Delete the account, then forget its credential."""
        await self._client.delete_user()
        await self._client.logout()
        logger.info("Account deleted")

"""Client configuration with environment variable loading.

Pydantic-based configuration for the Hexy API client.
Values come from the process environment or a local .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://hextant-ai-production.up.railway.app"
DEFAULT_MODEL = "kwaipilot/kat-coder-pro:free"


def _default_credentials_path() -> Path:
    path = os.getenv("HEXY_CREDENTIALS_PATH")
    if path:
        return Path(path).expanduser()
    return Path.home() / ".hexy" / "credentials.json"


class ClientConfig(BaseModel):
    """Configuration for the Hexy API client.

    Attributes:
        base_url: Origin of the Hexy API, without trailing slash.
        timeout: Per-request timeout in seconds.
        default_model: Model used when a caller does not pick one.
        credentials_path: JSON file backing the persistent credential store.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("HEXY_API_BASE_URL", DEFAULT_BASE_URL),
        validate_default=True,
        description="Hexy API origin",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("HEXY_API_TIMEOUT", "120")),
        validate_default=True,
        gt=0.0,
        le=600.0,
        description="Request timeout in seconds",
    )
    default_model: str = Field(
        default_factory=lambda: os.getenv("HEXY_DEFAULT_MODEL", DEFAULT_MODEL),
        validate_default=True,
        min_length=1,
        description="Model used when none is selected",
    )
    credentials_path: Path = Field(
        default_factory=_default_credentials_path,
        description="Where the session token is persisted",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) origin and strip the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "HEXY_API_BASE_URL must start with http:// or https://"
            )
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()

"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: ClientConfig pointing at the in-process fake API
    - store / auth_session: In-memory credential persistence
    - backend: Fresh FastAPI fake of the Hexy API
    - client: HexyClient wired to the fake through ASGITransport
    - image_file: A small image on disk for multipart uploads
"""

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI

from hexy.auth.session import AuthSession
from hexy.auth.store import MemoryCredentialStore
from hexy.client.api_client import HexyClient
from hexy.client.config import ClientConfig
from hexy.models.schemas import ImageFile
from tests.fake_backend import create_fake_backend

# Smallest valid PNG header plus padding; content is never decoded.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def config(tmp_path: Path) -> ClientConfig:
    """Return client configuration for the test server.

    Returns:
        Config with a fake origin and a credentials file under tmp_path.
    """
    return ClientConfig(
        base_url="http://test",
        timeout=5.0,
        default_model="kwaipilot/kat-coder-pro:free",
        credentials_path=tmp_path / "credentials.json",
    )


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def auth_session(store: MemoryCredentialStore) -> AuthSession:
    return AuthSession(store)


@pytest.fixture
def backend() -> FastAPI:
    return create_fake_backend()


@pytest.fixture
async def client(
    config: ClientConfig,
    auth_session: AuthSession,
    backend: FastAPI,
) -> AsyncIterator[HexyClient]:
    """Create a HexyClient talking to the fake API.

    Yields:
        Client using ASGITransport, closed after the test.
    """
    transport = httpx.ASGITransport(app=backend)
    async with HexyClient(config=config, session=auth_session, transport=transport) as client:
        yield client


@pytest.fixture
def image_file(tmp_path: Path) -> ImageFile:
    """Write a small PNG and describe it the way an image picker would."""
    path = tmp_path / "photo.png"
    path.write_bytes(PNG_BYTES)
    return ImageFile(uri=f"file://{path}", type="image/png", name="photo.png")

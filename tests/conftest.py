"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - fake_provider: Scriptable provider standing in for the hosted model
    - async_client: HTTPX client wired to the relay app via ASGITransport
    - provider_config: Valid HuggingFace configuration for provider tests
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from chatrelay.api import app
from chatrelay.provider.base import ChatProvider
from chatrelay.provider.config import ProviderConfig
from chatrelay.provider.service import get_provider


class FakeProvider(ChatProvider):
    """Provider that returns a canned reply or raises a canned error."""

    name = "fake"

    def __init__(self) -> None:
        super().__init__(ProviderConfig(provider="gemini", api_key="test-key"))
        self.reply: str = "Hello from the model"
        self.error: Exception | None = None
        self.delay: float = 0.0
        self.calls: list[str] = []

    async def generate(self, message: str) -> str:
        self.calls.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Return a HuggingFace configuration with a test key."""
    return ProviderConfig(
        provider="huggingface",
        api_key="hf-test-key",
        model_name="bigscience/bloom",
        base_url="https://hf.test/models",
        timeout_seconds=5.0,
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Return a fresh scriptable provider."""
    return FakeProvider()


@pytest.fixture
async def async_client(fake_provider: FakeProvider) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for relay testing.

    The relay's provider dependency is replaced with ``fake_provider``.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_provider] = lambda: fake_provider
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

"""Tests for the AI provider factory."""

import pytest

from fact_guard.infrastructure.ai.factory import AIProviderFactory
from fact_guard.infrastructure.ai.openai_adapter import OpenAIAdapter


class StubProvider:
    """Minimal provider for registry tests."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def shutdown(self) -> None:
        self._initialized = False

    @property
    def provider_name(self) -> str:
        return "Stub"

    @property
    def is_available(self) -> bool:
        return self._initialized


def test_openai_registered_by_default():
    """The OpenAI provider is registered but not active."""
    factory = AIProviderFactory()
    assert factory.available_providers == {"openai": False}
    assert factory.get_provider("openai") is None


@pytest.mark.asyncio
async def test_create_openai_provider():
    """Creating the OpenAI provider passes configuration through."""
    factory = AIProviderFactory()

    provider = await factory.create_provider("openai", api_key="test-key", model="gpt-4o-mini", timeout=5)

    assert isinstance(provider, OpenAIAdapter)
    assert provider.is_available
    assert factory.get_provider("openai") is provider
    assert factory.available_providers["openai"] is True

    await factory.shutdown()
    assert factory.get_provider("openai") is None
    assert not provider.is_available


@pytest.mark.asyncio
async def test_create_provider_is_memoized():
    """A provider is created only once per name."""
    factory = AIProviderFactory()
    factory.register_provider("stub", StubProvider)

    first = await factory.create_provider("stub", option=1)
    second = await factory.create_provider("stub", option=2)

    assert first is second
    assert first.kwargs == {"option": 1}


@pytest.mark.asyncio
async def test_unknown_provider():
    """Unknown names are rejected."""
    with pytest.raises(ValueError):
        await AIProviderFactory().create_provider("nonexistent")


@pytest.mark.asyncio
async def test_missing_api_key_fails():
    """The OpenAI provider needs a key."""
    with pytest.raises(ConnectionError):
        await AIProviderFactory().create_provider("openai", api_key="")

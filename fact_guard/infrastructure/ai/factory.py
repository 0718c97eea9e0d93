"""Registry of generative providers keyed by name."""

import logging
from typing import Callable, Dict, Optional

from ...domain.ports.ai_provider import AIProvider
from .openai_adapter import OpenAIAdapter, OpenAIConfig

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[..., AIProvider]


def build_openai(**settings) -> AIProvider:
    """Build an OpenAI adapter from keyword settings."""
    return OpenAIAdapter(config=OpenAIConfig(**settings))


class AIProviderFactory:
    """Creates generative providers once per name and tracks them for shutdown."""

    def __init__(self):
        """Register the built-in providers."""
        self._builders: Dict[str, ProviderBuilder] = {"openai": build_openai}
        self._instances: Dict[str, AIProvider] = {}

    def register_provider(self, name: str, builder: ProviderBuilder) -> None:
        """Register a provider builder, replacing any previous one.

        Args:
            name: Provider key
            builder: Callable returning an uninitialized provider
        """
        self._builders[name] = builder

    async def create_provider(self, name: str, **settings) -> AIProvider:
        """Return the named provider, building and initializing it on first use.

        Args:
            name: Provider key
            **settings: Passed to the builder on first creation only

        Raises:
            ValueError: If no builder is registered under ``name``
        """
        if name in self._instances:
            return self._instances[name]
        if name not in self._builders:
            raise ValueError(f"Provider '{name}' not found")

        provider = self._builders[name](**settings)
        await provider.initialize()
        self._instances[name] = provider
        logger.info(f"🤖 AI provider '{name}' initialized ({provider.provider_name})")
        return provider

    def get_provider(self, name: str) -> Optional[AIProvider]:
        """Get an already created provider."""
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Registered provider keys mapped to whether they are ready."""
        return {
            name: bool(self._instances.get(name) and self._instances[name].is_available)
            for name in self._builders
        }

    async def shutdown(self) -> None:
        """Shut down every created provider."""
        for name, provider in list(self._instances.items()):
            await provider.shutdown()
            logger.info(f"👋 AI provider '{name}' shut down")
        self._instances.clear()

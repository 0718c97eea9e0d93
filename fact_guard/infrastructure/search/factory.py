"""Registry of web-search providers keyed by name."""

import logging
from typing import Callable, Dict, Optional

from ...domain.ports.search_provider import SearchProvider
from .exa_adapter import ExaConfig, ExaSearchAdapter

logger = logging.getLogger(__name__)

SearchBuilder = Callable[..., SearchProvider]


def build_exa(**settings) -> SearchProvider:
    """Build an Exa adapter from keyword settings."""
    return ExaSearchAdapter(config=ExaConfig(**settings))


class SearchProviderFactory:
    """Creates search providers and handles their lifecycle.

    Unlike AI providers, a name may only be registered once, and a failed
    initialization leaves nothing behind.
    """

    def __init__(self):
        """Register the built-in providers."""
        self._builders: Dict[str, SearchBuilder] = {}
        self._active: Dict[str, SearchProvider] = {}
        self.register_provider("exa", build_exa)

    def register_provider(self, name: str, builder: SearchBuilder) -> None:
        """Register a provider builder.

        Raises:
            ValueError: If ``name`` is already registered
        """
        if name in self._builders:
            raise ValueError(f"Provider {name} already registered")
        self._builders[name] = builder

    async def create_provider(self, name: str, **settings) -> SearchProvider:
        """Build and initialize a search provider.

        Args:
            name: Provider key
            **settings: Provider-specific configuration

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found
            RuntimeError: If initialization fails
        """
        if name not in self._builders:
            raise ValueError(f"Provider {name} not registered")

        provider = self._builders[name](**settings)
        try:
            await provider.initialize()
        except Exception as e:
            raise RuntimeError(f"Failed to initialize provider {name}: {e}") from e

        self._active[name] = provider
        logger.info(f"🌐 Search provider '{name}' initialized ({provider.provider_name})")
        return provider

    def get_provider(self, name: str) -> Optional[SearchProvider]:
        """Get an active provider, or None."""
        return self._active.get(name)

    async def shutdown_provider(self, name: str) -> None:
        """Shut down one provider if it is active."""
        provider = self._active.pop(name, None)
        if provider is not None:
            await provider.shutdown()

    async def shutdown_all(self) -> None:
        """Shut down every active provider."""
        for name in list(self._active):
            await self.shutdown_provider(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Registered provider keys mapped to whether they are active."""
        return {name: name in self._active for name in self._builders}

"""Dependency injection configuration for hexagonal architecture."""

import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import Request

from ..config import FactGuardConfig
from ..domain.ports.ai_provider import AIProvider
from ..domain.ports.auth_provider import AuthProvider
from ..domain.ports.correction_store import CorrectionStore
from ..domain.ports.search_provider import SearchProvider
from ..domain.services.claim_detector import ClaimDetector
from ..domain.services.content_cache import ContentCache
from ..domain.services.correction_memory import CorrectionMemory
from ..domain.services.fact_checking_service import FactCheckingService
from ..domain.services.rate_limiter import RateLimiter
from ..domain.services.suggestion_generalizer import SuggestionGeneralizer
from ..domain.services.web_cross_verifier import WebCrossVerifier
from .ai.factory import AIProviderFactory
from .auth.header_auth_adapter import HeaderAuthAdapter
from .search.factory import SearchProviderFactory
from .storage.memory_correction_store import InMemoryCorrectionStore

logger = logging.getLogger(__name__)


def load_environment() -> None:
    """Load variables from a .env file in the current or a parent directory."""
    if load_dotenv(verbose=True):
        logger.info("📁 Environment variables loaded from .env file via python-dotenv")


class ServiceContainer:
    """Service container for dependency injection.

    Builds the pipeline once per process. Providers passed to the constructor
    are used as-is and are not shut down by the container.
    """

    def __init__(
        self,
        config: Optional[FactGuardConfig] = None,
        ai_provider: Optional[AIProvider] = None,
        search_provider: Optional[SearchProvider] = None,
        correction_store: Optional[CorrectionStore] = None,
        auth_provider: Optional[AuthProvider] = None,
    ):
        """Initialize service container.

        Args:
            config: Pipeline configuration, read from the environment if omitted
            ai_provider: Generative collaborator override
            search_provider: Search collaborator override
            correction_store: Correction storage override
            auth_provider: Caller identity resolver override
        """
        if config is None:
            load_environment()
            config = FactGuardConfig.from_env()
        self._config = config
        self._ai_provider = ai_provider
        self._search_provider = search_provider
        self._store = correction_store if correction_store is not None else InMemoryCorrectionStore()
        self._auth = auth_provider or HeaderAuthAdapter(config.auth_header)
        self._ai_factory = AIProviderFactory()
        self._search_factory = SearchProviderFactory()
        self._services: Dict[str, Any] = {}

    @property
    def config(self) -> FactGuardConfig:
        """Active configuration."""
        return self._config

    @property
    def web_verification_enabled(self) -> bool:
        """Whether the running pipeline cross-verifies candidates."""
        service = self._services.get("fact_checking_service")
        return bool(service and service.web_verification_enabled)

    @property
    def started(self) -> bool:
        """Whether ``start`` has built the services."""
        return bool(self._services)

    async def _setup_ai_provider(self) -> Optional[AIProvider]:
        if self._ai_provider is not None:
            return self._ai_provider
        try:
            logger.info("🤖 Setting up AI provider...")
            provider = await self._ai_factory.create_provider(
                "openai",
                api_key=self._config.openai_api_key,
                model=self._config.detection_model,
                timeout=self._config.collaborator_timeout,
            )
            logger.info("✅ AI provider ready")
            return provider
        except Exception as e:
            logger.error(f"❌ Failed to setup AI provider: {e}")
            return None

    async def _setup_search_provider(self) -> Optional[SearchProvider]:
        if self._search_provider is not None:
            return self._search_provider
        if not self._config.web_verification_active:
            return None
        try:
            logger.info("🌐 Setting up search provider...")
            provider = await self._search_factory.create_provider(
                "exa",
                api_key=self._config.exa_api_key,
                timeout=self._config.collaborator_timeout,
            )
            logger.info("✅ Search provider ready")
            return provider
        except RuntimeError as e:
            logger.warning(f"⚠️ Failed to setup search provider, web verification disabled: {e}")
            return None

    async def start(self) -> None:
        """Create providers and wire the domain services."""
        if self.started:
            return
        logger.info("🔧 Setting up service container...")

        ai_provider = await self._setup_ai_provider()
        search_provider = await self._setup_search_provider()

        cache = ContentCache(ttl=self._config.cache_ttl, maxsize=self._config.cache_maxsize)
        memory = CorrectionMemory(self._store, similarity_threshold=self._config.similarity_threshold)
        rate_limiter = RateLimiter(min_interval=self._config.search_min_interval)

        fact_checking_service = None
        if ai_provider is not None:
            cross_verifier = None
            if search_provider is not None and self._config.web_verification_enabled:
                cross_verifier = WebCrossVerifier(
                    search_provider,
                    ai_provider,
                    rate_limiter,
                    include_domains=self._config.search_domains,
                    model=self._config.auxiliary_model,
                )
            fact_checking_service = FactCheckingService(
                detector=ClaimDetector(ai_provider, model=self._config.detection_model),
                generalizer=SuggestionGeneralizer(ai_provider, model=self._config.auxiliary_model),
                cache=cache,
                correction_memory=memory,
                cross_verifier=cross_verifier,
                min_text_length=self._config.min_text_length,
            )
        else:
            logger.warning("⚠️ No AI provider available - fact checking requests will fail")

        self._services = {
            "ai_provider": ai_provider,
            "search_provider": search_provider,
            "content_cache": cache,
            "correction_memory": memory,
            "rate_limiter": rate_limiter,
            "fact_checking_service": fact_checking_service,
        }
        logger.info("✅ Service container setup completed")

    async def shutdown(self) -> None:
        """Close the providers created by the container."""
        await self._ai_factory.shutdown()
        await self._search_factory.shutdown_all()
        self._services = {}
        logger.info("👋 Service container shut down")

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_fact_checking_service(self) -> FactCheckingService:
        """Get the fact checking service.

        Raises:
            RuntimeError: If no AI provider could be set up
        """
        service = self.get("fact_checking_service")
        if service is None:
            raise RuntimeError("Fact checking service unavailable: no AI provider configured")
        return service

    def get_auth_provider(self) -> AuthProvider:
        """Get the caller identity resolver."""
        return self._auth

    def provider_status(self) -> Dict[str, Dict[str, bool]]:
        """Availability of the generative and search providers."""
        ai_provider = self._services.get("ai_provider")
        search_provider = self._services.get("search_provider")
        return {
            "ai_providers": {
                (ai_provider.provider_name if ai_provider else "OpenAI"): bool(ai_provider and ai_provider.is_available),
            },
            "search_providers": {
                (search_provider.provider_name if search_provider else "Exa"): bool(
                    search_provider and search_provider.is_available
                ),
            },
        }


# Convenience functions for FastAPI dependency injection
def get_service_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's service container."""
    return request.app.state.container


def get_auth_provider(request: Request) -> AuthProvider:
    """FastAPI dependency for the caller identity resolver."""
    return get_service_container(request).get_auth_provider()

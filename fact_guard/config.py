"""Pipeline configuration management."""

import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

AUTHORITATIVE_DOMAINS: List[str] = [
    "wikipedia.org",
    "britannica.com",
    "nationalgeographic.com",
    "smithsonianmag.com",
    "history.com",
    "bbc.com",
    "reuters.com",
    "ap.org",
    "edu",
    "gov",
]


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


class FactGuardConfig(BaseModel):
    """Configuration for the fact-verification pipeline."""

    openai_api_key: str = Field(default="", description="OpenAI API key")
    detection_model: str = Field(default="gpt-4o", description="Model used for claim detection")
    auxiliary_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for generalization and web adjudication",
    )
    exa_api_key: Optional[str] = Field(default=None, description="Exa search API key")
    web_verification_enabled: bool = Field(default=True, description="Cross-check claims against web search")
    search_domains: List[str] = Field(
        default_factory=lambda: list(AUTHORITATIVE_DOMAINS),
        description="Domain allow-list for web verification",
    )
    cache_ttl: float = Field(default=24 * 60 * 60, description="Result cache TTL in seconds")
    cache_maxsize: int = Field(default=1024, description="Maximum number of cached results")
    search_min_interval: float = Field(
        default=0.25,
        description="Minimum seconds between web-search calls (4 calls/second)",
    )
    collaborator_timeout: float = Field(default=30.0, description="Timeout for external calls in seconds")
    min_text_length: int = Field(default=2, description="Shorter normalized input is not checked")
    similarity_threshold: float = Field(default=0.7, description="Jaccard ratio for correction suppression")
    auth_header: str = Field(default="X-User-Id", description="Header carrying the caller identity")

    @property
    def web_verification_active(self) -> bool:
        """Whether cross-verification can run with this configuration."""
        return self.web_verification_enabled and bool(self.exa_api_key)

    @classmethod
    def from_env(cls) -> "FactGuardConfig":
        """Create configuration from environment variables."""
        config = cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            detection_model=os.getenv("FACT_GUARD_DETECTION_MODEL", "gpt-4o"),
            auxiliary_model=os.getenv("FACT_GUARD_AUXILIARY_MODEL", "gpt-4o-mini"),
            exa_api_key=os.getenv("EXA_API_KEY") or None,
            web_verification_enabled=_env_bool("FACT_GUARD_WEB_VERIFICATION", True),
            cache_ttl=float(os.getenv("FACT_GUARD_CACHE_TTL", 24 * 60 * 60)),
            cache_maxsize=int(os.getenv("FACT_GUARD_CACHE_MAXSIZE", 1024)),
            search_min_interval=float(os.getenv("FACT_GUARD_SEARCH_INTERVAL", 0.25)),
            collaborator_timeout=float(os.getenv("FACT_GUARD_COLLABORATOR_TIMEOUT", 30.0)),
            auth_header=os.getenv("FACT_GUARD_AUTH_HEADER", "X-User-Id"),
        )

        if not config.openai_api_key:
            logger.warning("⚠️ OPENAI_API_KEY not found in environment variables")
        if config.web_verification_enabled and not config.exa_api_key:
            logger.warning("⚠️ EXA_API_KEY not set - web cross-verification disabled")
        elif not config.web_verification_enabled:
            logger.info("🚫 Web cross-verification disabled by configuration")

        return config

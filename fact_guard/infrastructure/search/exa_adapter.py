"""Exa implementation of the search provider interface."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from ...domain.errors import CollaboratorError
from ...domain.ports.search_provider import SearchProvider, WebSearchResult

logger = logging.getLogger(__name__)


class ExaConfig(BaseModel):
    """Configuration for the Exa adapter."""

    api_key: str = Field(..., description="Exa API key")
    base_url: str = Field(default="https://api.exa.ai", description="API base URL")
    search_type: str = Field(default="neural", description="Exa search type")
    use_autoprompt: bool = Field(default=True, description="Let Exa rewrite the query")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")


class ExaSearchAdapter(SearchProvider):
    """Exa search-and-contents implementation of the search provider."""

    def __init__(
        self,
        config: Optional[ExaConfig] = None,
        provider_name: str = "Exa",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            provider_name: Name of the provider
            transport: HTTP transport override, mainly for tests
        """
        self._config = config or ExaConfig(api_key="")
        self._name = provider_name
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if not self._config.api_key:
            raise ConnectionError("Failed to initialize Exa provider: EXA_API_KEY is not set")
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                transport=self._transport,
                headers={
                    "x-api-key": self._config.api_key,
                    "Content-Type": "application/json",
                },
            )
        self._initialized = True

    def _build_payload(self, query: str, include_domains: List[str], num_results: int) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "query": query,
            "type": self._config.search_type,
            "useAutoprompt": self._config.use_autoprompt,
            "numResults": num_results,
            "contents": {"text": True, "highlights": True},
        }
        if include_domains:
            payload["includeDomains"] = list(include_domains)
        return payload

    async def search(
        self,
        query: str,
        include_domains: List[str],
        num_results: int = 3,
    ) -> List[WebSearchResult]:
        """Search the web, restricted to ``include_domains``.

        Raises:
            CollaboratorError: On HTTP failure or a malformed response
        """
        if not self._client:
            raise CollaboratorError("Provider not initialized", provider=self._name)

        try:
            response = await self._client.post(
                "/search", json=self._build_payload(query, include_domains, num_results)
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.debug(f"[Exa] HTTP error {e.response.status_code}: {e.response.text[:500]}")
            raise CollaboratorError(f"Exa search failed: HTTP {e.response.status_code}", provider=self._name) from e
        except (httpx.HTTPError, ValueError) as e:
            raise CollaboratorError(f"Exa search failed: {e}", provider=self._name) from e

        results = []
        for item in data.get("results") or []:
            try:
                results.append(
                    WebSearchResult(
                        title=item.get("title") or "Untitled",
                        url=item["url"],
                        text=item.get("text") or "",
                        highlights=item.get("highlights") or [],
                        score=item.get("score") or 0.0,
                        metadata={"published": item.get("publishedDate")} if item.get("publishedDate") else {},
                    )
                )
            except (KeyError, ValidationError) as e:
                logger.warning(f"⚠️ Skipping malformed Exa result: {e}")

        logger.info(f"🌐 Exa returned {len(results)} results for: {query[:80]}")
        return results

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "web_search": True,
            "domain_filtering": True,
            "content_retrieval": True,
            "highlights": True,
        }

"""Search provider interface for web cross-verification."""

from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, Field


class WebSearchResult(BaseModel):
    """Search result returned by a web-search provider."""

    title: str = Field(default="Untitled", description="Page title")
    url: str = Field(..., description="Page URL")
    text: str = Field(default="", description="Retrieved page text")
    highlights: List[str] = Field(default_factory=list, description="Relevant excerpts")
    score: float = Field(default=0.0, description="Provider ranking score")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional metadata")

    def excerpt(self, max_chars: int = 500) -> str:
        """Render a bounded excerpt for adjudication prompts."""
        return (
            f"Source: {self.title or 'Untitled'}\n"
            f"Content: {self.text[:max_chars]}\n"
            f"Highlights: {' '.join(self.highlights)}"
        )


class SearchProvider(Protocol):
    """Protocol for web-search-and-content-retrieval collaborators."""

    async def initialize(self) -> None:
        """Initialize the provider and verify configuration."""
        ...

    async def search(
        self,
        query: str,
        include_domains: List[str],
        num_results: int = 3,
    ) -> List[WebSearchResult]:
        """Search the web, restricted to ``include_domains``."""
        ...

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...

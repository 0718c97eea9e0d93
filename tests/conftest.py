"""Test configuration and common fixtures."""

from typing import Any, Dict, List, Optional, Type

import pytest

from fact_guard.domain.errors import CollaboratorError
from fact_guard.domain.ports.ai_provider import ChatMessage
from fact_guard.domain.ports.search_provider import WebSearchResult
from fact_guard.infrastructure.storage.memory_correction_store import InMemoryCorrectionStore


class FakeAIProvider:
    """Scripted generative provider.

    Responses are queued per schema; the last queued response repeats.
    A queued exception is raised instead of returned.
    """

    def __init__(self):
        """Initialize the provider."""
        self._responses: Dict[Type, List[Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self._initialized = False

    def script(self, schema: Type, *responses: Any) -> None:
        """Queue responses for a schema."""
        self._responses.setdefault(schema, []).extend(responses)

    def calls_for(self, schema: Type) -> List[Dict[str, Any]]:
        """Calls made with a given schema."""
        return [call for call in self.calls if call["schema"] is schema]

    async def initialize(self) -> None:
        self._initialized = True

    async def shutdown(self) -> None:
        self._initialized = False

    async def generate_structured(
        self,
        messages: List[ChatMessage],
        schema: Type,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.1,
    ):
        self.calls.append({
            "messages": messages,
            "schema": schema,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        queue = self._responses.get(schema)
        if not queue:
            raise CollaboratorError(f"No scripted response for {schema.__name__}", provider="fake")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return schema.model_validate(response)

    @property
    def provider_name(self) -> str:
        return "FakeAI"

    @property
    def is_available(self) -> bool:
        return self._initialized

    @property
    def capabilities(self) -> Dict[str, bool]:
        return {"structured_output": True}


class FakeSearchProvider:
    """Scripted search provider recording every query."""

    def __init__(self, results: Optional[List[WebSearchResult]] = None):
        """Initialize the provider."""
        self.results: List[WebSearchResult] = results or []
        self.error: Optional[Exception] = None
        self.queries: List[Dict[str, Any]] = []
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def shutdown(self) -> None:
        self._initialized = False

    async def search(
        self,
        query: str,
        include_domains: List[str],
        num_results: int = 3,
    ) -> List[WebSearchResult]:
        self.queries.append({
            "query": query,
            "include_domains": list(include_domains),
            "num_results": num_results,
        })
        if self.error is not None:
            raise self.error
        return list(self.results)

    @property
    def provider_name(self) -> str:
        return "FakeSearch"

    @property
    def is_available(self) -> bool:
        return self._initialized

    @property
    def capabilities(self) -> Dict[str, bool]:
        return {"web_search": True}


class FakeClock:
    """Manually advanced clock with a matching async sleep."""

    def __init__(self, start: float = 1000.0):
        """Initialize the clock."""
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_ai() -> FakeAIProvider:
    """Provide a scripted generative provider."""
    return FakeAIProvider()


@pytest.fixture
def fake_search() -> FakeSearchProvider:
    """Provide a scripted search provider."""
    return FakeSearchProvider()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def correction_store() -> InMemoryCorrectionStore:
    """Provide an empty in-memory correction store."""
    return InMemoryCorrectionStore()


@pytest.fixture
def great_wall_text() -> str:
    """Markup with one plainly false location claim."""
    return "<p>The Great Wall of China is located in Tokyo.</p>"


@pytest.fixture
def web_sources() -> List[WebSearchResult]:
    """Search results about the Great Wall."""
    return [
        WebSearchResult(
            title="Great Wall of China",
            url="https://www.britannica.com/topic/Great-Wall-of-China",
            text="The Great Wall of China is a series of fortifications in northern China.",
            highlights=["fortifications in northern China"],
            score=0.92,
        ),
        WebSearchResult(
            title="Great Wall",
            url="https://en.wikipedia.org/wiki/Great_Wall_of_China",
            text="The Great Wall stretches across the historical northern borders of ancient Chinese states.",
            highlights=[],
            score=0.88,
        ),
    ]

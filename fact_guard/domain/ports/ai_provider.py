"""Protocol for generative-inference providers."""

from typing import Dict, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ChatMessage(BaseModel):
    """A single instruction or input message."""
    role: str
    content: str


class AIProvider(Protocol):
    """Protocol defining the interface for generative providers.

    Implementations must return an instance of ``schema`` or raise
    ``CollaboratorError``; they never return partially parsed output.
    """

    async def initialize(self) -> None:
        """Initialize the AI provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def generate_structured(
        self,
        messages: List[ChatMessage],
        schema: Type[SchemaT],
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.1,
    ) -> SchemaT:
        """Generate a response constrained to ``schema``."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...

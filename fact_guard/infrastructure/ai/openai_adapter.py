"""OpenAI implementation of the AI provider interface."""

import json
import logging
from typing import Dict, List, Optional, Type

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field, ValidationError

from ...domain.errors import CollaboratorError
from ...domain.ports.ai_provider import AIProvider, ChatMessage, SchemaT

logger = logging.getLogger(__name__)


class OpenAIConfig(BaseModel):
    """Configuration for the OpenAI adapter."""

    api_key: str = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4o", description="Default model")
    temperature: float = Field(default=0.1, description="Temperature for responses")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")
    timeout: float = Field(default=30.0, description="API timeout in seconds")
    max_retries: int = Field(default=0, description="Client-level retries")


def schema_instruction(schema: Type[BaseModel]) -> str:
    """Instruction pinning the response to a JSON schema."""
    return (
        "Respond with a single JSON object that conforms to this JSON schema:\n"
        f"{json.dumps(schema.model_json_schema(by_alias=True))}"
    )


class OpenAIAdapter(AIProvider):
    """OpenAI chat-completions provider returning schema-validated objects."""

    def __init__(
        self,
        config: Optional[OpenAIConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            client: Pre-built client, mainly for tests
        """
        self._config = config or OpenAIConfig(api_key="")
        self._client = client
        self._initialized = False

    async def initialize(self) -> None:
        """Create the API client."""
        if self._client is None:
            if not self._config.api_key:
                raise ConnectionError("Failed to initialize OpenAI provider: OPENAI_API_KEY is not set")
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                timeout=self._config.timeout,
                max_retries=self._config.max_retries,
            )
        self._initialized = True

    async def generate_structured(
        self,
        messages: List[ChatMessage],
        schema: Type[SchemaT],
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.1,
    ) -> SchemaT:
        """Request a JSON object and validate it against ``schema``.

        Raises:
            CollaboratorError: On API failure, empty output or schema violation
        """
        if not self._client:
            raise CollaboratorError("Provider not initialized", provider=self.provider_name)

        payload = [message.model_dump() for message in messages]
        payload.insert(0, {"role": "system", "content": schema_instruction(schema)})

        try:
            response = await self._client.chat.completions.create(
                model=model or self._config.model,
                messages=payload,
                response_format={"type": "json_object"},
                temperature=temperature,
                max_tokens=max_tokens or self._config.max_tokens,
            )
        except OpenAIError as e:
            raise CollaboratorError(f"OpenAI request failed: {e}", provider=self.provider_name) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CollaboratorError("OpenAI returned an empty response", provider=self.provider_name)

        try:
            return schema.model_validate_json(content)
        except ValidationError as e:
            logger.warning(f"⚠️ Response violated {schema.__name__} schema: {content[:200]}")
            raise CollaboratorError(
                f"Response violated {schema.__name__} schema", provider=self.provider_name
            ) from e

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        return "OpenAI"

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "structured_output": True,
            "claim_detection": True,
            "suggestion_generalization": True,
            "web_adjudication": True,
        }

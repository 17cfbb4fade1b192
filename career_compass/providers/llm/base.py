"""Abstract base class and types for LLM providers.

Defines the provider-agnostic request/response types and the
LLMProvider interface that the completion adapters implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig


class TaskType(Enum):
    """Task types, used for logging and test doubles."""

    CAREER_RECOMMENDATION = "career_recommendation"
    CHAT_RESPONSE = "chat_response"


@dataclass(frozen=True)
class LLMMessage:
    """Provider-agnostic chat message.

    Attributes:
        role: Message role ("system", "user", "assistant").
        content: Text content, or a list of chat-completion content parts
            ({"type": "text", ...} / {"type": "image_url", ...}) passed
            through to the provider unchanged.
    """

    role: str
    content: str | list[dict[str, Any]]


@dataclass(frozen=True)
class CompletionRequest:
    """A fully-specified completion request payload.

    Sampling parameters are part of the payload rather than provider
    defaults, so identical inputs always produce an identical request.

    Attributes:
        messages: Ordered conversation sent to the model.
        task: Task type (for logging and test doubles).
        temperature: Sampling temperature. None uses the provider default.
        max_tokens: Output token budget. None uses the provider default.
    """

    messages: tuple[LLMMessage, ...]
    task: TaskType
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass
class LLMResponse:
    """Provider-agnostic response format.

    Attributes:
        content: Generated text (empty string if the provider sent none).
        model: Actual model used (for logging).
        input_tokens: Number of input tokens used.
        output_tokens: Number of output tokens generated.
        finish_reason: Why generation stopped ("stop", "length", ...).
        latency_ms: Response time in milliseconds.
    """

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason: str | None = None
    latency_ms: float = 0.0


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, config: "ProviderConfig") -> None:
        """Initialize with provider configuration.

        Args:
            config: Provider configuration including credentials and model.
        """
        self.config = config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'openrouter', 'mock')."""
        ...

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> LLMResponse:
        """Send one completion request.

        Exactly one attempt is made; retry policy belongs to the caller.

        Args:
            request: Messages and sampling parameters.

        Returns:
            LLMResponse with the generated text.

        Raises:
            TransportError: The provider could not be reached.
            UpstreamError: The provider returned a non-success status.
        """
        ...

    async def send(self, request: CompletionRequest) -> str:
        """Send a completion request and return only the generated text.

        Args:
            request: Messages and sampling parameters.

        Returns:
            Raw model text (possibly empty).
        """
        response = await self.complete(request)
        return response.content

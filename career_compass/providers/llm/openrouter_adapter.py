"""OpenRouter chat-completion adapter.

OpenRouter exposes an OpenAI-compatible API, so the adapter drives it
through the OpenAI SDK pointed at the OpenRouter base URL.
"""

import time
from typing import TYPE_CHECKING, Any

import openai
import structlog
from openai import AsyncOpenAI

from career_compass.providers.errors import (
    ProviderConfigurationError,
    ProviderError,
    TransportError,
    UpstreamError,
)
from career_compass.providers.llm.base import (
    CompletionRequest,
    LLMProvider,
    LLMResponse,
)

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig

logger = structlog.get_logger()

_LOG_EXCERPT_LENGTH = 200
"""Max characters of provider messages logged."""

_UNKNOWN_PROVIDER_MESSAGE = "Unknown provider error"


def _extract_provider_message(body: object) -> str | None:
    """Pull the message out of a provider error envelope.

    Accepts both the full envelope ``{"error": {"message": ...}}`` and the
    already-unwrapped ``{"message": ...}`` form the SDK sometimes exposes.
    """
    if not isinstance(body, dict):
        return None
    inner = body.get("error", body)
    if isinstance(inner, str):
        return inner
    if isinstance(inner, dict):
        message = inner.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _classify_openai_error(error: Exception) -> ProviderError:
    """Map OpenAI SDK exceptions to the internal error taxonomy.

    Returns a ProviderError subclass instance (does not raise).
    The caller is responsible for raising via ``raise _classify_openai_error(e) from e``.
    """
    if isinstance(error, openai.APIStatusError):
        message = _extract_provider_message(error.body) or _UNKNOWN_PROVIDER_MESSAGE
        return UpstreamError(error.status_code, message)

    if isinstance(error, openai.APIConnectionError):
        # Includes APITimeoutError
        return TransportError(f"Could not reach provider: {type(error).__name__}")

    return ProviderError(type(error).__name__)


def _parse_openai_response(response: Any) -> tuple[str, str | None]:
    """Parse a chat-completion response.

    Returns:
        Tuple of (content, finish_reason). Content is empty when the
        provider sent no choices or no message text.

    Raises:
        UpstreamError: If the provider embedded an error envelope in a
            200 response instead of choices.
    """
    choices = getattr(response, "choices", None)
    if not choices:
        embedded = getattr(response, "error", None)
        message = _extract_provider_message({"error": embedded})
        if message:
            raise UpstreamError(502, message)
        return "", None

    choice = choices[0]
    message = getattr(choice, "message", None)
    content = getattr(message, "content", None) or ""
    return content, getattr(choice, "finish_reason", None)


class OpenRouterAdapter(LLMProvider):
    """OpenRouter adapter using the OpenAI SDK."""

    def __init__(self, config: "ProviderConfig") -> None:
        """Initialize OpenRouter adapter.

        Args:
            config: Provider configuration with the OpenRouter API key.

        Raises:
            ProviderConfigurationError: If no API key is configured.
        """
        if not config.api_key:
            raise ProviderConfigurationError("OPENROUTER_API_KEY is not set")
        super().__init__(config)
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            # One attempt per call; retries belong to the caller
            max_retries=0,
            default_headers={
                "HTTP-Referer": config.app_url,
                "X-Title": config.app_title,
            },
        )

    @property
    def provider_name(self) -> str:
        """Return 'openrouter'."""
        return "openrouter"

    async def complete(self, request: CompletionRequest) -> LLMResponse:
        """Generate a completion through OpenRouter.

        Args:
            request: Messages and sampling parameters.

        Returns:
            LLMResponse with the generated text.

        Raises:
            TransportError: Network failure or timeout.
            UpstreamError: Non-success status from the provider.
        """
        model = self.config.model
        api_messages = [
            {"role": msg.role, "content": msg.content} for msg in request.messages
        ]

        logger.info(
            "llm_request_start",
            provider=self.provider_name,
            model=model,
            task=request.task.value,
            message_count=len(api_messages),
        )

        start_time = time.monotonic()

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=api_messages,
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
        except (openai.APIStatusError, openai.APIConnectionError) as e:
            classified = _classify_openai_error(e)
            logger.error(
                "llm_request_failed",
                provider=self.provider_name,
                model=model,
                task=request.task.value,
                error_type=type(classified).__name__,
                status=getattr(classified, "status", None),
                error=str(classified)[:_LOG_EXCERPT_LENGTH],
            )
            raise classified from e

        latency_ms = (time.monotonic() - start_time) * 1000
        content, finish_reason = _parse_openai_response(response)

        usage = getattr(response, "usage", None)
        input_tokens = getattr(usage, "prompt_tokens", 0) or 0
        output_tokens = getattr(usage, "completion_tokens", 0) or 0

        logger.info(
            "llm_request_complete",
            provider=self.provider_name,
            model=model,
            task=request.task.value,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=finish_reason,
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            model=getattr(response, "model", None) or model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=finish_reason,
            latency_ms=latency_ms,
        )

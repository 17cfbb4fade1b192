"""LLM provider module.

Provider interface, request/response types and adapters.
"""

from career_compass.providers.llm.base import (
    CompletionRequest,
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)
from career_compass.providers.llm.mock_adapter import MockLLMProvider
from career_compass.providers.llm.openrouter_adapter import OpenRouterAdapter

__all__ = [
    # Base types
    "CompletionRequest",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "TaskType",
    # Adapters
    "MockLLMProvider",
    "OpenRouterAdapter",
]

"""Provider factory functions.

Singleton pattern for the process-wide LLM provider.
"""

from career_compass.core.config import settings
from career_compass.providers.config import ProviderConfig
from career_compass.providers.llm.base import LLMProvider
from career_compass.providers.llm.mock_adapter import MockLLMProvider
from career_compass.providers.llm.openrouter_adapter import OpenRouterAdapter

_llm_provider: LLMProvider | None = None


def get_llm_provider(config: ProviderConfig | None = None) -> LLMProvider:
    """Get or create the LLM provider singleton.

    The first call sets the config (app startup); subsequent calls reuse
    the instance and its HTTP connection pool.

    Args:
        config: Optional provider configuration. If None and no provider
            exists, builds one from application settings.

    Returns:
        LLMProvider instance.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    global _llm_provider

    if _llm_provider is None:
        if config is None:
            config = ProviderConfig.from_settings(settings)

        if config.llm_provider == "openrouter":
            _llm_provider = OpenRouterAdapter(config)
        elif config.llm_provider == "mock":
            _llm_provider = MockLLMProvider()
        else:
            raise ValueError(f"Unknown LLM provider: {config.llm_provider}")

    return _llm_provider


def reset_providers() -> None:
    """Reset provider singletons.

    Used in tests to ensure isolation between test cases.
    """
    global _llm_provider
    _llm_provider = None

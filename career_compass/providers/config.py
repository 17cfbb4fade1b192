"""Provider configuration management.

Centralized configuration for the LLM completion provider.
"""

from dataclasses import dataclass

from career_compass.core.config import (
    DEFAULT_LLM_APP_TITLE,
    DEFAULT_LLM_APP_URL,
    DEFAULT_LLM_BASE_URL,
    DEFAULT_LLM_MODEL,
    DEFAULT_LLM_TIMEOUT_SECONDS,
    Settings,
)


@dataclass
class ProviderConfig:
    """Centralized provider configuration.

    Attributes:
        llm_provider: Which LLM provider to use ("openrouter" or "mock").
        api_key: Bearer credential for the provider.
        base_url: Root URL of the OpenAI-compatible completion API.
        model: Fixed model identifier used for every completion.
        app_url: Attribution URL sent as the HTTP-Referer header.
        app_title: Attribution title sent as the X-Title header.
        timeout_seconds: Transport timeout for one completion call.
        max_retries: Retry attempts the caller makes on retryable errors.
            Zero means a single attempt.
        retry_base_delay_ms: Base delay for exponential backoff.
        retry_max_delay_ms: Max delay cap for exponential backoff.
    """

    llm_provider: str = "openrouter"
    api_key: str | None = None
    base_url: str = DEFAULT_LLM_BASE_URL
    model: str = DEFAULT_LLM_MODEL

    app_url: str = DEFAULT_LLM_APP_URL
    app_title: str = DEFAULT_LLM_APP_TITLE

    timeout_seconds: float = DEFAULT_LLM_TIMEOUT_SECONDS

    # Retry policy (applied by callers, never inside the adapter)
    max_retries: int = 0
    retry_base_delay_ms: int = 1000
    retry_max_delay_ms: int = 30000

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"ProviderConfig(llm_provider={self.llm_provider!r}, "
            f"base_url={self.base_url!r}, model={self.model!r}, "
            f"api_key={'***' if self.api_key else None})"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderConfig":
        """Build provider configuration from application settings.

        Args:
            settings: Loaded application settings (env + .env file).

        Returns:
            ProviderConfig instance.
        """
        return cls(
            llm_provider=settings.llm_provider,
            api_key=settings.openrouter_api_key.get_secret_value() or None,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            app_url=settings.llm_app_url,
            app_title=settings.llm_app_title,
            timeout_seconds=settings.llm_timeout_seconds,
            max_retries=settings.llm_max_retries,
        )

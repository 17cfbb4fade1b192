"""Application configuration loaded from environment variables.

Settings for database, API, LLM provider and authentication. Uses
pydantic-settings for validation and .env file support.
"""

import uuid
from typing import Literal

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
_INSECURE_DEFAULT_PASSWORD = "career_compass_dev_password"  # nosec B105

# Minimum length for AUTH_SECRET in production (256 bits = 32 bytes)
_MIN_AUTH_SECRET_LENGTH = 32

# Completion client defaults, shared with providers.config.ProviderConfig
DEFAULT_LLM_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_LLM_MODEL = "mistralai/mistral-7b-instruct"
DEFAULT_LLM_TIMEOUT_SECONDS = 60.0
DEFAULT_LLM_APP_URL = "http://localhost:3000"
DEFAULT_LLM_APP_TITLE = "Career Recommendation App"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "career_compass"
    database_user: str = "career_compass_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD
    # Full URL override (e.g. sqlite+aiosqlite:///./career_compass.db)
    database_url_override: str = ""
    # Create tables from ORM metadata on startup
    database_auto_create: bool = False

    # API
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8000

    # CORS (never "*": the session cookie requires credentialed CORS)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # LLM provider (OpenRouter, OpenAI-compatible)
    llm_provider: Literal["openrouter", "mock"] = "openrouter"
    openrouter_api_key: SecretStr = SecretStr("")
    llm_base_url: str = DEFAULT_LLM_BASE_URL
    llm_model: str = DEFAULT_LLM_MODEL
    llm_timeout_seconds: float = DEFAULT_LLM_TIMEOUT_SECONDS
    llm_max_retries: int = 0
    llm_app_url: str = DEFAULT_LLM_APP_URL
    llm_app_title: str = DEFAULT_LLM_APP_TITLE

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Authentication
    # Local mode: DEFAULT_USER_ID provides user context without a session
    # Hosted mode: auth_enabled=True, signed JWT cookie required on every request
    default_user_id: uuid.UUID | None = None
    auth_enabled: bool = False
    auth_secret: SecretStr = SecretStr("")
    auth_issuer: str = "career-compass"
    auth_audience: str = "career-compass"
    auth_cookie_name: str = "career-compass.session-token"

    # Rate Limiting
    # Format: "count/period" (e.g., "10/minute", "100/hour")
    rate_limit_llm: str = "10/minute"  # assessment submission, chat relay
    rate_limit_enabled: bool = True

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate production security requirements.

        Checks:
        - Retry count and timeout must be sane (all environments)
        - CORS must not use wildcard origin (incompatible with credentials)
        - Database password must not be the default in production
        - OPENROUTER_API_KEY must be set in production (openrouter provider)
        - AUTH_SECRET must be set and >= 32 chars when auth is enabled in production
        """
        if self.llm_max_retries < 0:
            msg = f"LLM_MAX_RETRIES cannot be negative. Got: {self.llm_max_retries}"
            raise ValueError(msg)
        if self.llm_timeout_seconds <= 0:
            msg = (
                "LLM_TIMEOUT_SECONDS must be positive. "
                f"Got: {self.llm_timeout_seconds}"
            )
            raise ValueError(msg)

        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "This application uses credentials (cookies) which are "
                "incompatible with wildcard CORS origins."
            )
            raise ValueError(msg)

        if self.environment == "production":
            if (
                not self.database_url_override
                and self.database_password == _INSECURE_DEFAULT_PASSWORD
            ):
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            if (
                self.llm_provider == "openrouter"
                and not self.openrouter_api_key.get_secret_value()
            ):
                msg = (
                    "OPENROUTER_API_KEY must be set in production "
                    "when LLM_PROVIDER=openrouter."
                )
                raise ValueError(msg)

            if self.auth_enabled:
                secret_value = self.auth_secret.get_secret_value()
                if len(secret_value) < _MIN_AUTH_SECRET_LENGTH:
                    msg = (
                        f"AUTH_SECRET must be at least {_MIN_AUTH_SECRET_LENGTH} "
                        "characters when AUTH_ENABLED=true in production."
                    )
                    raise ValueError(msg)

        return self


settings = Settings()

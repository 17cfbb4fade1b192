"""Shared dependencies for API endpoints.

Local mode uses DEFAULT_USER_ID; hosted mode validates the session JWT
from its cookie. Token issuance belongs to the external auth service.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from career_compass.core.auth import decode_session_subject
from career_compass.core.config import settings
from career_compass.core.database import get_db
from career_compass.core.errors import UnauthorizedError, UpstreamFailureError
from career_compass.providers.config import ProviderConfig
from career_compass.providers.errors import ProviderConfigurationError
from career_compass.providers.factory import get_llm_provider
from career_compass.providers.llm.base import LLMProvider
from career_compass.services.recommendation_pipeline import RecommendationPipeline

logger = structlog.get_logger()


def get_current_user_id(request: Request) -> uuid.UUID:
    """Get current user ID from auth context.

    Validation steps (hosted mode):
    1. Read JWT from cookie
    2. Decode + verify signature (HS256)
    3. Verify exp, aud, iss claims
    4. Extract sub as UUID

    The 401 never says why auth failed (expired, bad signature, ...).

    Args:
        request: HTTP request (injected by FastAPI).

    Returns:
        UUID of the current authenticated user.

    Raises:
        UnauthorizedError: 401 for any auth failure.
    """
    if not settings.auth_enabled:
        if settings.default_user_id is None:
            raise UnauthorizedError()
        return settings.default_user_id

    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise UnauthorizedError()

    user_id = decode_session_subject(token)
    if user_id is None:
        raise UnauthorizedError()
    return user_id


def get_provider() -> LLMProvider:
    """Get the process-wide LLM provider.

    Raises:
        UpstreamFailureError: 502 if the provider cannot be built from the
            current settings (e.g. no API key).
    """
    try:
        return get_llm_provider()
    except ProviderConfigurationError as e:
        logger.error("llm_provider_unavailable", error=str(e))
        raise UpstreamFailureError() from e


def get_pipeline(
    provider: Annotated[LLMProvider, Depends(get_provider)],
) -> RecommendationPipeline:
    """Build the recommendation pipeline with the configured retry policy."""
    return RecommendationPipeline(
        provider, retry_config=ProviderConfig.from_settings(settings)
    )


# Reusable type aliases for dependency injection
CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Provider = Annotated[LLMProvider, Depends(get_provider)]
Pipeline = Annotated[RecommendationPipeline, Depends(get_pipeline)]

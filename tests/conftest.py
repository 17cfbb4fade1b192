import json
import uuid
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from career_compass.core.config import settings
from career_compass.core.database import create_tables
from career_compass.core.rate_limiting import limiter
from career_compass.providers import factory
from career_compass.providers.llm.base import TaskType
from career_compass.providers.llm.mock_adapter import MockLLMProvider

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Test user ID (consistent across tests for predictable auth)
TEST_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
USER_B_ID = uuid.UUID("00000000-0000-0000-0000-000000000099")

# Security: This is a test-only secret. Production uses a real secret from env.
TEST_AUTH_SECRET = "test-secret-key-that-is-at-least-32-characters-long"  # nosec B105  # gitleaks:allow


def create_test_jwt(
    user_id: uuid.UUID = TEST_USER_ID,
    *,
    secret: str = TEST_AUTH_SECRET,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session JWT for test authentication.

    Args:
        user_id: User UUID to encode in the sub claim.
        secret: Signing secret (must match settings.auth_secret in tests).
        expires_delta: Time until expiration. Defaults to 1 hour.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "aud": settings.auth_audience,
        "iss": settings.auth_issuer,
        "exp": now + (expires_delta or timedelta(hours=1)),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_career(title: str = "Software Developer", **overrides: Any) -> dict:
    """Build one career entry in the model's JSON shape."""
    career = {
        "title": title,
        "industry": "Technology",
        "description": "Designs, builds and maintains software systems.",
        "skills": ["Programming", "Problem Solving"],
        "qualifications": ["Bachelor's degree in Computer Science"],
        "salaryRange": {"entry": "$60k", "mid": "$90k", "senior": "$130k"},
        "growth": "Strong demand expected over the next decade.",
        "matchReason": "Matches your interest in technology.",
        "nextSteps": ["Build a portfolio", "Contribute to open source"],
        "challenges": "Keeping up with fast-changing tools.",
        "relatedCareers": ["Data Engineer", "DevOps Engineer"],
    }
    career.update(overrides)
    return career


def make_model_output(
    careers: list[dict] | None = None,
    *,
    analysis: str = "You enjoy solving technical problems in a team setting.",
    fenced: bool = False,
    **extra: Any,
) -> str:
    """Build model output text carrying a recommendation document."""
    document = {
        "analysis": analysis,
        "careers": careers
        if careers is not None
        else [make_career(), make_career("Data Analyst"), make_career("UX Designer")],
        **extra,
    }
    text = json.dumps(document, indent=2)
    if fenced:
        return f"```json\n{text}\n```"
    return text


# Answers as the presentation layer submits them (JSON keys are strings)
VALID_ANSWERS = {
    "1": ["Technology and Innovation", "Science and Research"],
    "2": ["Remote work"],
    "3": ["Technical skills", "Creative problem-solving"],
    "4": "Bachelor's degree",
    "5": "Flexible hours",
}


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create an in-memory test database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_llm() -> Iterator[MockLLMProvider]:
    """Fixture that provides mock LLM and resets after test.

    Pre-configured with a valid recommendation document and injected into
    the factory singleton.

    Yields:
        MockLLMProvider instance.
    """
    mock = MockLLMProvider(
        {
            TaskType.CAREER_RECOMMENDATION: make_model_output(),
            TaskType.CHAT_RESPONSE: "Have you considered data engineering?",
        }
    )

    # Inject mock into factory singleton
    factory._llm_provider = mock

    yield mock

    # Reset after test
    factory.reset_providers()


@pytest.fixture(autouse=True, scope="session")
def _disable_rate_limiting() -> Iterator[None]:
    """Keep the in-memory limiter from leaking counts across tests."""
    original = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = original


# =============================================================================
# API Test Fixtures
# =============================================================================


def _override_db(db_engine) -> None:
    from career_compass.core.database import get_db
    from career_compass.main import app

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture
async def client(db_engine, mock_llm) -> AsyncGenerator[AsyncClient, None]:  # noqa: ARG001
    """Async HTTP client for authenticated API tests.

    Sets up:
    - Test database connection via dependency override
    - JWT auth with test secret
    - Mock LLM provider
    - httpx.AsyncClient with ASGI transport + auth cookie

    Yields:
        Configured AsyncClient for making authenticated API requests.
    """
    from career_compass.main import app

    _override_db(db_engine)

    original_auth_enabled = settings.auth_enabled
    original_auth_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={settings.auth_cookie_name: create_test_jwt(TEST_USER_ID)},
    ) as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    settings.auth_secret = original_auth_secret
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unauthenticated_client(
    db_engine, mock_llm  # noqa: ARG001
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client without authentication.

    Auth is enabled but no JWT cookie is provided.
    """
    from career_compass.main import app

    _override_db(db_engine)

    original_auth_enabled = settings.auth_enabled
    original_auth_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    settings.auth_secret = original_auth_secret
    app.dependency_overrides.clear()

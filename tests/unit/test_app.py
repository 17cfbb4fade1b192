"""Tests for application wiring: health check, security headers, error envelope."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from career_compass.core.errors import NotFoundError
from career_compass.main import app, create_app, lifespan


class TestHealthCheck:
    """GET /health."""

    @pytest.mark.asyncio
    async def test_healthy(self):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSecurityHeaders:
    """SecurityHeadersMiddleware."""

    @pytest.mark.asyncio
    async def test_headers_present(self, client: AsyncClient):
        response = await client.get("/api/v1/assessments/questions")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store, max-age=0"


class TestErrorEnvelope:
    """Exception handlers render the standard envelope."""

    @pytest.mark.asyncio
    async def test_api_error_rendered(self):
        test_app = create_app()

        @test_app.get("/boom")
        async def boom() -> None:
            raise NotFoundError("Recommendation")

        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://test"
        ) as ac:
            response = await ac.get("/boom")

        assert response.status_code == 404
        assert response.json() == {
            "error": {
                "code": "NOT_FOUND",
                "message": "Recommendation not found",
                "details": None,
            }
        }

    @pytest.mark.asyncio
    async def test_unhandled_error_is_generic_500(self):
        test_app = create_app()

        @test_app.get("/crash")
        async def crash() -> None:
            raise RuntimeError("secret internal detail")

        async with AsyncClient(
            transport=ASGITransport(app=test_app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            response = await ac.get("/crash")

        assert response.status_code == 500
        assert response.json() == {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": None,
            }
        }
        assert "secret internal detail" not in response.text


class TestLifespan:
    """Startup table creation."""

    @pytest.mark.asyncio
    async def test_creates_tables_when_enabled(self):
        with (
            patch("career_compass.main.settings.database_auto_create", True),
            patch("career_compass.main.create_tables", new_callable=AsyncMock) as create,
        ):
            async with lifespan(FastAPI()):
                pass

        create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_skips_tables_by_default(self):
        with (
            patch("career_compass.main.settings.database_auto_create", False),
            patch("career_compass.main.create_tables", new_callable=AsyncMock) as create,
        ):
            async with lifespan(FastAPI()):
                pass

        create.assert_not_awaited()

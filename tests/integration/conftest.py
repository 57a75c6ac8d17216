"""
Integration Test Fixtures.

Fixtures for integration tests - the real application over the test
database. These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog.backend.core.config import get_app_config
from blog.backend.core.database import get_db_session


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    Each request gets its own session on the test database, committed
    when the request succeeds and rolled back when it fails, as in
    production.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from blog.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    with patch("blog.backend.api.health.get_session_factory", return_value=db_session_factory):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as test_client:
            yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def token_header() -> str:
    """Name of the session token header."""
    return get_app_config().security.token_header


@pytest.fixture
async def auth_headers(
    client: AsyncClient,
    token_header: str,
    admin_credentials: dict[str, str],
) -> dict[str, str]:
    """Headers carrying a fresh administrator session token."""
    response = await client.post("/login", json=admin_credentials)
    assert response.status_code == 202, response.text
    return {token_header: response.json()["data"]["token"]}


# =============================================================================
# Data Helpers
# =============================================================================


@pytest.fixture
def create_tags(client: AsyncClient, auth_headers: dict[str, str]):
    """
    Create tags through the API and return their ids.

    Usage:
        python_id, web_id = await create_tags("python", "web")
    """

    async def _create(*names: str) -> list[str]:
        response = await client.post("/tags", json={"names": list(names)}, headers=auth_headers)
        body = ApiAssertions.assert_success(response, 201)
        return [tag["id"] for tag in body["data"]]

    return _create


@pytest.fixture
def create_article(client: AsyncClient, auth_headers: dict[str, str]):
    """
    Create an article through the API and return its JSON.

    Usage:
        article = await create_article(url="hello", tags=[tag_id])
    """

    async def _create(**overrides: Any) -> dict[str, Any]:
        payload = {
            "title": "JavaScript builds everything",
            "begins": "A short teaser",
            "content": "The whole story",
            **overrides,
        }
        response = await client.post("/articles", json=payload, headers=auth_headers)
        body = ApiAssertions.assert_success(response, 201)
        return body["data"]

    return _create


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for envelope assertions."""

    @staticmethod
    def assert_success(response: Response, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert the response is a success envelope.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON body
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        body = response.json()
        assert body["status"] == expected_status
        assert "level" not in body
        return body

    @staticmethod
    def assert_error(
        response: Response,
        expected_status: int,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert the response is an error envelope.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_message: Expected message text, if checked

        Returns:
            Response JSON body
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        body = response.json()
        assert set(body) == {"status", "level", "message", "extra"}
        assert body["status"] == expected_status
        if expected_message is not None:
            assert body["message"] == expected_message
        return body


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()

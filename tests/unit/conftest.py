"""
Unit Test Fixtures.

Fixtures for unit tests - the database session is mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = TagService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Model Stand-ins
# =============================================================================


@pytest.fixture
def make_record():
    """
    Build attribute bags standing in for model instances.

    Usage:
        article = make_record(id="a1", url="hello")
    """

    def _make(**fields):
        return SimpleNamespace(**fields)

    return _make

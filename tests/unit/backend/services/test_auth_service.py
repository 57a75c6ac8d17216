"""
Unit Tests for Authentication Service.

Credentials and token verification are patched; the session repository
is mocked.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from blog.backend.core.exceptions import AuthenticationError
from blog.backend.core.security import TokenVerification
from blog.backend.core.utils import utc_now
from blog.backend.services.auth import AuthService

SETTINGS = SimpleNamespace(admin_username="admin", admin_password_hash="hash", password_salt="salt")


@pytest.fixture
def service(mock_db_session):
    return AuthService(mock_db_session)


@pytest.fixture
def live_session(make_record):
    return make_record(id="s1", token="tok", expired_at=utc_now() + timedelta(minutes=5))


class TestLogin:
    """Tests for AuthService.login."""

    @pytest.fixture(autouse=True)
    def _settings(self):
        with patch("blog.backend.services.auth.get_settings", return_value=SETTINGS):
            yield

    @pytest.mark.asyncio
    async def test_login_opens_session(self, service, make_record):
        expires = utc_now() + timedelta(minutes=30)

        with patch("blog.backend.services.auth.verify_password", return_value=True), \
             patch("blog.backend.services.auth.create_session_token", return_value=("tok", expires)) as mock_token, \
             patch.object(service.repo, "create", return_value=make_record(id="s1")) as mock_create:
            token = await service.login("admin", "pw", "10.0.0.1")

        assert token == "tok"
        mock_token.assert_called_once_with({"ip": "10.0.0.1"})
        mock_create.assert_awaited_once_with({"token": "tok", "expired_at": expires})

    @pytest.mark.asyncio
    async def test_wrong_username(self, service):
        with patch("blog.backend.services.auth.verify_password") as mock_verify:
            with pytest.raises(AuthenticationError) as exc_info:
                await service.login("root", "pw", None)

        assert exc_info.value.key == "indexApi-1000"
        mock_verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        with patch("blog.backend.services.auth.verify_password", return_value=False), \
             patch.object(service.repo, "create") as mock_create:
            with pytest.raises(AuthenticationError) as exc_info:
                await service.login("admin", "nope", None)

        assert exc_info.value.key == "indexApi-1001"
        mock_create.assert_not_awaited()


class TestAuthenticate:
    """Tests for AuthService.authenticate."""

    @pytest.mark.asyncio
    async def test_no_token(self, service):
        with pytest.raises(AuthenticationError) as exc_info:
            await service.authenticate(None)

        assert exc_info.value.key == "authMiddleware-1000"

    @pytest.mark.asyncio
    async def test_no_live_session(self, service):
        with patch.object(service.repo, "find_live", return_value=None):
            with pytest.raises(AuthenticationError) as exc_info:
                await service.authenticate("tok")

        assert exc_info.value.key == "authMiddleware-1000"

    @pytest.mark.asyncio
    async def test_expired_session(self, service, live_session):
        live_session.expired_at = utc_now() - timedelta(seconds=1)

        with patch.object(service.repo, "find_live", return_value=live_session):
            with pytest.raises(AuthenticationError) as exc_info:
                await service.authenticate("tok")

        assert exc_info.value.key == "authMiddleware-1003"

    @pytest.mark.asyncio
    async def test_valid_token(self, service, live_session):
        with patch.object(service.repo, "find_live", return_value=live_session), \
             patch("blog.backend.services.auth.verify_token", return_value=TokenVerification(valid=True)):
            assert await service.authenticate("tok") is live_session

    @pytest.mark.asyncio
    async def test_invalid_token_ends_session(self, service, live_session, mock_db_session):
        """The session is closed and committed before the request fails."""
        failed = TokenVerification(valid=False, error="Signature verification failed.")

        with patch.object(service.repo, "find_live", return_value=live_session), \
             patch.object(service.repo, "soft_delete") as mock_delete, \
             patch("blog.backend.services.auth.verify_token", return_value=failed):
            with pytest.raises(AuthenticationError) as exc_info:
                await service.authenticate("tok")

        assert exc_info.value.key == "authMiddleware-1001"
        assert exc_info.value.error == "Signature verification failed."
        mock_delete.assert_awaited_once_with("s1")
        mock_db_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_logout(service, live_session):
    with patch.object(service.repo, "soft_delete") as mock_delete:
        await service.logout(live_session)

    mock_delete.assert_awaited_once_with("s1")

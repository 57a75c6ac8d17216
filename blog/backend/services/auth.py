"""
Authentication Service.

Administrator login, session token checks and logout.

A login creates a Session row holding the signed token. Protected
requests present the token in the configured header; it is accepted
while its session is live, not past expired_at, and the token itself
still verifies. A token that fails verification ends its session.
"""

import hmac

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.config import get_settings
from blog.backend.core.exceptions import AuthenticationError
from blog.backend.core.security import create_session_token, verify_password, verify_token
from blog.backend.core.utils import utc_now
from blog.backend.models.session import Session
from blog.backend.repositories.session import SessionRepository
from blog.backend.services.base import BaseService


class AuthService(BaseService):
    """Service for administrator sessions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SessionRepository(session)

    async def login(self, username: str, password: str, client_ip: str | None) -> str:
        """
        Check the administrator credentials and open a session.

        Args:
            username: Submitted username
            password: Submitted password
            client_ip: Client address, embedded in the token

        Returns:
            Signed session token

        Raises:
            AuthenticationError: indexApi-1000 for a wrong username,
                indexApi-1001 for a wrong password
            EmptyCredentialError: If the password is empty
        """
        settings = get_settings()

        if not hmac.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8")):
            raise AuthenticationError("indexApi-1000")

        if not verify_password(password, settings.password_salt, settings.admin_password_hash):
            raise AuthenticationError("indexApi-1001")

        token, expired_at = create_session_token({"ip": client_ip})
        session = await self.repo.create({"token": token, "expired_at": expired_at})

        self._log_operation("Session opened", session_id=session.id)
        return token

    async def authenticate(self, token: str | None) -> Session:
        """
        Resolve the live session for a token.

        Raises:
            AuthenticationError: authMiddleware-1000 when no live session
                holds the token, authMiddleware-1003 when the session has
                expired, authMiddleware-1001 when the token does not verify
        """
        if not token:
            raise AuthenticationError("authMiddleware-1000")

        session = await self.repo.find_live(token)
        if session is None:
            raise AuthenticationError("authMiddleware-1000")

        if session.expired_at <= utc_now():
            raise AuthenticationError("authMiddleware-1003")

        verification = verify_token(token)
        if not verification.valid:
            await self.repo.soft_delete(session.id)
            # The request fails after this point; keep the forced logout.
            await self.session.commit()
            self._log_operation("Session closed on invalid token", session_id=session.id)
            raise AuthenticationError("authMiddleware-1001", error=verification.error)

        return session

    async def logout(self, session: Session) -> None:
        """Close a session."""
        await self.repo.soft_delete(session.id)
        self._log_operation("Session closed", session_id=session.id)

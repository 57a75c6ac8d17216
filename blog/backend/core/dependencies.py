"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.config import get_app_config
from blog.backend.core.database import get_db_session
from blog.backend.core.exceptions import endpoint_errors
from blog.backend.core.i18n import request_locale
from blog.backend.core.logging import get_logger
from blog.backend.models.session import Session
from blog.backend.services.auth import AuthService

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_locale(request: Request) -> str:
    """Locale used for response messages."""
    return request_locale(request)


Locale = Annotated[str, Depends(get_locale)]


async def require_session(request: Request, db: DbSession) -> Session:
    """
    Require a live login session.

    Reads the token from the header named by security.token_header.

    Raises:
        AuthenticationError: authMiddleware-1000, -1001 or -1003
        ServerError: authMiddleware-1002 on unexpected failures
    """
    header = get_app_config().security.token_header
    token = request.headers.get(header)

    with endpoint_errors("authMiddleware-1002"):
        session = await AuthService(db).authenticate(token)

    logger.debug("Session authenticated", extra={"session_id": session.id})
    return session


CurrentSession = Annotated[Session, Depends(require_session)]

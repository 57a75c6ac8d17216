"""
Session Repository.

Data access layer for login sessions.
"""

from blog.backend.models.session import Session
from blog.backend.repositories.base import BaseRepository


class SessionRepository(BaseRepository[Session]):
    """Repository for Session model."""

    model = Session
    collection = "session"

    async def find_live(self, token: str) -> Session | None:
        """Get the session holding a token, unless it has been deleted."""
        return await self.find_one(token=token)

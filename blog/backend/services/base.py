"""
Base Service.

Services hold the business rules between the routes and the repositories.
They raise ApplicationError subclasses carrying the message key the client
should see, and never build responses themselves.

Usage:
    class CommentService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = CommentRepository(session)

        async def get_comment(self, comment_id: str) -> Comment:
            return self._require(await self.repo.find_by_id(comment_id), "commentApi-1002")
"""

from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.exceptions import NotFoundError
from blog.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """Shares the request's database session and a logger bound to the service name."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(type(self).__module__).bind(service=type(self).__name__)

    @property
    def session(self) -> AsyncSession:
        """The request's database session."""
        return self._session

    def _require(self, value: T | None, key: str) -> T:
        """
        Return a repository lookup result that must exist.

        Raises:
            NotFoundError: With ``key`` when value is None
        """
        if value is None:
            raise NotFoundError(key)
        return value

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a state-changing operation at info level."""
        self._logger.info(operation, extra=context)

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra=context)

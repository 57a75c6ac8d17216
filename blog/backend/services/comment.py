"""
Comment Service.

Business logic for comments on articles.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.pagination import ListParams
from blog.backend.models.comment import Comment
from blog.backend.repositories.article import ArticleRepository
from blog.backend.repositories.comment import CommentRepository
from blog.backend.schemas.comment import CommentCreate
from blog.backend.services.base import BaseService


class CommentService(BaseService):
    """Service for comment business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CommentRepository(session)
        self.articles = ArticleRepository(session)

    async def create_comment(self, article_id: str, data: CommentCreate) -> Comment:
        """
        Comment on a live article.

        Raises:
            NotFoundError: If the article does not exist (articleApi-1003)
        """
        self._require(await self.articles.find_by_id(article_id), "articleApi-1003")

        self._log_operation("Creating comment", article_id=article_id)
        return await self.repo.create(
            {
                "article_id": article_id,
                "username": data.username,
                "email": data.email,
                "context": data.context,
            }
        )

    async def list_comments(self, article_id: str, params: ListParams) -> list[Comment]:
        """
        List live comments of a live article.

        Raises:
            NotFoundError: If the article does not exist (articleApi-1003)
        """
        self._require(await self.articles.find_by_id(article_id), "articleApi-1003")
        return await self.repo.find_all(
            filters={"article_id": article_id},
            sort_by=params.sort_by,
            descending=params.descending,
            limit=params.limit,
            offset=params.offset,
        )

    async def update_comment(self, comment_id: str, context: str) -> Comment:
        """
        Replace a comment's body.

        Raises:
            NotFoundError: If the comment does not exist (commentApi-1002)
        """
        self._require(await self.repo.find_by_id(comment_id), "commentApi-1002")
        self._log_operation("Updating comment", comment_id=comment_id)
        return await self.repo.find_and_update(comment_id, context=context)

    async def delete_comment(self, comment_id: str) -> Comment:
        """Soft delete a comment."""
        self._require(await self.repo.find_by_id(comment_id), "commentApi-1002")
        self._log_operation("Deleting comment", comment_id=comment_id)
        return await self.repo.soft_delete(comment_id)

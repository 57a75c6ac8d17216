"""
Article Service.

Business logic for articles: creation with tags, updates, tag changes,
bulk publishing and soft deletion.

URL uniqueness is checked before writing and is not enforced by the
database, so two concurrent requests may still claim the same url.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.exceptions import ConflictError, ServerError, ValidationError
from blog.backend.core.pagination import ListParams
from blog.backend.core.utils import unique, utc_now
from blog.backend.models.article import Article
from blog.backend.repositories.article import ArticleRepository
from blog.backend.repositories.tag import TagRepository
from blog.backend.schemas.article import ArticleCreate, ArticleUpdate
from blog.backend.services.base import BaseService
from blog.backend.services.tag_sync import (
    MissingRecordError,
    SyncResult,
    TagSynchronizer,
    failure_message,
    run_partial,
)


class ArticleService(BaseService):
    """
    Service for article business logic.

    Not-found cases raise NotFoundError("articleApi-1003").
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ArticleRepository(session)
        self.tags = TagRepository(session)
        self.synchronizer = TagSynchronizer(session)

    async def _ensure_url_free(self, url: str, article_id: str | None = None) -> None:
        """Raise ConflictError if another live article uses the url."""
        holder = await self.repo.find_by_url(url)
        if holder is not None and holder.id != article_id:
            raise ConflictError("articleApi-1000")

    async def create_article(self, data: ArticleCreate) -> Article:
        """
        Create an article and attach it to its tags.

        Tag ids and cover images are deduplicated in order. Every tag must
        exist before anything is written.

        Args:
            data: Article creation data

        Returns:
            Created article

        Raises:
            ConflictError: If the url is already used (articleApi-1000)
            ServerError: If a tag does not exist (articleApi-1001)
        """
        if data.url is not None:
            await self._ensure_url_free(data.url)

        tag_ids = unique(data.tags)
        for tag_id in tag_ids:
            if await self.tags.find_by_id(tag_id) is None:
                raise ServerError(
                    "articleApi-1001",
                    error=failure_message(MissingRecordError("tag", tag_id)),
                )

        fields = {
            "title": data.title,
            "begins": data.begins,
            "content": data.content,
            "cover_images": unique(data.cover_images),
        }
        if data.url is not None:
            fields["url"] = data.url

        self._log_operation("Creating article", url=data.url, tags=len(tag_ids))
        article = await self.repo.create(fields)

        if tag_ids:
            result = await self.synchronizer.sync(article.id, push=tag_ids)
            if not result.ok:
                raise ServerError("articleApi-1001", error=result.errors)

        self._log_debug("Article created", article_id=article.id)
        return article

    async def get_article(self, key: str) -> Article:
        """Get a live article by id or url."""
        return self._require(await self.repo.find_by_id_or_url(key), "articleApi-1003")

    async def list_articles(self, params: ListParams) -> list[Article]:
        """List live articles."""
        return await self.repo.find_all(
            sort_by=params.sort_by,
            descending=params.descending,
            limit=params.limit,
            offset=params.offset,
        )

    async def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        """
        Update an article's own fields.

        Raises:
            ValidationError: If no field is given (articleApi-1005)
            NotFoundError: If the article does not exist
            ConflictError: If the new url is used by another article
        """
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        if not values:
            raise ValidationError("articleApi-1005")

        self._require(await self.repo.find_by_id(article_id), "articleApi-1003")

        if "url" in values:
            await self._ensure_url_free(values["url"], article_id)
        if "cover_images" in values:
            values["cover_images"] = unique(values["cover_images"])

        self._log_operation("Updating article", article_id=article_id, fields=list(values))
        return await self.repo.find_and_update(article_id, **values)

    async def update_tags(self, article_id: str, push: list[str], pull: list[str]) -> SyncResult:
        """
        Attach and detach tags.

        Raises:
            NotFoundError: If the article does not exist
        """
        self._log_operation("Updating article tags", article_id=article_id)
        return await self.synchronizer.sync(article_id, push=push, pull=pull)

    async def publish(self, changes: dict[str, bool]) -> list[str]:
        """
        Publish or unpublish several articles.

        Args:
            changes: Article id to True (publish) or False (unpublish)

        Returns:
            Error strings for articles that could not be updated
        """
        lock = asyncio.Lock()

        async def apply(article_id: str) -> None:
            if await self.repo.find_by_id(article_id) is None:
                raise MissingRecordError("article", article_id)
            published_at = utc_now() if changes[article_id] else None
            await self.repo.find_and_update(article_id, published_at=published_at)

        self._log_operation("Publishing articles", count=len(changes))
        return await run_partial(list(changes), apply, lock)

    async def delete_article(self, article_id: str) -> None:
        """
        Soft delete an article and detach it from every tag.

        Raises:
            NotFoundError: If the article does not exist
        """
        self._require(await self.repo.find_by_id(article_id), "articleApi-1003")

        result = await self.synchronizer.detach_all(article_id)
        if not result.ok:
            raise ServerError("articleApi-1009", error=result.errors)

        self._log_operation("Deleting article", article_id=article_id)
        await self.repo.soft_delete(article_id)

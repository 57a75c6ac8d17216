"""
Article Repository.

Data access layer for articles.
"""

from blog.backend.models.article import Article
from blog.backend.repositories.base import BaseRepository


class ArticleRepository(BaseRepository[Article]):
    """Repository for Article model."""

    model = Article
    collection = "article"

    async def find_by_url(self, url: str) -> Article | None:
        """Get the live article using a url."""
        return await self.find_one(url=url)

    async def find_by_id_or_url(self, key: str) -> Article | None:
        """Get a live article by id, falling back to its url."""
        article = await self.find_by_id(key)
        if article is None:
            article = await self.find_by_url(key)
        return article

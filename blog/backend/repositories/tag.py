"""
Tag Repository.

Data access layer for tags and their article references.

Article references are a set: ``add_article`` inserts a reference only
when it is absent and ``remove_article`` deletes it. Both are single
statements, so a repeated add or remove is a no-op rather than an error.
"""

from collections import defaultdict
from typing import Any

from sqlalchemy import DateTime, String, delete, insert, literal, select

from blog.backend.core.exceptions import EmptyInputError
from blog.backend.core.utils import utc_now
from blog.backend.models.article import Article
from blog.backend.models.tag import Tag, tag_articles
from blog.backend.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """
    Repository for Tag model.

    ``create`` is an upsert by name: asking for a tag whose name is
    already used by a live tag returns that tag with a refreshed
    ``updated_at`` instead of creating a duplicate.
    """

    model = Tag
    collection = "tag"

    async def create(self, fields: dict[str, Any]) -> Tag:
        """
        Create a tag, or return the live tag with the same name.

        Raises:
            EmptyInputError: If no name is given
        """
        if not fields or not fields.get("name"):
            raise EmptyInputError(self.collection)

        existing = await self.find_one(name=fields["name"])
        if existing is not None:
            return await self.find_and_update(existing.id)
        return await super().create(fields)

    async def add_article(self, tag_id: str, article_id: str) -> None:
        """Add an article reference to a tag if it is not there yet."""
        present = (
            select(tag_articles.c.id)
            .where(
                tag_articles.c.tag_id == tag_id,
                tag_articles.c.article_id == article_id,
            )
            .correlate(None)
        )
        row = select(
            literal(tag_id, String),
            literal(article_id, String),
            literal(utc_now(), DateTime),
        ).where(~present.exists())

        await self.session.execute(
            insert(tag_articles).from_select(["tag_id", "article_id", "created_at"], row)
        )
        await self.find_and_update(tag_id)

    async def remove_article(self, tag_id: str, article_id: str) -> None:
        """Remove an article reference from a tag."""
        await self.session.execute(
            delete(tag_articles).where(
                tag_articles.c.tag_id == tag_id,
                tag_articles.c.article_id == article_id,
            )
        )
        await self.find_and_update(tag_id)

    async def article_ids(self, tag_id: str) -> list[str]:
        """Referenced article ids in insertion order, deleted articles included."""
        result = await self.session.execute(
            select(tag_articles.c.article_id)
            .where(tag_articles.c.tag_id == tag_id)
            .order_by(tag_articles.c.id)
        )
        return list(result.scalars().all())

    async def tag_ids_for_article(self, article_id: str) -> list[str]:
        """Ids of the live tags referencing an article."""
        result = await self.session.execute(
            select(tag_articles.c.tag_id)
            .join(Tag, Tag.id == tag_articles.c.tag_id)
            .where(tag_articles.c.article_id == article_id, Tag.deleted_at.is_(None))
            .order_by(tag_articles.c.id)
        )
        return list(result.scalars().all())

    async def articles_by_tag(self, tag_ids: list[str]) -> dict[str, list[Article]]:
        """
        Live articles referenced by each tag, in insertion order.

        Args:
            tag_ids: Tags to load references for

        Returns:
            Mapping of tag id to its articles; tags without references map
            to an empty list
        """
        grouped: dict[str, list[Article]] = defaultdict(list)
        if not tag_ids:
            return grouped

        result = await self.session.execute(
            select(tag_articles.c.tag_id, Article)
            .join(Article, Article.id == tag_articles.c.article_id)
            .where(tag_articles.c.tag_id.in_(tag_ids), Article.deleted_at.is_(None))
            .order_by(tag_articles.c.id)
        )
        for tag_id, article in result.all():
            grouped[tag_id].append(article)
        return grouped

    async def articles_of(
        self,
        tag_id: str,
        sort_by: str = "created_at",
        descending: bool = True,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Article]:
        """
        Live articles referenced by a tag, sorted and paginated.

        Args:
            tag_id: Tag id
            sort_by: Article attribute to sort by
            descending: Sort direction
            limit: Maximum number of articles
            offset: Number of articles to skip

        Returns:
            List of articles
        """
        sort_column = getattr(Article, sort_by)
        order = sort_column.desc() if descending else sort_column.asc()

        statement = (
            select(Article)
            .join(tag_articles, tag_articles.c.article_id == Article.id)
            .where(tag_articles.c.tag_id == tag_id, Article.deleted_at.is_(None))
            .order_by(order, tag_articles.c.id)
            .offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

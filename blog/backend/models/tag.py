"""
Tag Model.

A tag groups articles. The tag-to-article references live in the
``tag_articles`` association table, maintained only from the tag side:
rows are ordered by their autoincrement id and a (tag_id, article_id)
pair appears at most once.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from blog.backend.core.utils import utc_now
from blog.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin

tag_articles = Table(
    "tag_articles",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tag_id", ForeignKey("tags.id"), nullable=False, index=True),
    Column("article_id", ForeignKey("articles.id"), nullable=False, index=True),
    Column("created_at", DateTime, nullable=False, default=utc_now),
    UniqueConstraint("tag_id", "article_id", name="uq_tag_articles_tag_article"),
)


class Tag(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Tag database model."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"

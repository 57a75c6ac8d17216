"""
Article Model.

A blog post. ``published_at`` set means published; ``url`` is the
human-readable slug, unique among articles that are not deleted.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog.backend.core.utils import epoch_millis
from blog.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class Article(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Article database model."""

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    begins: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        default=epoch_millis,
    )
    cover_images: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, url={self.url!r})>"

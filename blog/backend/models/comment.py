"""
Comment Model.

A reader's comment on an article.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class Comment(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Comment database model."""

    __tablename__ = "comments"

    article_id: Mapped[str] = mapped_column(
        ForeignKey("articles.id"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    context: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, article_id={self.article_id})>"

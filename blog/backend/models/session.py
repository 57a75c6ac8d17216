"""
Session Model.

A login session. The token is the signed JWT handed to the client;
a session is live while it is not deleted and expired_at is in the future.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from blog.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class Session(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Session database model."""

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        unique=True,
    )
    expired_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Session(id={self.id}, expired_at={self.expired_at})>"

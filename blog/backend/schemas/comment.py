"""
Comment Schemas.

Pydantic schemas for comment API request/response validation.
"""

from datetime import datetime

from pydantic import Field

from blog.backend.schemas.base import ApiModel

COMMENT_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class CommentCreate(ApiModel):
    """Schema for commenting on an article."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name of the commenter",
    )
    email: str | None = Field(
        default=None,
        max_length=255,
        description="Contact email, never shown publicly",
    )
    context: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Comment body",
    )


class CommentUpdate(ApiModel):
    """Schema for editing a comment's body."""

    context: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Comment body",
    )


class CommentResponse(ApiModel):
    """Schema for comment in API responses."""

    id: str
    article_id: str = Field(alias="article_id")
    username: str
    email: str | None = None
    context: str
    created_at: datetime
    updated_at: datetime

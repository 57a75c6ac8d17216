"""
Tag Schemas.

Pydantic schemas for tag API request/response validation.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from blog.backend.schemas.base import ApiModel

TAG_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "name": "name",
}

# Article fields embedded in tag lists unless articleFields says otherwise
TAG_LIST_ARTICLE_FIELDS = ["id"]
TAG_DETAIL_ARTICLE_FIELDS = ["id", "url", "title", "begins", "coverImages", "createdAt", "updatedAt"]


class TagsCreate(ApiModel):
    """Schema for creating tags by name. Blank and repeated names are skipped."""

    names: list[str] = Field(
        ...,
        description="Tag names",
        examples=[["python", "fastapi"]],
    )


class TagRename(ApiModel):
    """Schema for renaming a tag."""

    name: str = Field(
        ...,
        max_length=100,
        description="New tag name",
    )


class TagBrief(ApiModel):
    """Tag identity returned after creation."""

    id: str
    name: str


class TagResponse(ApiModel):
    """Schema for a tag in API responses."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class TagArticles(ApiModel):
    """Articles referenced by a tag, with their count."""

    amount: int
    content: list[dict[str, Any]]


class TagListItem(ApiModel):
    """Schema for tag lists."""

    id: str
    name: str
    articles: TagArticles


class TagDetail(TagResponse):
    """Schema for a single tag with its (paginated) articles."""

    articles: list[dict[str, Any]]

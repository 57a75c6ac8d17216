"""
Article Schemas.

Pydantic schemas for article API request/response validation, plus the
field whitelists used for sorting and projecting articles.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, AnyHttpUrl, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from blog.backend.schemas.base import ApiModel

# Public field name -> model attribute
ARTICLE_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "begins": "begins",
    "content": "content",
    "url": "url",
    "coverImages": "cover_images",
    "publishedAt": "published_at",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

ARTICLE_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "publishedAt": "published_at",
    "title": "title",
    "url": "url",
}

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    """Accept an absolute http(s) URL and keep it as written."""
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError as e:
        raise ValueError(f"{value!r} is not an http(s) URL") from e
    return value


ImageUrl = Annotated[str, AfterValidator(_check_http_url)]


class ArticleCreate(ApiModel):
    """Schema for creating an article."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Article title",
        examples=["JavaScript builds everything"],
    )
    begins: str = Field(
        ...,
        min_length=1,
        description="Teaser shown in article lists",
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Article body",
    )
    url: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Unique slug; defaults to the creation time in epoch milliseconds",
        examples=["javascript-builds-everything"],
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ids of tags that should reference this article",
    )
    cover_images: list[ImageUrl] = Field(
        default_factory=list,
        description="Cover image URLs",
    )


class ArticleUpdate(ApiModel):
    """Schema for updating an article. Only provided fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    begins: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1, max_length=255)
    cover_images: list[ImageUrl] | None = Field(default=None)


class ArticleTagsUpdate(ApiModel):
    """Tag ids to attach to (push) and detach from (pull) an article."""

    push: list[str] = Field(default_factory=list)
    pull: list[str] = Field(default_factory=list)


class ArticleResponse(ApiModel):
    """Schema for a full article in API responses."""

    id: str
    title: str
    begins: str
    content: str
    url: str
    cover_images: list[str]
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ArticleSummary(ApiModel):
    """Schema for article lists; the body is left out."""

    id: str
    title: str
    begins: str
    url: str
    cover_images: list[str]
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


def project_article(article: Any, fields: list[str]) -> dict[str, Any]:
    """
    Select public fields of an article.

    Args:
        article: Article model instance
        fields: Public field names, as returned by parse_fields

    Returns:
        Dict keyed by public field name
    """
    return {name: getattr(article, ARTICLE_FIELDS[name]) for name in fields}

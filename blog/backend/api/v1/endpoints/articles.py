"""
Articles API Endpoints.

REST API endpoints for article management. Reads are public; writes
require a session token.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from blog.backend.core.dependencies import CurrentSession, DbSession, Locale
from blog.backend.core.exceptions import endpoint_errors
from blog.backend.core.pagination import ListParams, list_params
from blog.backend.core.responses import success_response
from blog.backend.schemas.article import (
    ARTICLE_SORT_FIELDS,
    ArticleCreate,
    ArticleResponse,
    ArticleSummary,
    ArticleTagsUpdate,
    ArticleUpdate,
)
from blog.backend.schemas.base import SuccessResponse
from blog.backend.services.article import ArticleService

router = APIRouter()

ArticleListParams = Annotated[ListParams, Depends(list_params(ARTICLE_SORT_FIELDS))]


@router.post(
    "",
    response_model=SuccessResponse[ArticleResponse],
    status_code=201,
    summary="Create an article",
    description="Create an article and attach it to the given tags.",
)
async def create_article(
    data: ArticleCreate,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Create an article."""
    with endpoint_errors("articleApi-1001"):
        article = await ArticleService(db).create_article(data)
    return success_response(201, "articleApi-1000", ArticleResponse.model_validate(article), locale)


@router.get(
    "",
    response_model=SuccessResponse[list[ArticleSummary]],
    summary="List articles",
    description="List articles without their body.",
)
async def list_articles(
    db: DbSession,
    locale: Locale,
    params: ArticleListParams,
) -> JSONResponse:
    """List articles."""
    with endpoint_errors("articleApi-1002"):
        articles = await ArticleService(db).list_articles(params)
    return success_response(
        200,
        "articleApi-1001",
        [ArticleSummary.model_validate(article) for article in articles],
        locale,
    )


@router.put(
    "/publish/blog",
    response_model=SuccessResponse[list[str]],
    summary="Publish articles",
    description=(
        "Publish (true) or unpublish (false) several articles. Articles that "
        "could not be updated are listed in data."
    ),
)
async def publish_articles(
    changes: Annotated[dict[str, bool], Body(examples=[{"<articleId>": True}])],
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Publish or unpublish articles."""
    with endpoint_errors("articleApi-1008"):
        errors = await ArticleService(db).publish(changes)
    return success_response(200, "articleApi-1005", errors or None, locale)


@router.get(
    "/{key}",
    response_model=SuccessResponse[ArticleResponse],
    summary="Get an article",
    description="Get a single article by id or by url.",
)
async def get_article(
    key: str,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Get an article by id or url."""
    with endpoint_errors("articleApi-1004"):
        article = await ArticleService(db).get_article(key)
    return success_response(200, "articleApi-1002", ArticleResponse.model_validate(article), locale)


@router.put(
    "/{article_id}",
    response_model=SuccessResponse[ArticleResponse],
    summary="Update an article",
    description="Update an article. Only provided fields are updated.",
)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Update an article."""
    with endpoint_errors("articleApi-1006"):
        article = await ArticleService(db).update_article(article_id, data)
    return success_response(200, "articleApi-1003", ArticleResponse.model_validate(article), locale)


@router.put(
    "/{article_id}/tags",
    response_model=SuccessResponse[list[str]],
    summary="Update an article's tags",
    description=(
        "Attach the article to the push tags and detach it from the pull tags. "
        "Tags that could not be updated are listed in data."
    ),
)
async def update_article_tags(
    article_id: str,
    data: ArticleTagsUpdate,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Attach and detach tags."""
    with endpoint_errors("articleApi-1007"):
        result = await ArticleService(db).update_tags(article_id, data.push, data.pull)
    return success_response(200, "articleApi-1004", result.errors or None, locale)


@router.delete(
    "/{article_id}",
    response_model=SuccessResponse[None],
    summary="Delete an article",
    description="Soft delete an article and detach it from its tags.",
)
async def delete_article(
    article_id: str,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Delete an article."""
    with endpoint_errors("articleApi-1009"):
        await ArticleService(db).delete_article(article_id)
    return success_response(200, "articleApi-1006", locale=locale)

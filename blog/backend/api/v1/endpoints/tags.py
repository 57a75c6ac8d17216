"""
Tags API Endpoints.

REST API endpoints for tag management. Reads are public; writes
require a session token.

Both read endpoints embed articles. ``articleFields`` selects which
article fields are included (comma separated, ``id`` always present).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from blog.backend.core.dependencies import CurrentSession, DbSession, Locale
from blog.backend.core.exceptions import endpoint_errors
from blog.backend.core.pagination import ListParams, list_params, parse_fields
from blog.backend.core.responses import success_response
from blog.backend.schemas.article import ARTICLE_FIELDS, ARTICLE_SORT_FIELDS, project_article
from blog.backend.schemas.base import SuccessResponse
from blog.backend.schemas.tag import (
    TAG_DETAIL_ARTICLE_FIELDS,
    TAG_LIST_ARTICLE_FIELDS,
    TAG_SORT_FIELDS,
    TagArticles,
    TagBrief,
    TagDetail,
    TagListItem,
    TagRename,
    TagResponse,
    TagsCreate,
)
from blog.backend.services.tag import TagService

router = APIRouter()

TagListParams = Annotated[ListParams, Depends(list_params(TAG_SORT_FIELDS))]
TagArticleParams = Annotated[ListParams, Depends(list_params(ARTICLE_SORT_FIELDS))]
ArticleFields = Annotated[
    str | None,
    Query(alias="articleFields", description="Article fields to embed, e.g. url,title"),
]


@router.post(
    "",
    response_model=SuccessResponse[list[TagBrief]],
    status_code=201,
    summary="Create tags",
    description="Create tags by name. Names already used by a tag return that tag.",
)
async def create_tags(
    data: TagsCreate,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Create tags."""
    with endpoint_errors("tagApi-1001"):
        tags = await TagService(db).create_tags(data.names)
    return success_response(201, "tagApi-1000", [TagBrief.model_validate(tag) for tag in tags], locale)


@router.get(
    "",
    response_model=SuccessResponse[list[TagListItem]],
    summary="List tags",
    description="List tags with the number and selected fields of their articles.",
)
async def list_tags(
    db: DbSession,
    locale: Locale,
    params: TagListParams,
    article_fields: ArticleFields = None,
) -> JSONResponse:
    """List tags."""
    fields = parse_fields(article_fields, ARTICLE_FIELDS, TAG_LIST_ARTICLE_FIELDS)

    with endpoint_errors("tagApi-1002"):
        tags = await TagService(db).list_tags(params)

    items = [
        TagListItem(
            id=tag.id,
            name=tag.name,
            articles=TagArticles(
                amount=len(articles),
                content=[project_article(article, fields) for article in articles],
            ),
        )
        for tag, articles in tags
    ]
    return success_response(200, "tagApi-1001", items, locale)


@router.get(
    "/{tag_id}",
    response_model=SuccessResponse[TagDetail],
    summary="Get a tag",
    description=(
        "Get a tag with its articles. limit, offset, sortby and direct "
        "paginate and sort the articles."
    ),
)
async def get_tag(
    tag_id: str,
    db: DbSession,
    locale: Locale,
    params: TagArticleParams,
    article_fields: ArticleFields = None,
) -> JSONResponse:
    """Get a tag and one page of its articles."""
    fields = parse_fields(article_fields, ARTICLE_FIELDS, TAG_DETAIL_ARTICLE_FIELDS)

    with endpoint_errors("tagApi-1004"):
        tag, articles = await TagService(db).get_tag(tag_id, params)

    detail = TagDetail(
        **TagResponse.model_validate(tag).model_dump(),
        articles=[project_article(article, fields) for article in articles],
    )
    return success_response(200, "tagApi-1002", detail, locale)


@router.patch(
    "/{tag_id}",
    response_model=SuccessResponse[TagResponse],
    summary="Rename a tag",
)
async def rename_tag(
    tag_id: str,
    data: TagRename,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Rename a tag."""
    with endpoint_errors("tagApi-1006"):
        tag = await TagService(db).rename_tag(tag_id, data.name)
    return success_response(200, "tagApi-1003", TagResponse.model_validate(tag), locale)


@router.delete(
    "/{tag_id}",
    response_model=SuccessResponse[None],
    summary="Delete a tag",
    description="Soft delete a tag.",
)
async def delete_tag(
    tag_id: str,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Delete a tag."""
    with endpoint_errors("tagApi-1007"):
        await TagService(db).delete_tag(tag_id)
    return success_response(200, "tagApi-1004", locale=locale)

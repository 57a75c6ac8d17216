"""
Comments API Endpoints.

Anyone may comment on an article and read its comments. Editing and
deleting comments requires a session token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from blog.backend.core.dependencies import CurrentSession, DbSession, Locale
from blog.backend.core.exceptions import endpoint_errors
from blog.backend.core.pagination import ListParams, list_params
from blog.backend.core.responses import success_response
from blog.backend.schemas.base import SuccessResponse
from blog.backend.schemas.comment import (
    COMMENT_SORT_FIELDS,
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from blog.backend.services.comment import CommentService

router = APIRouter()

CommentListParams = Annotated[ListParams, Depends(list_params(COMMENT_SORT_FIELDS))]


@router.post(
    "/articles/{article_id}/comments",
    response_model=SuccessResponse[CommentResponse],
    status_code=201,
    summary="Comment on an article",
)
async def create_comment(
    article_id: str,
    data: CommentCreate,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Create a comment."""
    with endpoint_errors("commentApi-1000"):
        comment = await CommentService(db).create_comment(article_id, data)
    return success_response(201, "commentApi-1000", CommentResponse.model_validate(comment), locale)


@router.get(
    "/articles/{article_id}/comments",
    response_model=SuccessResponse[list[CommentResponse]],
    summary="List an article's comments",
)
async def list_comments(
    article_id: str,
    db: DbSession,
    locale: Locale,
    params: CommentListParams,
) -> JSONResponse:
    """List comments of an article."""
    with endpoint_errors("commentApi-1001"):
        comments = await CommentService(db).list_comments(article_id, params)
    return success_response(
        200,
        "commentApi-1001",
        [CommentResponse.model_validate(comment) for comment in comments],
        locale,
    )


@router.put(
    "/comments/{comment_id}",
    response_model=SuccessResponse[CommentResponse],
    summary="Edit a comment",
)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Replace a comment's body."""
    with endpoint_errors("commentApi-1003"):
        comment = await CommentService(db).update_comment(comment_id, data.context)
    return success_response(200, "commentApi-1002", CommentResponse.model_validate(comment), locale)


@router.delete(
    "/comments/{comment_id}",
    response_model=SuccessResponse[None],
    summary="Delete a comment",
    description="Soft delete a comment.",
)
async def delete_comment(
    comment_id: str,
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Delete a comment."""
    with endpoint_errors("commentApi-1004"):
        await CommentService(db).delete_comment(comment_id)
    return success_response(200, "commentApi-1003", locale=locale)

"""
Unit Tests for Comment Service.
"""

from unittest.mock import patch

import pytest

from blog.backend.core.exceptions import NotFoundError
from blog.backend.core.pagination import ListParams
from blog.backend.schemas.comment import CommentCreate
from blog.backend.services.comment import CommentService


@pytest.fixture
def service(mock_db_session):
    return CommentService(mock_db_session)


@pytest.mark.asyncio
async def test_create_comment(service, make_record):
    data = CommentCreate(username="reader", email="r@example.com", context="Nice")

    with patch.object(service.articles, "find_by_id", return_value=make_record(id="a1")), \
         patch.object(service.repo, "create", return_value=make_record(id="c1")) as mock_create:
        await service.create_comment("a1", data)

    mock_create.assert_awaited_once_with(
        {"article_id": "a1", "username": "reader", "email": "r@example.com", "context": "Nice"}
    )


@pytest.mark.asyncio
async def test_comment_on_missing_article(service):
    with patch.object(service.articles, "find_by_id", return_value=None), \
         patch.object(service.repo, "create") as mock_create:
        with pytest.raises(NotFoundError) as exc_info:
            await service.create_comment("nope", CommentCreate(username="r", context="x"))

    assert exc_info.value.key == "articleApi-1003"
    mock_create.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_filters_by_article(service, make_record):
    params = ListParams(limit=20, offset=0, sort_by="created_at", descending=False)

    with patch.object(service.articles, "find_by_id", return_value=make_record(id="a1")), \
         patch.object(service.repo, "find_all", return_value=[]) as mock_find_all:
        await service.list_comments("a1", params)

    mock_find_all.assert_awaited_once_with(
        filters={"article_id": "a1"},
        sort_by="created_at",
        descending=False,
        limit=20,
        offset=0,
    )


@pytest.mark.asyncio
async def test_update_missing_comment(service):
    with patch.object(service.repo, "find_by_id", return_value=None):
        with pytest.raises(NotFoundError) as exc_info:
            await service.update_comment("nope", "edited")

    assert exc_info.value.key == "commentApi-1002"


@pytest.mark.asyncio
async def test_delete_comment(service, make_record):
    with patch.object(service.repo, "find_by_id", return_value=make_record(id="c1")), \
         patch.object(service.repo, "soft_delete") as mock_delete:
        await service.delete_comment("c1")

    mock_delete.assert_awaited_once_with("c1")

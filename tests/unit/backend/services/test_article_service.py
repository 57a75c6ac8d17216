"""
Unit Tests for Article Service.

Tests the ArticleService business logic with mocked repositories.
"""

from unittest.mock import patch

import pytest

from blog.backend.core.exceptions import ConflictError, NotFoundError, ServerError, ValidationError
from blog.backend.core.pagination import ListParams
from blog.backend.schemas.article import ArticleCreate, ArticleUpdate
from blog.backend.services.article import ArticleService
from blog.backend.services.tag_sync import SyncResult

X_PNG = "https://cdn.example.com/x.png"
Y_PNG = "https://cdn.example.com/y.png"


@pytest.fixture
def service(mock_db_session):
    return ArticleService(mock_db_session)


def _create(**overrides) -> ArticleCreate:
    values = {"title": "Title", "begins": "Teaser", "content": "Body"}
    values.update(overrides)
    return ArticleCreate(**values)


class TestCreateArticle:
    """Tests for article creation."""

    @pytest.mark.asyncio
    async def test_create_without_tags(self, service, make_record):
        article = make_record(id="a1")

        with patch.object(service.repo, "find_by_url", return_value=None), \
             patch.object(service.repo, "create", return_value=article) as mock_create, \
             patch.object(service.synchronizer, "sync") as mock_sync:
            result = await service.create_article(_create(url="hello", cover_images=[X_PNG, X_PNG, Y_PNG]))

        assert result is article
        mock_create.assert_awaited_once_with(
            {
                "title": "Title",
                "begins": "Teaser",
                "content": "Body",
                "cover_images": [X_PNG, Y_PNG],
                "url": "hello",
            }
        )
        mock_sync.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_url_taken(self, service, make_record):
        with patch.object(service.repo, "find_by_url", return_value=make_record(id="other")), \
             patch.object(service.repo, "create") as mock_create:
            with pytest.raises(ConflictError) as exc_info:
                await service.create_article(_create(url="taken"))

        assert exc_info.value.key == "articleApi-1000"
        mock_create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_tag_rejected_before_writing(self, service):
        with patch.object(service.tags, "find_by_id", return_value=None), \
             patch.object(service.repo, "create") as mock_create:
            with pytest.raises(ServerError) as exc_info:
                await service.create_article(_create(tags=["t9"]))

        assert exc_info.value.key == "articleApi-1001"
        assert exc_info.value.error == "Server Error: tag t9 is not existed"
        mock_create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_tags_pushed_once(self, service, make_record):
        article = make_record(id="a1")

        with patch.object(service.tags, "find_by_id", return_value=make_record(id="t1")), \
             patch.object(service.repo, "create", return_value=article), \
             patch.object(service.synchronizer, "sync", return_value=SyncResult()) as mock_sync:
            await service.create_article(_create(tags=["t1", "t1"]))

        mock_sync.assert_awaited_once_with("a1", push=["t1"])

    @pytest.mark.asyncio
    async def test_failed_tag_push(self, service, make_record):
        failed = SyncResult(errors=["Server Error: boom"])

        with patch.object(service.tags, "find_by_id", return_value=make_record(id="t1")), \
             patch.object(service.repo, "create", return_value=make_record(id="a1")), \
             patch.object(service.synchronizer, "sync", return_value=failed):
            with pytest.raises(ServerError) as exc_info:
                await service.create_article(_create(tags=["t1"]))

        assert exc_info.value.error == ["Server Error: boom"]


class TestReadArticles:
    """Tests for article lookups."""

    @pytest.mark.asyncio
    async def test_get_by_key(self, service, make_record):
        article = make_record(id="a1")

        with patch.object(service.repo, "find_by_id_or_url", return_value=article):
            assert await service.get_article("slug") is article

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with patch.object(service.repo, "find_by_id_or_url", return_value=None):
            with pytest.raises(NotFoundError) as exc_info:
                await service.get_article("nope")

        assert exc_info.value.key == "articleApi-1003"

    @pytest.mark.asyncio
    async def test_list_passes_params(self, service):
        params = ListParams(limit=5, offset=10, sort_by="title", descending=False)

        with patch.object(service.repo, "find_all", return_value=[]) as mock_find_all:
            await service.list_articles(params)

        mock_find_all.assert_awaited_once_with(sort_by="title", descending=False, limit=5, offset=10)


class TestUpdateArticle:
    """Tests for article updates."""

    @pytest.mark.asyncio
    async def test_nothing_to_update(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_article("a1", ArticleUpdate())

        assert exc_info.value.key == "articleApi-1005"

    @pytest.mark.asyncio
    async def test_update_fields(self, service, make_record):
        with patch.object(service.repo, "find_by_id", return_value=make_record(id="a1")), \
             patch.object(service.repo, "find_and_update", return_value=make_record(id="a1")) as mock_update:
            await service.update_article("a1", ArticleUpdate(title="New", cover_images=[X_PNG, X_PNG]))

        mock_update.assert_awaited_once_with("a1", title="New", cover_images=[X_PNG])

    @pytest.mark.asyncio
    async def test_keeping_own_url(self, service, make_record):
        own = make_record(id="a1")

        with patch.object(service.repo, "find_by_id", return_value=own), \
             patch.object(service.repo, "find_by_url", return_value=own), \
             patch.object(service.repo, "find_and_update", return_value=own):
            assert await service.update_article("a1", ArticleUpdate(url="mine")) is own

    @pytest.mark.asyncio
    async def test_missing_article(self, service):
        with patch.object(service.repo, "find_by_id", return_value=None):
            with pytest.raises(NotFoundError):
                await service.update_article("nope", ArticleUpdate(title="x"))


class TestPublish:
    """Tests for bulk publishing."""

    @pytest.mark.asyncio
    async def test_publish_and_unpublish(self, service, make_record):
        with patch.object(service.repo, "find_by_id", return_value=make_record(id="a")), \
             patch.object(service.repo, "find_and_update") as mock_update:
            errors = await service.publish({"a1": True, "a2": False})

        assert errors == []
        calls = {call.args[0]: call.kwargs["published_at"] for call in mock_update.await_args_list}
        assert calls["a1"] is not None
        assert calls["a2"] is None

    @pytest.mark.asyncio
    async def test_missing_articles_reported(self, service, make_record):
        async def find(article_id):
            return make_record(id=article_id) if article_id == "a1" else None

        with patch.object(service.repo, "find_by_id", side_effect=find), \
             patch.object(service.repo, "find_and_update") as mock_update:
            errors = await service.publish({"a1": True, "ghost": True})

        assert errors == ["Server Error: article ghost is not existed"]
        mock_update.assert_awaited_once()


class TestDeleteArticle:
    """Tests for article deletion."""

    @pytest.mark.asyncio
    async def test_detaches_then_deletes(self, service, make_record):
        with patch.object(service.repo, "find_by_id", return_value=make_record(id="a1")), \
             patch.object(service.synchronizer, "detach_all", return_value=SyncResult()) as mock_detach, \
             patch.object(service.repo, "soft_delete") as mock_delete:
            await service.delete_article("a1")

        mock_detach.assert_awaited_once_with("a1")
        mock_delete.assert_awaited_once_with("a1")

    @pytest.mark.asyncio
    async def test_failed_detach_keeps_article(self, service, make_record):
        failed = SyncResult(errors=["Server Error: x"])

        with patch.object(service.repo, "find_by_id", return_value=make_record(id="a1")), \
             patch.object(service.synchronizer, "detach_all", return_value=failed), \
             patch.object(service.repo, "soft_delete") as mock_delete:
            with pytest.raises(ServerError) as exc_info:
                await service.delete_article("a1")

        assert exc_info.value.key == "articleApi-1009"
        mock_delete.assert_not_awaited()

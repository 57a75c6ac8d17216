"""
Tag-Reference Synchronizer.

Keeps the tag side of the tag/article relationship in step with edits
made from the article side.

Given an article and two lists of tag ids:

    push  tags that should reference the article
    pull  tags that should stop referencing it

an id present in both lists cancels out and is ignored. Every remaining
tag is updated independently: a missing tag or a failing update is
recorded as an error string and never stops the other updates. The
caller gets back the list of errors, in push-then-pull order, and
reports success with that list as its data.

The per-item fan-out is shared with the bulk publish operation through
run_partial().
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.exceptions import NotFoundError
from blog.backend.core.logging import get_logger
from blog.backend.core.utils import unique
from blog.backend.repositories.article import ArticleRepository
from blog.backend.repositories.tag import TagRepository

logger = get_logger(__name__)

T = TypeVar("T")


class MissingRecordError(Exception):
    """Raised by a batch step when the record it targets does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} is not existed")


@dataclass
class SyncResult:
    """Outcome of a synchronisation. Empty ``errors`` means full success."""

    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def failure_message(error: Exception) -> str:
    """Error string reported for one failed batch item."""
    return f"Server Error: {error}"


async def run_partial(
    items: Iterable[T],
    step: Callable[[T], Awaitable[None]],
    lock: asyncio.Lock,
) -> list[str]:
    """
    Run one step per item concurrently and collect failures.

    Every step runs to completion whatever happens to its siblings. Steps
    share one database session, which allows a single operation at a time,
    so each step holds ``lock`` while it runs.

    Args:
        items: Items to process, in reporting order
        step: Coroutine function applied to each item
        lock: Lock serialising access to the shared session

    Returns:
        Error strings for the failed items, in item order
    """

    async def guarded(item: T) -> str | None:
        async with lock:
            try:
                await step(item)
            except MissingRecordError as exc:
                return failure_message(exc)
            except Exception as exc:
                logger.warning(
                    "Batch step failed",
                    extra={"item": str(item), "error": str(exc)},
                )
                return failure_message(exc)
        return None

    outcomes = await asyncio.gather(*(guarded(item) for item in items))
    return [outcome for outcome in outcomes if outcome is not None]


def split_changes(push: Iterable[str], pull: Iterable[str]) -> tuple[list[str], list[str]]:
    """
    Deduplicate push and pull lists and drop ids present in both.

    Returns:
        Tuple of (push, pull) keeping first-occurrence order
    """
    push_ids = unique(push)
    pull_ids = unique(pull)
    both = set(push_ids) & set(pull_ids)
    return (
        [tag_id for tag_id in push_ids if tag_id not in both],
        [tag_id for tag_id in pull_ids if tag_id not in both],
    )


class TagSynchronizer:
    """
    Applies push/pull tag changes for an article.

    Usage:
        result = await TagSynchronizer(session).sync(article.id, push=["t1"], pull=["t2"])
        if not result.ok:
            ...  # result.errors lists the tags that could not be updated
    """

    def __init__(self, session: AsyncSession) -> None:
        self.tags = TagRepository(session)
        self.articles = ArticleRepository(session)
        self._lock = asyncio.Lock()

    async def sync(
        self,
        article_id: str,
        push: Iterable[str] = (),
        pull: Iterable[str] = (),
    ) -> SyncResult:
        """
        Attach the article to ``push`` tags and detach it from ``pull`` tags.

        Args:
            article_id: Article the tags should (stop) referencing
            push: Tag ids to attach
            pull: Tag ids to detach

        Returns:
            SyncResult with one error string per tag that failed

        Raises:
            NotFoundError: If the article does not exist (articleApi-1003)
        """
        push_ids, pull_ids = split_changes(push, pull)

        article = await self.articles.find_by_id(article_id)
        if article is None:
            raise NotFoundError("articleApi-1003")

        changes = [("push", tag_id) for tag_id in push_ids] + [("pull", tag_id) for tag_id in pull_ids]

        async def apply(change: tuple[str, str]) -> None:
            action, tag_id = change
            if await self.tags.find_by_id(tag_id) is None:
                raise MissingRecordError("tag", tag_id)
            if action == "push":
                await self.tags.add_article(tag_id, article_id)
            else:
                await self.tags.remove_article(tag_id, article_id)

        errors = await run_partial(changes, apply, self._lock)

        logger.info(
            "Article tags synchronised",
            extra={
                "article_id": article_id,
                "pushed": len(push_ids),
                "pulled": len(pull_ids),
                "failed": len(errors),
            },
        )
        return SyncResult(errors=errors)

    async def detach_all(self, article_id: str) -> SyncResult:
        """Detach the article from every tag referencing it."""
        tag_ids = await self.tags.tag_ids_for_article(article_id)
        return await self.sync(article_id, pull=tag_ids)

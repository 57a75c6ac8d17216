"""
Tag Service.

Business logic for tags: bulk creation by name, listing with embedded
article references, renaming and soft deletion.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.exceptions import ConflictError, ValidationError
from blog.backend.core.pagination import ListParams
from blog.backend.core.utils import unique
from blog.backend.models.article import Article
from blog.backend.models.tag import Tag
from blog.backend.repositories.tag import TagRepository
from blog.backend.services.base import BaseService


class TagService(BaseService):
    """
    Service for tag business logic.

    Not-found cases raise NotFoundError("tagApi-1003").
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TagRepository(session)

    async def create_tags(self, names: list[str]) -> list[Tag]:
        """
        Create tags, reusing live tags with the same name.

        Names are trimmed; blank and repeated names are skipped.

        Raises:
            ValidationError: If no usable name remains (tagApi-1000)
        """
        cleaned = unique(name.strip() for name in names if name and name.strip())
        if not cleaned:
            raise ValidationError("tagApi-1000")

        self._log_operation("Creating tags", names=cleaned)
        return [await self.repo.create({"name": name}) for name in cleaned]

    async def list_tags(self, params: ListParams) -> list[tuple[Tag, list[Article]]]:
        """
        List live tags with their live articles.

        Returns:
            Tuples of (tag, articles) in list order
        """
        tags = await self.repo.find_all(
            sort_by=params.sort_by,
            descending=params.descending,
            limit=params.limit,
            offset=params.offset,
        )
        articles = await self.repo.articles_by_tag([tag.id for tag in tags])
        return [(tag, articles.get(tag.id, [])) for tag in tags]

    async def get_tag(self, tag_id: str, params: ListParams) -> tuple[Tag, list[Article]]:
        """
        Get a live tag with one page of its articles.

        ``params`` paginates and sorts the articles, not tags.
        """
        tag = self._require(await self.repo.find_by_id(tag_id), "tagApi-1003")
        articles = await self.repo.articles_of(
            tag.id,
            sort_by=params.sort_by,
            descending=params.descending,
            limit=params.limit,
            offset=params.offset,
        )
        return tag, articles

    async def rename_tag(self, tag_id: str, name: str) -> Tag:
        """
        Rename a tag.

        Raises:
            ValidationError: If the name is blank (tagApi-1005)
            NotFoundError: If the tag does not exist
            ConflictError: If another live tag has the name (tagApi-1008)
        """
        name = name.strip()
        if not name:
            raise ValidationError("tagApi-1005")

        self._require(await self.repo.find_by_id(tag_id), "tagApi-1003")

        holder = await self.repo.find_one(name=name)
        if holder is not None and holder.id != tag_id:
            raise ConflictError("tagApi-1008")

        self._log_operation("Renaming tag", tag_id=tag_id, name=name)
        return await self.repo.find_and_update(tag_id, name=name)

    async def delete_tag(self, tag_id: str) -> Tag:
        """Soft delete a tag."""
        self._require(await self.repo.find_by_id(tag_id), "tagApi-1003")
        self._log_operation("Deleting tag", tag_id=tag_id)
        return await self.repo.soft_delete(tag_id)

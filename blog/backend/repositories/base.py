"""
Base Repository.

Base class for all repositories with the common record operations.

Reads go through ``find`` with one of four query types:

    FindOne(filters)             first live record matching the filters
    FindById(id)                 live record by primary key
    FindAndUpdate(id, values)    apply values to a record, deleted or not
    FindAll(filters, ...)        live records, sorted and paginated

"Live" means ``deleted_at`` is unset. FindAndUpdate ignores
``deleted_at``, so it also soft deletes and restores.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog.backend.core.exceptions import EmptyInputError, NilQueryError
from blog.backend.core.logging import get_logger
from blog.backend.core.utils import utc_now
from blog.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@dataclass(frozen=True)
class FindOne:
    filters: dict[str, Any]


@dataclass(frozen=True)
class FindById:
    id: str


@dataclass(frozen=True)
class FindAndUpdate:
    """``values`` maps attribute names to new values; None unsets a column."""

    id: str
    values: dict[str, Any]


@dataclass(frozen=True)
class FindAll:
    filters: dict[str, Any] = field(default_factory=dict)
    sort_by: str = "created_at"
    descending: bool = True
    limit: int | None = None
    offset: int = 0


Query = FindOne | FindById | FindAndUpdate | FindAll


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common record operations.

    Subclasses set the model class and the collection name used in
    error triples:

        class ArticleRepository(BaseRepository[Article]):
            model = Article
            collection = "article"
    """

    model: type[ModelType]
    collection: str

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _live(self, filters: dict[str, Any] | None = None) -> list[Any]:
        """WHERE clauses for live records matching equality filters."""
        clauses = [self.model.deleted_at.is_(None)]
        for name, value in (filters or {}).items():
            clauses.append(getattr(self.model, name) == value)
        return clauses

    async def create(self, fields: dict[str, Any]) -> ModelType:
        """
        Create a new record.

        Raises:
            EmptyInputError: If fields is empty
        """
        if not fields:
            raise EmptyInputError(self.collection)

        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def find(self, query: Query | None) -> Any:
        """
        Run a typed query.

        Returns:
            A record or None for FindOne, FindById and FindAndUpdate;
            a list of records for FindAll

        Raises:
            NilQueryError: If query is None
        """
        match query:
            case None:
                raise NilQueryError(self.collection)
            case FindOne(filters=filters):
                return await self._find_one(filters)
            case FindById(id=record_id):
                return await self._find_one({"id": record_id})
            case FindAndUpdate(id=record_id, values=values):
                return await self._find_and_update(record_id, values)
            case FindAll():
                return await self._find_all(query)
        raise TypeError(f"Unsupported query: {query!r}")

    async def find_one(self, **filters: Any) -> ModelType | None:
        return await self.find(FindOne(filters))

    async def find_by_id(self, record_id: str) -> ModelType | None:
        return await self.find(FindById(record_id))

    async def find_and_update(self, record_id: str, **values: Any) -> ModelType | None:
        return await self.find(FindAndUpdate(record_id, values))

    async def find_all(
        self,
        filters: dict[str, Any] | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelType]:
        return await self.find(
            FindAll(filters or {}, sort_by, descending, limit, offset)
        )

    async def soft_delete(self, record_id: str) -> ModelType | None:
        """Mark a record deleted. Returns None if the record does not exist."""
        return await self.find_and_update(record_id, deleted_at=utc_now())

    async def count(self, **filters: Any) -> int:
        """Count live records matching equality filters."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(*self._live(filters))
        )
        return result.scalar_one()

    async def _find_one(self, filters: dict[str, Any]) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(*self._live(filters)).limit(1)
        )
        return result.scalar_one_or_none()

    async def _find_and_update(self, record_id: str, values: dict[str, Any]) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == record_id)
        )
        instance = result.scalar_one_or_none()
        if instance is None:
            return None

        for key, value in values.items():
            if not hasattr(instance, key):
                raise AttributeError(f"{self.model.__name__} has no field {key!r}")
            setattr(instance, key, value)
        instance.updated_at = utc_now()

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def _find_all(self, query: FindAll) -> list[ModelType]:
        sort_column = getattr(self.model, query.sort_by)
        order = sort_column.desc() if query.descending else sort_column.asc()

        statement = (
            select(self.model)
            .where(*self._live(query.filters))
            .order_by(order, self.model.id)
            .offset(query.offset)
        )
        if query.limit is not None:
            statement = statement.limit(query.limit)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

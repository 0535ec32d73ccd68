"""Storage collaborator used by the issue and project services.

Services depend only on the ``Repository`` protocol: equality filters,
ordered sorts, offset/limit and plain create/update/delete. No query syntax
of a particular storage technology leaks into the services.

Filters are mappings of attribute name to value. ``None`` matches NULL.
``exclude`` works the same way but negated. Sorts are sequences of
``(attribute, "asc" | "desc")`` pairs applied in order.
"""

from typing import (
    Any,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import Base


ModelT = TypeVar("ModelT", bound=Base)

# Integer primary key columns are 32-bit signed
INT_ID_RANGE = range(-(2**31), 2**31)

Filters = Mapping[str, Any]
Sort = Sequence[Tuple[str, str]]


class Repository(Protocol[ModelT]):
    """Data access operations over one entity collection."""

    async def find_by_id(self, id: Any) -> Optional[ModelT]: ...

    async def find_many(
        self,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        exclude: Optional[Filters] = None,
    ) -> List[ModelT]: ...

    async def count(
        self,
        filters: Optional[Filters] = None,
        exclude: Optional[Filters] = None,
    ) -> int: ...

    async def count_by(
        self,
        field: str,
        filters: Optional[Filters] = None,
    ) -> Dict[Any, int]: ...

    async def find_first(
        self,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None,
        exclude: Optional[Filters] = None,
    ) -> Optional[ModelT]: ...

    async def create(self, data: Mapping[str, Any]) -> ModelT: ...

    async def update(self, id: Any, data: Mapping[str, Any]) -> Optional[ModelT]: ...

    async def delete(self, id: Any) -> bool: ...


class SQLAlchemyRepository(Generic[ModelT]):
    """
    ``Repository`` implementation over an async SQLAlchemy session.

    Writes only flush; the request-scoped session commits on success and
    rolls back on error (see ``database.get_db``).
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    def _column(self, name: str):
        column = self.model.__table__.columns.get(name)
        if column is None:
            raise ValueError(f"{self.model.__name__} has no attribute '{name}'")
        return getattr(self.model, name)

    def _apply_filters(self, stmt, filters: Optional[Filters], exclude: Optional[Filters]):
        for name, value in (filters or {}).items():
            column = self._column(name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        for name, value in (exclude or {}).items():
            column = self._column(name)
            stmt = stmt.where(column.is_not(None) if value is None else column != value)
        return stmt

    def _apply_sort(self, stmt, sort: Optional[Sort]):
        for name, direction in sort or ():
            column = self._column(name)
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        return stmt

    async def find_by_id(self, id: Any) -> Optional[ModelT]:
        if isinstance(id, int) and id not in INT_ID_RANGE:
            return None
        return await self.db.get(self.model, id)

    async def find_many(
        self,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        exclude: Optional[Filters] = None,
    ) -> List[ModelT]:
        stmt = self._apply_filters(select(self.model), filters, exclude)
        stmt = self._apply_sort(stmt, sort)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(
        self,
        filters: Optional[Filters] = None,
        exclude: Optional[Filters] = None,
    ) -> int:
        stmt = self._apply_filters(
            select(func.count()).select_from(self.model), filters, exclude
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def count_by(
        self,
        field: str,
        filters: Optional[Filters] = None,
    ) -> Dict[Any, int]:
        """Row counts grouped by ``field``; values with no rows are absent."""
        column = self._column(field)
        stmt = self._apply_filters(select(column, func.count()), filters, None)
        result = await self.db.execute(stmt.group_by(column))
        return {value: total for value, total in result.all()}

    async def find_first(
        self,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None,
        exclude: Optional[Filters] = None,
    ) -> Optional[ModelT]:
        items = await self.find_many(filters, sort, limit=1, exclude=exclude)
        return items[0] if items else None

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        for name in data:
            self._column(name)
        instance = self.model(**data)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def update(self, id: Any, data: Mapping[str, Any]) -> Optional[ModelT]:
        instance = await self.find_by_id(id)
        if instance is None:
            return None
        for name, value in data.items():
            self._column(name)
            setattr(instance, name, value)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def delete(self, id: Any) -> bool:
        instance = await self.find_by_id(id)
        if instance is None:
            return False
        await self.db.delete(instance)
        await self.db.flush()
        return True

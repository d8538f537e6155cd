"""
Repository pattern for database access.

Wraps one model class and the request's ``AsyncSession``. Nothing here
commits on its own: callers stage changes with ``add``/``delete`` and end
the unit of work with ``commit``.

Usage:
    repo = Repository(Table, db)
    table = await repo.get(42)
    total = await repo.count([Table.capacity == 4])
"""

from typing import Any, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Async data access for a single model"""

    def __init__(self, model: type, session: AsyncSession):
        self._model = model
        self._session = session

    @property
    def model(self) -> type:
        return self._model

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get(self, entity_id: Any, *, fresh: bool = False) -> Optional[ModelT]:
        """
        Find an entity by primary key.

        Args:
            entity_id: The primary key value.
            fresh: Overwrite any in-session state with what the database holds.

        Returns:
            Entity or None if not found.
        """
        query = select(self._model).where(self._model.id == entity_id)
        if fresh:
            query = query.execution_options(populate_existing=True)
        result = await self._session.execute(query)
        return result.scalar_one_or_none()

    async def reload(self, entity: ModelT) -> ModelT:
        """Re-read a committed entity so it reflects stored values"""
        return await self.get(entity.id, fresh=True)

    async def find_one(self, *clauses) -> Optional[ModelT]:
        result = await self._session.execute(select(self._model).where(*clauses).limit(1))
        return result.scalar_one_or_none()

    async def count(self, clauses: Sequence[Any] = ()) -> int:
        query = select(func.count()).select_from(self._model).where(*clauses)
        result = await self._session.execute(query)
        return result.scalar() or 0

    async def fetch(
        self,
        clauses: Sequence[Any] = (),
        *,
        order_by: Sequence[Any] = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        query = select(self._model).where(*clauses)
        if order_by:
            query = query.order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity (not committed)"""
        self._session.add(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Stage removal of an entity (not committed)"""
        await self._session.delete(entity)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

"""Generic CRUD repository shared by the per-entity repositories."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """CRUD primitives for one table.

    Absence is signalled by ``None`` (or ``False`` from ``delete``); turning
    that into a not-found error is the service layer's job. Writes are flushed
    so constraint violations surface immediately. Does NOT commit - the
    request's session dependency owns the transaction.
    """

    model: type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    def _pk_conditions(self, key: Any) -> list[ColumnElement[bool]]:
        pk_columns = self.model.__mapper__.primary_key
        values = key if isinstance(key, tuple) else (key,)
        return [
            column == value
            for column, value in zip(pk_columns, values, strict=True)
        ]

    async def create(self, **values: Any) -> ModelT:
        instance = self.model(**values)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def get_by_id(self, key: Any) -> ModelT | None:
        """Get a row by primary key; composite keys are passed as a tuple."""
        result = await self.db.execute(
            select(self.model).where(*self._pk_conditions(key))
        )
        return result.scalar_one_or_none()

    async def exists(self, key: Any) -> bool:
        return await self.get_by_id(key) is not None

    async def get_by_field(
        self, column: InstrumentedAttribute[Any], value: Any
    ) -> ModelT | None:
        result = await self.db.execute(select(self.model).where(column == value))
        return result.scalar_one_or_none()

    async def find_all(
        self,
        *conditions: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> list[ModelT]:
        stmt = select(self.model).where(*conditions)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, instance: ModelT, values: dict[str, Any]) -> ModelT:
        """Assign the given fields and persist. Fields not in ``values`` are kept."""
        for field, value in values.items():
            setattr(instance, field, value)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def delete(self, key: Any) -> bool:
        """Delete by primary key. Returns True if a row was removed."""
        result = await self.db.execute(
            delete(self.model).where(*self._pk_conditions(key))
        )
        return result.rowcount > 0

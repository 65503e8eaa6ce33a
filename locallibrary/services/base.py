"""Shared store access for catalog services."""
from typing import Any, Optional, Sequence, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from locallibrary.database import Base, with_timeout

ModelT = TypeVar("ModelT", bound=Base)


class StoreService:
    """Base class wrapping every store round trip in the request timeout."""

    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout

    async def _scalars(self, statement: Select) -> list[Any]:
        result = await with_timeout(self.db.execute(statement), self.timeout)
        return list(result.scalars().all())

    async def _scalar(self, statement: Select) -> Any:
        result = await with_timeout(self.db.execute(statement), self.timeout)
        return result.scalar_one_or_none()

    async def _get(
        self,
        model: type[ModelT],
        record_id: int,
        options: Sequence[Any] = (),
        lock: bool = False,
    ) -> Optional[ModelT]:
        """Select one record by primary key, optionally locking its row."""
        statement = select(model).where(model.id == record_id)
        if options:
            statement = statement.options(*options)
        if lock:
            statement = statement.with_for_update()
        return await self._scalar(statement)

    async def _save(self, record: ModelT) -> ModelT:
        """Insert or update a record and commit it."""
        self.db.add(record)
        await self._flush()
        await with_timeout(self.db.refresh(record), self.timeout)
        await self._commit()
        return record

    async def _flush(self) -> None:
        await with_timeout(self.db.flush(), self.timeout)

    async def _commit(self) -> None:
        # Writes are committed before the route builds its response.
        await with_timeout(self.db.commit(), self.timeout)

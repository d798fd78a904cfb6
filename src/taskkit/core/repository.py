"""Generic async repository over a SQLAlchemy session."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import delete as sql_delete
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from .models import Entity

T = TypeVar("T", bound=Entity)
IdT = TypeVar("IdT")


class BaseRepository(Generic[T, IdT]):
    """Base repository providing CRUD and count operations for a single ORM model."""

    def __init__(self, session: AsyncSession, model: type[T]) -> None:
        """Initialize repository with a session and the model it manages."""
        self.s = session
        self.model = model

    async def save(self, entity: T) -> T:
        """Add an entity to the session and flush to obtain generated values."""
        self.s.add(entity)
        await self.s.flush()
        return entity

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.s.commit()

    async def refresh(self, entity: T) -> None:
        """Reload server-generated columns of an entity."""
        await self.s.refresh(entity)

    async def find_by_id(self, id: IdT) -> T | None:
        """Find an entity by primary key."""
        return await self.s.get(self.model, id)

    async def exists_by_id(self, id: IdT) -> bool:
        """Return whether an entity with the given primary key exists."""
        result = await self.s.scalar(select(func.count()).select_from(self.model).where(self.model.id == id))
        return bool(result)

    async def find_all(self, *order_by: ColumnElement[Any]) -> Sequence[T]:
        """Return all entities, ordered by the given clauses or by id."""
        stmt = select(self.model).order_by(*(order_by or (self.model.id,)))
        result = await self.s.scalars(stmt)
        return result.all()

    async def count(self, *where: ColumnElement[bool]) -> int:
        """Count entities, optionally restricted by filter clauses."""
        stmt = select(func.count()).select_from(self.model)
        if where:
            stmt = stmt.where(*where)
        result = await self.s.scalar(stmt)
        return int(result or 0)

    async def delete_by_id(self, id: IdT) -> None:
        """Delete an entity by primary key."""
        await self.s.execute(sql_delete(self.model).where(self.model.id == id))

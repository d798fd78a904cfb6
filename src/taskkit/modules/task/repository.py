"""Task repository for database access and querying."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from taskkit.core.repository import BaseRepository

from .models import Task


class TaskRepository(BaseRepository[Task, int]):
    """Repository for Task entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task repository with database session."""
        super().__init__(session, Task)

    async def find_all_incomplete_first(self) -> Sequence[Task]:
        """Return all tasks with incomplete ones before completed ones, then by id."""
        return await self.find_all(Task.completed.asc(), Task.id.asc())

    async def count_completed(self) -> int:
        """Count tasks marked completed."""
        return await self.count(Task.completed.is_(True))

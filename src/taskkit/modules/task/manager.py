"""Task manager: the persistence client used by the task request handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from taskkit.core import Database
from taskkit.core.logging import get_logger
from taskkit.core.manager import BaseManager

from .models import Task
from .repository import TaskRepository
from .schemas import TaskIn, TaskList, TaskOut, TaskUpdate

logger = get_logger(__name__)

R = TypeVar("R")


class TaskManager(BaseManager[Task, TaskIn, TaskOut, int]):
    """Manager for Task entities with partial updates and a counted listing."""

    def __init__(self, repo: TaskRepository, database: Database | None = None) -> None:
        """Initialize task manager with repository and optional database for concurrent reads."""
        super().__init__(repo, Task, TaskOut)
        self.repo: TaskRepository = repo
        self.database = database

    async def create(self, data: TaskIn) -> TaskOut:
        """Insert a new task; completed starts out false."""
        created = await self.save(data)
        logger.info("task.created", task_id=created.id)
        return created

    async def update(self, task_id: int, data: TaskUpdate) -> TaskOut | None:
        """Apply a partial update, returning None when the task does not exist."""
        task = await self.repo.find_by_id(task_id)
        if task is None:
            return None

        for field, value in data.model_dump(exclude_none=True).items():
            setattr(task, field, value)

        await self.repo.commit()
        await self.repo.refresh(task)
        logger.info("task.updated", task_id=task_id)
        return self._to_output_schema(task)

    async def delete(self, task_id: int) -> bool:
        """Delete a task, returning False when it does not exist."""
        if not await self.repo.exists_by_id(task_id):
            return False
        await self.delete_by_id(task_id)
        logger.info("task.deleted", task_id=task_id)
        return True

    async def list_with_counts(self) -> TaskList:
        """Fetch all tasks plus total and completed counts.

        With a file or server database attached, each query gets its own
        session and the three run concurrently; the first failure propagates.
        Otherwise they run in turn on the repository's session: a session does
        not allow concurrent statements, and an in-memory SQLite database has a
        single shared connection.
        """
        if self.database is None or self.database.is_memory:
            tasks = await self.repo.find_all_incomplete_first()
            total = await self.repo.count()
            completed = await self.repo.count_completed()
        else:
            db = self.database
            tasks, total, completed = await asyncio.gather(
                _in_own_session(db, lambda repo: repo.find_all_incomplete_first()),
                _in_own_session(db, lambda repo: repo.count()),
                _in_own_session(db, lambda repo: repo.count_completed()),
            )

        return TaskList(
            tasks=[self._to_output_schema(t) for t in tasks],
            total_tasks=total,
            completed_tasks=completed,
        )


async def _in_own_session(database: Database, query: Callable[[TaskRepository], Awaitable[R]]) -> R:
    async with database.session() as session:
        return await query(TaskRepository(session))

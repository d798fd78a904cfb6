"""Feature-specific FastAPI dependency injection for managers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskkit.core.api.dependencies import get_database, get_session
from taskkit.modules.task import TaskManager, TaskRepository


async def get_task_manager(session: Annotated[AsyncSession, Depends(get_session)]) -> TaskManager:
    """Get a task manager bound to the request session and the shared database."""
    return TaskManager(TaskRepository(session), database=get_database())

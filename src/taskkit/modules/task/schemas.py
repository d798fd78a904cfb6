"""Task schemas for create, update and list payloads."""

from __future__ import annotations

from pydantic import Field

from taskkit.core.schemas import CamelModel, EntityIn, EntityOut


class TaskIn(EntityIn):
    """Input schema for creating a task.

    ``title`` is optional at the schema level so a missing title reaches the
    handler and is reported as a 400 rather than a validation error.
    """

    title: str | None = Field(default=None, description="Task title, required and non-empty")
    color: str | None = Field(default=None, description="Optional display color")


class TaskUpdate(CamelModel):
    """Partial update; fields left out or set to null keep their stored value."""

    title: str | None = None
    color: str | None = None
    completed: bool | None = None


class TaskOut(EntityOut):
    """Output schema for task entities."""

    title: str
    color: str | None = None
    completed: bool = False


class TaskList(CamelModel):
    """All tasks, incomplete first, with total and completed counts."""

    tasks: list[TaskOut]
    total_tasks: int
    completed_tasks: int

"""Task feature - to-do items with title, color and completion flag."""

from .manager import TaskManager
from .models import Task
from .repository import TaskRepository
from .router import TaskRouter
from .schemas import TaskIn, TaskList, TaskOut, TaskUpdate

__all__ = [
    "Task",
    "TaskIn",
    "TaskOut",
    "TaskUpdate",
    "TaskList",
    "TaskRepository",
    "TaskManager",
    "TaskRouter",
]

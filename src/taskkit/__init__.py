"""Taskkit - CRUD service for to-do tasks on FastAPI and async SQLAlchemy."""

# Core framework
from taskkit.core import (
    Base,
    BaseManager,
    BaseRepository,
    Database,
    Entity,
    EntityIn,
    EntityOut,
    Settings,
)

# Task feature
from taskkit.modules.task import Task, TaskIn, TaskList, TaskManager, TaskOut, TaskRepository, TaskUpdate

__version__ = "0.1.0"

__all__ = [
    # Core framework
    "Database",
    "Settings",
    "BaseRepository",
    "BaseManager",
    "Base",
    "Entity",
    "EntityIn",
    "EntityOut",
    # Task feature
    "Task",
    "TaskIn",
    "TaskOut",
    "TaskUpdate",
    "TaskList",
    "TaskRepository",
    "TaskManager",
    # Version
    "__version__",
]

"""Core framework: database, ORM base classes, repository, manager, settings and logging."""

from .database import Database
from .logging import configure_logging, get_logger
from .manager import BaseManager
from .models import Base, Entity
from .repository import BaseRepository
from .schemas import CamelModel, EntityIn, EntityOut
from .settings import Settings

__all__ = [
    "Database",
    "Base",
    "Entity",
    "BaseRepository",
    "BaseManager",
    "CamelModel",
    "EntityIn",
    "EntityOut",
    "Settings",
    "configure_logging",
    "get_logger",
]

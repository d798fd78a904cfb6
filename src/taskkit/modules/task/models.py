"""Task ORM model."""

from __future__ import annotations

from sqlalchemy import false
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Boolean, Text

from taskkit.core.models import Entity


class Task(Entity):
    """ORM model for a to-do item with a title, optional color and completion flag."""

    __tablename__ = "tasks"
    # ids are never handed out twice, even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    title: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(), index=True
    )

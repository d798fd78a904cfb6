"""Service builder with task module integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Self

from fastapi import FastAPI

from taskkit.core import Settings
from taskkit.core.api.service_builder import BaseServiceBuilder, ServiceInfo
from taskkit.modules.task import TaskRouter

from .dependencies import get_task_manager


@dataclass(slots=True)
class _TaskOptions:
    """Internal task options for ServiceBuilder."""

    prefix: str = "/tasks"
    tags: List[str] = field(default_factory=lambda: ["Tasks"])
    expose_errors: bool = False


class ServiceBuilder(BaseServiceBuilder):
    """Service builder with integrated task module support."""

    def __init__(self, *, expose_errors: bool = False, **kwargs: Any) -> None:
        """Initialize service builder with module-specific state."""
        super().__init__(**kwargs)
        self._expose_errors = expose_errors
        self._task_options: _TaskOptions | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, info: ServiceInfo) -> Self:
        """Create a builder wired from process settings (database, logging, error exposure)."""
        return cls(
            info=info,
            database_url=settings.database_url,
            expose_errors=settings.expose_errors,
        ).with_logging(level=settings.log_level, fmt=settings.log_format)

    # --------------------------------------------------------------------- Module-specific fluent methods

    def with_tasks(
        self,
        *,
        prefix: str = "/tasks",
        tags: List[str] | None = None,
    ) -> Self:
        """Enable task CRUD endpoints."""
        self._task_options = _TaskOptions(
            prefix=prefix,
            tags=list(tags) if tags else ["Tasks"],
            expose_errors=self._expose_errors,
        )
        return self

    # --------------------------------------------------------------------- Extension point implementations

    def _register_module_routers(self, app: FastAPI) -> None:
        """Register module-specific routers."""
        if self._task_options:
            task_options = self._task_options
            task_router = TaskRouter.create(
                prefix=task_options.prefix,
                tags=task_options.tags,
                manager_factory=get_task_manager,
                expose_errors=task_options.expose_errors,
            )
            app.include_router(task_router)

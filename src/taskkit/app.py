"""Application factory wiring settings, database, logging and task routes."""

from __future__ import annotations

from fastapi import FastAPI

from taskkit import __version__
from taskkit.api import ServiceBuilder, ServiceInfo
from taskkit.core import Settings

SERVICE_INFO = ServiceInfo(
    display_name="Taskkit",
    version=__version__,
    summary="CRUD API for to-do tasks with title, color and completion flag",
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the task service app from settings (read from the environment when omitted)."""
    settings = settings or Settings.from_env()
    return (
        ServiceBuilder.from_settings(settings, info=SERVICE_INFO)
        .with_cors()
        .with_health()
        .with_tasks()
        .build()
    )

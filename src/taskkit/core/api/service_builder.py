"""Fluent builder assembling a FastAPI app around a managed Database."""

from __future__ import annotations

import re
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable, Self

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text

from taskkit.core import Database
from taskkit.core.logging import configure_logging, get_logger

from .dependencies import get_database, set_database
from .middleware import add_error_handlers, add_logging_middleware
from .routers import HealthRouter
from .routers.health import HealthState

logger = get_logger(__name__)


class ServiceInfo(BaseModel):
    """Title, version and summary shown in the OpenAPI document."""

    display_name: str
    version: str = "1.0.0"
    summary: str | None = None

    model_config = ConfigDict(extra="forbid")


class BaseServiceBuilder:
    """Builds the app shell: error envelopes, logging, CORS, health and the database lifespan.

    Subclasses mount their feature routers in ``_register_module_routers``.
    """

    def __init__(self, *, info: ServiceInfo, database_url: str = "sqlite+aiosqlite:///:memory:") -> None:
        self.info = info
        self._database_url = database_url
        self._database: Database | None = None
        self._logging: tuple[str, str] | None = None
        self._cors_origins: list[str] | None = None
        self._health_prefix: str | None = None

    def with_database(self, url: str) -> Self:
        """Use a database URL; the app creates and disposes the engine."""
        self._database_url = url
        return self

    def with_database_instance(self, database: Database) -> Self:
        """Use an existing database; the caller keeps ownership and disposes it."""
        self._database = database
        return self

    def with_logging(self, *, level: str = "INFO", fmt: str = "console") -> Self:
        """Configure structlog at startup and log every request with a request id."""
        self._logging = (level, fmt)
        return self

    def with_cors(self, origins: list[str] | None = None) -> Self:
        """Allow cross-origin requests, from any origin unless a list is given."""
        self._cors_origins = list(origins) if origins is not None else ["*"]
        return self

    def with_health(self, *, prefix: str = "/health") -> Self:
        """Expose a health endpoint that pings the database."""
        self._health_prefix = prefix
        return self

    def build(self) -> FastAPI:
        """Assemble the FastAPI application."""
        app = FastAPI(
            title=self.info.display_name,
            description=self.info.summary or "",
            version=self.info.version,
            lifespan=self._build_lifespan(),
        )
        app.openapi = _openapi_with_clean_names(app)  # type: ignore[method-assign]

        add_error_handlers(app)
        if self._logging is not None:
            add_logging_middleware(app)
        if self._cors_origins is not None:
            app.add_middleware(
                CORSMiddleware,
                allow_origins=self._cors_origins,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        if self._health_prefix is not None:
            app.include_router(
                HealthRouter.create(
                    prefix=self._health_prefix,
                    tags=["Observability"],
                    checks={"database": _check_database},
                )
            )

        self._register_module_routers(app)
        return app

    def _register_module_routers(self, app: FastAPI) -> None:
        """Mount feature routers; the base builder has none."""

    def _build_lifespan(self) -> Callable[[FastAPI], AsyncContextManager[None]]:
        url = self._database_url
        injected = self._database
        log_options = self._logging

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            if log_options is not None:
                level, fmt = log_options
                configure_logging(level=level, fmt=fmt)

            database = injected if injected is not None else Database(url)
            await database.init()
            set_database(database)
            logger.info("service.started", service=app.title, version=app.version)
            try:
                yield
            finally:
                set_database(None)
                if injected is None:
                    await database.dispose()
                logger.info("service.stopped", service=app.title)

        return lifespan


async def _check_database() -> tuple[HealthState, str | None]:
    try:
        async with get_database().session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return (HealthState.UNHEALTHY, f"Database connection failed: {e}")
    return (HealthState.HEALTHY, None)


_GENERIC_NAME_PATTERNS = (
    re.compile(r"(\w+?)\[(?:[\w.]+\.)?(\w+)\]"),  # title form: SuccessResponse[TaskOut]
    re.compile(r"([A-Za-z0-9]+)_(?:\w+__)?([A-Za-z0-9]+)_"),  # component key form: SuccessResponse_TaskOut_
)


def _clean_generic_name(name: str) -> str:
    """Turn a parametrized model name into a plain one, e.g. SuccessResponse[TaskOut] -> TaskOutSuccessResponse."""
    for pattern in _GENERIC_NAME_PATTERNS:
        match = pattern.fullmatch(name)
        if match is not None:
            outer, inner = match.groups()
            return f"{inner}{outer}"
    return name


def _rewrite_refs(node: Any) -> None:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            base, _, name = ref.rpartition("/")
            node["$ref"] = f"{base}/{_clean_generic_name(name)}"
        for value in node.values():
            _rewrite_refs(value)
    elif isinstance(node, list):
        for item in node:
            _rewrite_refs(item)


def _openapi_with_clean_names(app: FastAPI) -> Callable[[], dict[str, Any]]:
    """Generate the OpenAPI document once, renaming envelope components like SuccessResponse[TaskOut]."""

    def openapi() -> dict[str, Any]:
        if app.openapi_schema is None:
            document = get_openapi(
                title=app.title, version=app.version, description=app.description, routes=app.routes
            )
            schemas = document.get("components", {}).get("schemas", {})
            renamed: dict[str, Any] = {}
            for name, schema in schemas.items():
                if isinstance(schema, dict) and "title" in schema:
                    schema["title"] = _clean_generic_name(schema["title"])
                renamed[_clean_generic_name(name)] = schema
            if renamed:
                document["components"]["schemas"] = renamed
                _rewrite_refs(document)
            app.openapi_schema = document
        return app.openapi_schema

    return openapi

"""Tests for ServiceBuilder wiring and the application factory."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import taskkit.core.api.service_builder as service_builder
from taskkit.api import ServiceBuilder, ServiceInfo
from taskkit.app import SERVICE_INFO, create_app
from taskkit.core import Database, Settings
from taskkit.core.api.dependencies import get_database

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def test_health_includes_database_check(client: TestClient) -> None:
    """The default health endpoint pings the database."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "checks": {"database": {"state": "healthy"}}}


def test_only_task_and_health_routes_are_mounted(client: TestClient) -> None:
    """The service exposes tasks and health, and nothing else besides the OpenAPI docs."""
    paths = set(client.get("/openapi.json").json()["paths"])

    assert paths == {"/health", "/tasks", "/tasks/{task_id}"}
    assert client.get("/system").status_code == 404
    assert client.get("/info").status_code == 404


def test_openapi_document_uses_service_info(client: TestClient, service_info: ServiceInfo) -> None:
    """Title, version and summary come from ServiceInfo."""
    info = client.get("/openapi.json").json()["info"]

    assert info["title"] == service_info.display_name
    assert info["version"] == "1.0.0"
    assert info["description"] == "Tasks under test"


def test_openapi_names_are_cleaned(client: TestClient) -> None:
    """Parametrized envelope models get readable component names."""
    schemas = client.get("/openapi.json").json()["components"]["schemas"]

    assert "TaskOutSuccessResponse" in schemas
    assert "TaskListSuccessResponse" in schemas
    assert not any("[" in name for name in schemas)


def test_clean_generic_name() -> None:
    """Both title and component-key forms are rewritten; plain names pass through."""
    assert service_builder._clean_generic_name("SuccessResponse[TaskOut]") == "TaskOutSuccessResponse"
    assert service_builder._clean_generic_name("SuccessResponse_TaskOut_") == "TaskOutSuccessResponse"
    assert service_builder._clean_generic_name("TaskIn") == "TaskIn"


def test_cors_allows_any_origin(service_info: ServiceInfo) -> None:
    """with_cors() without origins answers with a wildcard."""
    app = ServiceBuilder(info=service_info, database_url=MEMORY_URL).with_cors().with_tasks().build()

    with TestClient(app) as client:
        response = client.get("/tasks", headers={"Origin": "http://example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_request_id_header(service_info: ServiceInfo) -> None:
    """The logging middleware echoes or generates a request id."""
    app = ServiceBuilder(info=service_info, database_url=MEMORY_URL).with_logging().with_tasks().build()

    with TestClient(app) as client:
        echoed = client.get("/tasks", headers={"X-Request-ID": "abc-123"})
        generated = client.get("/tasks")

    assert echoed.headers["X-Request-ID"] == "abc-123"
    assert len(generated.headers["X-Request-ID"]) == 26


def test_without_tasks_no_task_routes(service_info: ServiceInfo) -> None:
    """Task routes are only mounted when requested."""
    app = ServiceBuilder(info=service_info, database_url=MEMORY_URL).build()

    with TestClient(app) as client:
        assert client.get("/tasks").status_code == 404


def test_custom_prefix(service_info: ServiceInfo) -> None:
    """Task routes can live under another prefix, and Location follows it."""
    app = ServiceBuilder(info=service_info, database_url=MEMORY_URL).with_tasks(prefix="/api/todos").build()

    with TestClient(app) as client:
        response = client.post("/api/todos", json={"title": "Moved"})

    assert response.status_code == 201
    assert response.headers["Location"].endswith(f"/api/todos/{response.json()['data']['id']}")


def test_injected_database_is_not_disposed(tmp_path: Path, service_info: ServiceInfo) -> None:
    """A database passed in by the caller outlives the app."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'shared.db'}", auto_migrate=False)

    def build() -> FastAPI:
        return ServiceBuilder(info=service_info).with_database_instance(database).with_tasks().build()

    with TestClient(build()) as client:
        assert get_database() is database
        assert client.post("/tasks", json={"title": "Injected"}).status_code == 201

    with TestClient(build()) as client:
        assert client.get("/tasks").json()["data"]["totalTasks"] == 1

    asyncio.run(database.dispose())


def test_from_settings_exposes_errors(service_info: ServiceInfo) -> None:
    """Settings decide the database URL and whether error details are exposed."""
    settings = Settings(database_url=MEMORY_URL, expose_errors=True)

    builder = ServiceBuilder.from_settings(settings, info=service_info)

    assert builder._database_url == MEMORY_URL
    assert builder._expose_errors is True
    assert builder._logging == ("INFO", "console")


def test_create_app() -> None:
    """The application factory mounts tasks, health and CORS."""
    app = create_app(Settings(database_url=MEMORY_URL))

    assert app.title == SERVICE_INFO.display_name
    with TestClient(app) as client:
        created = client.post("/tasks", json={"title": "From factory"}, headers={"Origin": "http://x.test"})
        assert created.status_code == 201
        assert created.headers["access-control-allow-origin"] == "*"
        assert client.get("/health").json()["status"] == "healthy"


def test_health_reports_unreachable_database(service_info: ServiceInfo, monkeypatch: pytest.MonkeyPatch) -> None:
    """A failing database ping turns the health state unhealthy."""

    def broken_database() -> Database:
        raise RuntimeError("Database not initialized")

    app = ServiceBuilder(info=service_info, database_url=MEMORY_URL).with_health().build()
    with TestClient(app) as client:
        monkeypatch.setattr(service_builder, "get_database", broken_database)
        data = client.get("/health").json()

    assert data["status"] == "unhealthy"
    assert data["checks"]["database"]["message"] == "Database connection failed: Database not initialized"

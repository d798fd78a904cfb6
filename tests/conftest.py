"""Shared fixtures: in-memory databases and test clients."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskkit import Database
from taskkit.api import ServiceBuilder, ServiceInfo

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create and initialize an in-memory database."""
    db = Database(MEMORY_URL)
    await db.init()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
def service_info() -> ServiceInfo:
    """Provide basic service info for tests."""
    return ServiceInfo(display_name="Test Task Service", version="1.0.0", summary="Tasks under test")


@pytest.fixture
def app(service_info: ServiceInfo) -> FastAPI:
    """Task service backed by a fresh in-memory database."""
    return (
        ServiceBuilder(info=service_info, database_url=MEMORY_URL)
        .with_health()
        .with_tasks()
        .build()
    )


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def file_database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Create and initialize a SQLite file database with its own connection pool."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}", auto_migrate=False)
    await db.init()
    try:
        yield db
    finally:
        await db.dispose()

"""Tests for dependency injection utilities."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import taskkit.core.api.dependencies as deps
from taskkit import Database, TaskManager
from taskkit.api.dependencies import get_task_manager
from taskkit.core.api.dependencies import get_database, get_session, set_database


@pytest.fixture(autouse=True)
def restore_database() -> Iterator[None]:
    """Keep the module-level database untouched across tests."""
    original = deps._database
    yield
    deps._database = original


def test_get_database_uninitialized() -> None:
    """get_database fails loudly before the app has started."""
    set_database(None)

    with pytest.raises(RuntimeError, match="Database not initialized"):
        get_database()


def test_set_and_get_database(database: Database) -> None:
    """The registered database is returned."""
    set_database(database)

    assert get_database() is database


async def test_get_task_manager(database: Database) -> None:
    """The task manager is bound to the request session and the shared database."""
    set_database(database)

    async for session in get_session(database):
        manager = await get_task_manager(session)
        assert isinstance(manager, TaskManager)
        assert manager.repo.s is session
        assert manager.database is database
        break

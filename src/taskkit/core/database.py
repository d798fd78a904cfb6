"""Async SQLAlchemy database connection manager."""

from __future__ import annotations

import asyncio
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from alembic.config import Config
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import ConnectionPoolEntry

from alembic import command

from .logging import get_logger

logger = get_logger(__name__)

BUNDLED_ALEMBIC_DIR = Path(__file__).parent.parent / "alembic"


def _install_sqlite_connect_pragmas(engine: AsyncEngine) -> None:
    """Install SQLite connection pragmas for performance and reliability."""

    def on_connect(dbapi_conn: sqlite3.Connection, _conn_record: ConnectionPoolEntry) -> None:
        """Configure SQLite pragmas on connection."""
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA busy_timeout=30000;")  # 30s
        cur.execute("PRAGMA temp_store=MEMORY;")
        cur.close()

    event.listen(engine.sync_engine, "connect", on_connect)


class Database:
    """Async SQLAlchemy database connection manager."""

    def __init__(
        self, url: str, *, echo: bool = False, alembic_dir: Path | None = None, auto_migrate: bool = True
    ) -> None:
        """Initialize database with connection URL."""
        self.url = url
        self.alembic_dir = alembic_dir
        self.auto_migrate = auto_migrate
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        if self.is_sqlite:
            _install_sqlite_connect_pragmas(self.engine)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def is_sqlite(self) -> bool:
        """Return whether the engine talks to SQLite."""
        return self.engine.dialect.name == "sqlite"

    @property
    def is_memory(self) -> bool:
        """Return whether the database lives only in memory."""
        if not self.is_sqlite:
            return False
        url = self.engine.url
        return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"

    async def init(self) -> None:
        """Create the schema, directly for in-memory databases or through Alembic migrations."""
        from .models import Base

        if self.is_sqlite and not self.is_memory:
            async with self.engine.begin() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

        if self.is_memory or not self.auto_migrate:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.debug("database.tables_created", url=self.url)
            return

        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(self.alembic_dir or BUNDLED_ALEMBIC_DIR))
        alembic_cfg.set_main_option("sqlalchemy.url", self.url)

        # Alembic drives its own event loop, keep it off ours
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, command.upgrade, alembic_cfg, "head")
        logger.info("database.migrated", url=self.url)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Create a database session context manager."""
        async with self._session_factory() as s:
            yield s

    async def dispose(self) -> None:
        """Dispose of database engine and connection pool."""
        await self.engine.dispose()

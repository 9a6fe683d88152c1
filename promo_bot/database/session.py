# promo_bot/database/session.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from promo_bot.database.base import Base

log = logging.getLogger(__name__)


def _sqlite_file(database_url: str) -> Path | None:
    """
    Path of the SQLite file behind the URL, or None for other backends and in-memory DBs.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def _on_sqlite_connect(dbapi_connection, _connection_record) -> None:
    # claim_attempts is append-only; WAL keeps /claim_stats reads off the writers' lock
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.execute("PRAGMA busy_timeout=5000;")  # 5s
    cursor.close()


class Database:
    """
    Async engine + session factory for the claim audit log.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.sqlite_path = _sqlite_file(database_url)
        is_sqlite = make_url(database_url).get_backend_name() == "sqlite"

        if self.sqlite_path is not None:
            # "sqlite+aiosqlite:///./data/promo.db" should not need a pre-created ./data
            self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=False,
            pool_pre_ping=not is_sqlite,
            connect_args={"timeout": 30} if is_sqlite else {},
        )

        if self.sqlite_path is not None:
            event.listen(self.engine.sync_engine, "connect", _on_sqlite_connect)

        self.SessionLocal = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )

    async def init_models(self) -> None:
        # register tables on Base.metadata
        import promo_bot.database.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("Database ready: %s", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.SessionLocal() as s:
            yield s

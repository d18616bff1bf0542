"""Async database session management."""

from collections.abc import AsyncGenerator, AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from medihub.config import settings
from medihub.core.database.base import Base


PostCommitCallback = Callable[[], Awaitable[None]]

_POST_COMMIT_KEY = "post_commit_callbacks"


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Make SQLite honour foreign keys and SAVEPOINTs.

    The sqlite3 driver manages transactions on its own and breaks nested
    transactions; handing BEGIN back to SQLAlchemy restores them.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, applying the SQLite fixes when needed."""
    engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
    if url.startswith("sqlite"):
        enable_sqlite_savepoints(engine)
    return engine


# Create async engine
async_engine = build_engine(settings.database_url, echo=settings.database_echo)

# Create async session factory
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    The session is committed when the request succeeds and rolled back
    on any error. Callbacks registered with :func:`on_commit` run only
    after the commit.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            raise
        finally:
            await session.close()


def on_commit(session: AsyncSession, callback: PostCommitCallback) -> None:
    """Run ``callback`` once the session's transaction has committed.

    Callbacks are dropped if the transaction rolls back instead.
    """
    session.info.setdefault(_POST_COMMIT_KEY, []).append(callback)


async def commit(session: AsyncSession) -> None:
    """Commit the session, then run its :func:`on_commit` callbacks in order."""
    await session.commit()
    for callback in session.info.pop(_POST_COMMIT_KEY, []):
        await callback()


def discard_post_commit(session: AsyncSession) -> None:
    session.info.pop(_POST_COMMIT_KEY, None)


async def rollback(session: AsyncSession) -> None:
    """Roll the session back and drop its pending :func:`on_commit` callbacks."""
    discard_post_commit(session)
    await session.rollback()


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block inside a SAVEPOINT.

    Everything written inside the block is released together, or rolled
    back together when the block raises. The exception is re-raised.

    Usage:
        async with atomic(db):
            db.add(role)
            await db.flush()
    """
    async with session.begin_nested():
        yield session


async def init_models(engine: AsyncEngine | None = None) -> None:
    """Create every table registered on ``Base.metadata``."""
    # Registers the mappers on Base.metadata
    from medihub.core.permissions import models as _permission_models  # noqa: F401, PLC0415
    from medihub.modules.users import models as _user_models  # noqa: F401, PLC0415

    async with (engine or async_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

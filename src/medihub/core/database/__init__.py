"""Database layer - session management, base models, and mixins."""

from medihub.core.database.base import Base, TimestampMixin, generate_id
from medihub.core.database.session import (
    async_engine,
    async_session_factory,
    atomic,
    build_engine,
    commit,
    discard_post_commit,
    enable_sqlite_savepoints,
    get_db,
    init_models,
    on_commit,
    rollback,
)


__all__ = [
    "Base",
    "TimestampMixin",
    "async_engine",
    "async_session_factory",
    "atomic",
    "build_engine",
    "commit",
    "discard_post_commit",
    "enable_sqlite_savepoints",
    "generate_id",
    "get_db",
    "init_models",
    "on_commit",
    "rollback",
]

"""Database infrastructure: engine, session factory and lifecycle hooks."""

from doease.infra.database.session import (
    AsyncSessionLocal,
    build_engine,
    build_sessionmaker,
    close_database,
    create_tables,
    engine,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "build_engine",
    "build_sessionmaker",
    "close_database",
    "create_tables",
    "engine",
    "init_database",
]

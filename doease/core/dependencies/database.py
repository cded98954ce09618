"""Database dependencies for FastAPI route handlers.

`get_db_session()` ties a session to the HTTP request. CLI commands use
`AsyncSessionLocal` directly. Sweeps open one session per recipient, so
they receive the session factory itself through `get_session_factory()`.

Testing:
    app.dependency_overrides[get_session_factory] = lambda: test_sessionmaker
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from doease.infra.database import AsyncSessionLocal


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the application's session factory."""
    return AsyncSessionLocal


SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]


async def get_db_session(factory: SessionFactoryDep) -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for a database session.

    Yields:
        Database session that is closed after the request. Handlers commit
        explicitly; anything uncommitted is rolled back on close.

    Example:
        @router.get("/tasks")
        async def list_tasks(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

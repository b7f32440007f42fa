"""
Database Dependencies for FastAPI Routes

Routes declare that they need a session and FastAPI provides one per request:

    @router.get("/contents/{key}")
    async def get_content(key: str, db: DBSession):
        return await ContentStore(db).get_by_key(key)

The session is rolled back on errors and closed after the response.

Learning Resources:
- FastAPI Dependencies: https://fastapi.tiangolo.com/tutorial/dependencies/
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Thin wrapper around get_session() so tests can override a single,
    stable dependency: ``app.dependency_overrides[get_db] = ...``.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in get_session():
        yield session


# Shorter route signatures: ``db: DBSession`` instead of
# ``db: AsyncSession = Depends(get_db)``
DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_db_override(session: AsyncSession) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """
    Create a dependency override that always yields the given session.

    Usage in Tests:
    ---------------
        app.dependency_overrides[get_db] = get_db_override(db_session)
        response = await client.post("/api/v1/content/summarize", json={...})
        app.dependency_overrides.clear()
    """
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    return _override

"""
Pytest configuration and fixtures.

This file is automatically discovered by pytest and provides
shared fixtures for all test modules.

The suite runs against an in-memory SQLite database, so no PostgreSQL
server is needed. Environment variables are set before the application is
imported because settings are read once at import time.

References:
-----------
- Pytest Fixtures: https://docs.pytest.org/en/stable/fixture.html
- FastAPI Testing: https://fastapi.tiangolo.com/tutorial/testing/
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("AI_STUB_DELAY_SCALE", "0")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="studyaid-uploads-"))

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.deps import get_db, get_db_override  # noqa: E402
from app.main import app  # noqa: E402
from app.services.upload_service import UploadService, get_upload_service  # noqa: E402


# ================================
# Database Fixtures
# ================================

@pytest_asyncio.fixture
async def test_engine():
    """
    Create a fresh in-memory database for each test.

    StaticPool keeps a single connection open; with a plain pool every
    checkout would open a new, empty :memory: database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Database session bound to the per-test engine."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


# ================================
# FastAPI Client Fixtures
# ================================

@pytest.fixture
def upload_dir(tmp_path):
    """Per-test directory uploaded files are written to."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing FastAPI endpoints.

    Overrides the database session and the upload directory.

    Usage:
        async def test_something(client: AsyncClient):
            response = await client.post("/api/v1/content/summarize", json={...})
            assert response.status_code == 200
    """
    app.dependency_overrides[get_db] = get_db_override(db_session)
    app.dependency_overrides[get_upload_service] = lambda: UploadService(upload_dir=str(upload_dir))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ================================
# Utility Fixtures
# ================================

@pytest.fixture
def sample_html() -> str:
    """A small article page with a title, headings and paragraphs."""
    return """
    <html>
      <head><title>Photosynthesis Basics</title></head>
      <body>
        <nav>Home | About</nav>
        <h1>Photosynthesis</h1>
        <p>Plants convert light into chemical energy.</p>
        <p>Chlorophyll absorbs mostly blue and red light.</p>
        <footer>Copyright</footer>
      </body>
    </html>
    """


# ================================
# Pytest Hooks
# ================================

def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that require network access and real API keys"
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires network and API keys)"
    )

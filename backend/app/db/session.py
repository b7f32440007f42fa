"""
Database Session Management

Engine creation, the session factory and the startup/shutdown hooks.

Architecture Flow:
------------------
Application Start → Create Engine → Connection Pool Ready
↓
API Request → Get Session → Execute Queries → Commit/Rollback → Close Session
↓
Application Shutdown → Dispose Engine → Close All Connections

Two drivers are supported:
- postgresql+asyncpg:// for deployments (pooled)
- sqlite+aiosqlite:// for local runs and the test suite (no pooling)

Learning Resources:
- Async Sessions: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


# ================================
# Database Engine Configuration
# ================================

def get_engine_config() -> dict[str, Any]:
    """
    Build keyword arguments for create_async_engine based on driver and environment.

    PostgreSQL:
    -----------
    - AsyncAdaptedQueuePool with DB_POOL_SIZE connections, DB_MAX_OVERFLOW extra
    - pool_pre_ping: test a connection before handing it out
    - pool_recycle: drop connections older than an hour (two in production)

    SQLite:
    -------
    - NullPool; aiosqlite opens a connection per checkout
    - check_same_thread disabled since aiosqlite runs on its own thread
    """
    config: dict[str, Any] = {"echo": settings.DB_ECHO}

    if settings.is_sqlite:
        logger.info("configuring_database_engine", driver="aiosqlite", pool_type="NullPool")
        config.update({
            "poolclass": NullPool,
            "connect_args": {"check_same_thread": False},
        })
        return config

    config.update({
        "pool_pre_ping": True,
        "pool_recycle": 7200 if settings.is_production else 3600,
        "pool_timeout": 30,
        "connect_args": {
            "server_settings": {
                "application_name": settings.APP_NAME,
            }
        },
    })

    if settings.APP_ENV in ("development", "production"):
        logger.info(
            "configuring_database_engine",
            environment=settings.APP_ENV,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        config.update({
            "poolclass": AsyncAdaptedQueuePool,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
        })
    else:
        # Staging/testing against PostgreSQL: fresh connections for isolation
        logger.info(
            "configuring_database_engine",
            environment=settings.APP_ENV,
            pool_type="NullPool",
        )
        config["poolclass"] = NullPool

    return config


def create_engine() -> AsyncEngine:
    """Create the async database engine from settings.DATABASE_URL."""
    engine_config = get_engine_config()

    engine = create_async_engine(settings.DATABASE_URL, **engine_config)

    logger.info(
        "database_engine_created",
        dialect=engine.dialect.name,
        pool_size=engine_config.get("pool_size", "NullPool"),
    )

    return engine


# One engine per process; it owns the connection pool.
engine: AsyncEngine = create_engine()

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    # Keep attributes loaded after commit so route handlers can serialize them
    expire_on_commit=False,
)


# ================================
# Session Lifecycle Functions
# ================================

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session for a single request.

    The session is rolled back if the request raises and is always closed
    when the request finishes. Handlers commit explicitly.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(
                "database_session_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Verify connectivity at startup and, outside production, create missing tables.

    Production schemas are managed with Alembic (see alembic/versions).

    Called from: app.main.lifespan() startup event
    """
    logger.info("initializing_database")

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

        logger.info("database_connection_successful")

        if not settings.is_production:
            from app.db.base import Base
            import app.models  # noqa: F401  (register tables on Base.metadata)

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            logger.info("database_tables_created")

    except Exception as e:
        logger.error(
            "database_initialization_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def close_db() -> None:
    """
    Dispose of the engine and close every pooled connection.

    Called from: app.main.lifespan() shutdown event
    """
    logger.info("closing_database_connections")

    try:
        await engine.dispose()
        logger.info("database_connections_closed")
    except Exception as e:
        # Shutting down anyway, only record it
        logger.error(
            "database_closure_failed",
            error=str(e),
            error_type=type(e).__name__,
        )


# ================================
# Database Health Check
# ================================

async def check_db_health() -> bool:
    """
    Check if the database answers a trivial query.

    Returns:
        bool: True if database is healthy, False otherwise
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    except Exception as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return False

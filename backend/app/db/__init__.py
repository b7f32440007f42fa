"""Database utilities and session management."""

from app.db.base import Base, TimestampedModel, String255, String2000
from app.db.deps import DBSession, get_db, get_db_override
from app.db.session import (
    AsyncSessionLocal,
    check_db_health,
    close_db,
    engine,
    get_session,
    init_db,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampedModel",
    # String types
    "String255",
    "String2000",
    # Session management
    "engine",
    "AsyncSessionLocal",
    "get_session",
    "init_db",
    "close_db",
    "check_db_health",
    # Dependencies
    "get_db",
    "DBSession",
    "get_db_override",
]

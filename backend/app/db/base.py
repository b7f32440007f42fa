"""
Database Base Classes and Common Utilities

Foundation for the ORM models of the application.

Key Pieces:
-----------
1. metadata: shared MetaData with a constraint naming convention
2. Base: SQLAlchemy DeclarativeBase bound to that metadata
3. TimestampedModel: abstract base adding id / created_at / updated_at

Learning Resources:
- SQLAlchemy Declarative Base: https://docs.sqlalchemy.org/en/20/orm/declarative_config.html
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ================================
# Naming Convention for Constraints
# ================================
# Deterministic constraint names keep Alembic autogenerate diffs stable
# across PostgreSQL and SQLite.
#
# - ix_contents_status: Index on 'contents.status'
# - uq_contents_content_key: Unique constraint on 'contents.content_key'
# - pk_contents: Primary key on 'contents'
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


# ================================
# Base DeclarativeBase Class
# ================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Usage:
        class Content(Base):
            __tablename__ = "contents"
            id: Mapped[int] = mapped_column(primary_key=True)
    """

    metadata = metadata

    __tablename__: str


# ================================
# Timestamped Base Model
# ================================
class TimestampedModel(Base):
    """
    Abstract model with the columns every table gets.

    Columns:
    --------
    - id: auto-incrementing integer primary key
    - created_at: set once on insert (UTC)
    - updated_at: refreshed on every UPDATE (UTC)

    Always store UTC; convert to the user's timezone at the edges.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
        comment="Timestamp when record was created (UTC)"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when record was last updated (UTC)"
    )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def dict(self) -> dict[str, Any]:
        """Column name → value mapping, handy for logging and tests."""
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }


# ================================
# String Length Constraints
# ================================
String255 = String(255)  # file names, paths, keys
String2000 = String(2000)  # URLs

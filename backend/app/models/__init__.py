"""
Database Models

Import models from this module so they are registered on Base.metadata
before tables are created or Alembic autogenerates a migration:

    from app.models import Content, ContentSourceType, ContentStatus
"""

from app.models.content import Content, ContentSourceType, ContentStatus

__all__ = [
    "Content",
    # Enums
    "ContentSourceType",
    "ContentStatus",
]

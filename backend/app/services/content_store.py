"""
Content Store

Persistence helpers for Content records, used by the content routes.
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.content import Content

logger = get_logger(__name__)

TEXT_PLACEHOLDER = "Text for content ID ${contentId} (fetched from DB - placeholder)"
CONTEXT_PLACEHOLDER = "Context for content ID ${contentId} (fetched from DB - placeholder)"


class ContentStore:
    """Read and write Content rows through a request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_key(self, content_key: str) -> Optional[Content]:
        """Look up a record by the id handed out to clients."""
        result = await self.db.execute(
            select(Content).where(Content.content_key == content_key)
        )
        return result.scalar_one_or_none()

    async def upsert(self, content_key: str, **fields: Any) -> Content:
        """
        Create the record for content_key, or overwrite the given fields if it exists.

        Re-submitting the same YouTube video maps to the same key, so the
        second submission refreshes the existing row instead of failing on the
        unique constraint.
        """
        content = await self.get_by_key(content_key)
        created = content is None

        if created:
            content = Content(content_key=content_key, **fields)
            self.db.add(content)
        else:
            for name, value in fields.items():
                setattr(content, name, value)

        await self.db.commit()

        logger.info(
            "content_saved",
            content_key=content_key,
            created=created,
            source_type=str(content.source_type),
            status=str(content.status),
        )
        return content

    async def resolve_text(self, content_id: Optional[str], placeholder: str = TEXT_PLACEHOLDER) -> str:
        """
        Text to feed the AI service when a request names a contentId but sends no text.

        Returns the record's extracted_text when the id is known and text was
        extracted, otherwise the placeholder string.
        """
        if content_id:
            content = await self.get_by_key(content_id)
            if content is not None and content.extracted_text:
                return content.extracted_text
            logger.info(
                "content_text_unavailable",
                content_id=content_id,
                found=content is not None,
            )
        return placeholder

    async def save_summary(self, content_id: Optional[str], summary: str) -> bool:
        """Attach a summary to a stored record. Returns False when the id is unknown."""
        if not content_id:
            return False

        content = await self.get_by_key(content_id)
        if content is None:
            return False

        content.summary = summary
        await self.db.commit()

        logger.info("content_summary_saved", content_id=content_id)
        return True

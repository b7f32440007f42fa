"""
Content Model

One row per ingested source: an uploaded file, a YouTube video link or a
webpage link, together with whatever text and summary was derived from it.

Database Tables:
----------------
- contents: ingested sources and their derived artifacts

There are no relationships; the table stands alone.

Lifecycle:
----------
    pending → processing → completed
                    ↓
                  failed

Rows are created by the ingestion endpoints and updated when text is
extracted or a summary is generated. Deletion is an administrative action
outside the API.
"""

import enum
from typing import Optional

from sqlalchemy import Enum as SAEnum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import TimestampedModel, String255, String2000


# ================================
# Enums
# ================================

class ContentSourceType(str, enum.Enum):
    """
    Where a content record came from.

    - UPLOAD: a document uploaded through /upload (pdf, doc, docx)
    - YOUTUBE: a YouTube video link
    - WEBPAGE: a webpage link, scraped for text
    - IMAGE_OCR: an uploaded image, run through OCR
    """

    UPLOAD = "upload"
    YOUTUBE = "youtube"
    WEBPAGE = "webpage"
    IMAGE_OCR = "image_ocr"

    def __str__(self) -> str:
        return self.value


class ContentStatus(str, enum.Enum):
    """
    Processing status of a content record.

    Example Queries:
    ----------------
    # Records still waiting for extraction
    pending = select(Content).where(Content.status == ContentStatus.PENDING)

    # Records whose extraction failed
    failed = select(Content).where(Content.status == ContentStatus.FAILED)
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    # Store the lowercase values ("image_ocr"), not the member names
    return [member.value for member in enum_cls]


# ================================
# Content Model
# ================================

class Content(TimestampedModel):
    """
    Content model - an ingested document/link and its derived artifacts.

    Table: contents
    ---------------
    content_key is the id handed back to clients by the ingestion endpoints:

    - upload / image_ocr: stored file name, e.g. "1718035200123.png"
    - youtube: "youtube_<videoId>"
    - webpage: "webpage_<epoch milliseconds>"

    The summarize / answer-question / generate-questions endpoints accept this
    key as ``contentId`` and read extracted_text from the matching row.
    """

    __tablename__ = "contents"

    # ================================
    # Identity & Source
    # ================================

    content_key: Mapped[str] = mapped_column(
        String255,
        nullable=False,
        unique=True,
        index=True,
        comment="Public identifier returned to API clients"
    )

    source_type: Mapped[ContentSourceType] = mapped_column(
        SAEnum(
            ContentSourceType,
            name="content_source_type",
            values_callable=_enum_values,
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        nullable=False,
        index=True,
        comment="upload, youtube, webpage or image_ocr"
    )

    original_name: Mapped[Optional[str]] = mapped_column(
        String255,
        nullable=True,
        comment="Client-side name of an uploaded file"
    )

    url: Mapped[Optional[str]] = mapped_column(
        String2000,
        nullable=True,
        comment="Source URL for YouTube/webpage content"
    )

    file_path: Mapped[Optional[str]] = mapped_column(
        String255,
        nullable=True,
        comment="Where an uploaded file was stored"
    )

    mimetype: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="MIME type of an uploaded file"
    )

    title: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Webpage <title> or video title"
    )

    # ================================
    # Derived Artifacts
    # ================================

    extracted_text: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Transcript, OCR output or scraped page text"
    )

    summary: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="AI-generated summary"
    )

    # ================================
    # Processing State
    # ================================

    status: Mapped[ContentStatus] = mapped_column(
        SAEnum(
            ContentStatus,
            name="content_status",
            values_callable=_enum_values,
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        nullable=False,
        default=ContentStatus.PENDING,
        index=True,
        comment="pending, processing, completed or failed"
    )

    processing_error: Mapped[Optional[str]] = mapped_column(
        String(1000),
        nullable=True,
        comment="Last extraction error message"
    )

    def __repr__(self) -> str:
        return (
            f"Content(id={self.id}, key='{self.content_key}', "
            f"type={self.source_type}, status={self.status})"
        )


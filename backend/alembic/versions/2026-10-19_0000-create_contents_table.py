"""create_contents_table

Revision ID: 5b1e0c7d9a42
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5b1e0c7d9a42'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the contents table.

    Enum columns are stored as VARCHAR(20) holding the lowercase values
    ("image_ocr", "completed"), matching native_enum=False on the model.
    """
    op.create_table(
        'contents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='Auto-incrementing primary key'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was created (UTC)'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was last updated (UTC)'),
        sa.Column('content_key', sa.String(length=255), nullable=False, comment='Public identifier returned to API clients'),
        sa.Column('source_type', sa.String(length=20), nullable=False, comment='upload, youtube, webpage or image_ocr'),
        sa.Column('original_name', sa.String(length=255), nullable=True, comment='Client-side name of an uploaded file'),
        sa.Column('url', sa.String(length=2000), nullable=True, comment='Source URL for YouTube/webpage content'),
        sa.Column('file_path', sa.String(length=255), nullable=True, comment='Where an uploaded file was stored'),
        sa.Column('mimetype', sa.String(length=100), nullable=True, comment='MIME type of an uploaded file'),
        sa.Column('title', sa.String(length=500), nullable=True, comment='Webpage <title> or video title'),
        sa.Column('extracted_text', sa.Text(), nullable=True, comment='Transcript, OCR output or scraped page text'),
        sa.Column('summary', sa.Text(), nullable=True, comment='AI-generated summary'),
        sa.Column('status', sa.String(length=20), nullable=False, comment='pending, processing, completed or failed'),
        sa.Column('processing_error', sa.String(length=1000), nullable=True, comment='Last extraction error message'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_contents')),
    )

    op.create_index(op.f('ix_contents_content_key'), 'contents', ['content_key'], unique=True)
    op.create_index(op.f('ix_contents_created_at'), 'contents', ['created_at'], unique=False)
    op.create_index(op.f('ix_contents_source_type'), 'contents', ['source_type'], unique=False)
    op.create_index(op.f('ix_contents_status'), 'contents', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_contents_status'), table_name='contents')
    op.drop_index(op.f('ix_contents_source_type'), table_name='contents')
    op.drop_index(op.f('ix_contents_created_at'), table_name='contents')
    op.drop_index(op.f('ix_contents_content_key'), table_name='contents')
    op.drop_table('contents')

"""
Upload service: validate and store files posted to /content/upload.

Rules:
- at most settings.UPLOAD_MAX_BYTES (10MB by default)
- both the MIME type and the file extension must match the allowed-types
  pattern (pdf|doc|docx|jpeg|jpg|png)
- stored as <epoch milliseconds><original extension> under settings.UPLOAD_DIR
"""

import asyncio
import os
import re
import time
from pathlib import Path
from typing import Dict, Optional

from fastapi import UploadFile, status

from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import get_logger

logger = get_logger(__name__)


class UploadError(AppError):
    """Raised when an upload is rejected. Always a client error."""

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class UploadService:
    """
    Validates uploaded files and writes them to disk.

    Example:
        >>> uploads = UploadService()
        >>> stored = await uploads.save(upload_file)
        >>> stored["filename"], stored["is_image"]
        ('1718035200123.png', True)
    """

    CHUNK_SIZE = 1024 * 1024

    def __init__(
        self,
        upload_dir: Optional[str] = None,
        max_bytes: Optional[int] = None,
        allowed_types: Optional[str] = None,
    ):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.max_bytes = max_bytes or settings.UPLOAD_MAX_BYTES
        self.allowed_types = allowed_types or settings.UPLOAD_ALLOWED_TYPES
        self._allowed_pattern = re.compile(self.allowed_types)

    # ========================================
    # Validation
    # ========================================

    def is_allowed(self, filename: str, mimetype: str) -> bool:
        """
        Both the MIME type and the lowercased extension must match the pattern.

        Examples:
            >>> UploadService().is_allowed("notes.PDF", "application/pdf")
            True
            >>> UploadService().is_allowed("notes.txt", "text/plain")
            False
        """
        extension = os.path.splitext(filename)[1].lower()
        return bool(
            self._allowed_pattern.search(mimetype or "")
            and self._allowed_pattern.search(extension)
        )

    @staticmethod
    def is_image(mimetype: Optional[str]) -> bool:
        return bool(mimetype) and mimetype.startswith("image/")

    # ========================================
    # Storage
    # ========================================

    def _target_path(self, original_name: str) -> Path:
        extension = os.path.splitext(original_name)[1]
        stamp = int(time.time() * 1000)
        path = self.upload_dir / f"{stamp}{extension}"
        # Two uploads in the same millisecond: bump the stamp
        while path.exists():
            stamp += 1
            path = self.upload_dir / f"{stamp}{extension}"
        return path

    async def _read_limited(self, upload: UploadFile) -> bytes:
        data = bytearray()
        while True:
            chunk = await upload.read(self.CHUNK_SIZE)
            if not chunk:
                break
            data.extend(chunk)
            if len(data) > self.max_bytes:
                # Existing clients match on this exact text
                raise UploadError("Multer error: File too large")
        return bytes(data)

    async def save(self, upload: Optional[UploadFile]) -> Dict:
        """
        Validate and store an uploaded file.

        Returns:
            {
                'filename': str,       # stored name, also the content id
                'path': str,           # path of the stored file
                'original_name': str,
                'mimetype': str,
                'size': int,
                'is_image': bool,
            }

        Raises:
            UploadError: missing file, disallowed type or oversize file
        """
        if upload is None or not upload.filename:
            raise UploadError("No file uploaded.")

        original_name = upload.filename
        mimetype = upload.content_type or ""

        if not self.is_allowed(original_name, mimetype):
            logger.info("upload_rejected_type", filename=original_name, mimetype=mimetype)
            raise UploadError(f"Error: File type not allowed! Allowed types: /{self.allowed_types}/")

        data = await self._read_limited(upload)

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self._target_path(original_name)
        await asyncio.to_thread(path.write_bytes, data)

        logger.info(
            "upload_stored",
            filename=path.name,
            original_name=original_name,
            mimetype=mimetype,
            size=len(data),
        )

        return {
            'filename': path.name,
            'path': str(path),
            'original_name': original_name,
            'mimetype': mimetype,
            'size': len(data),
            'is_image': self.is_image(mimetype),
        }


def get_upload_service() -> UploadService:
    """FastAPI dependency returning an UploadService."""
    return UploadService()

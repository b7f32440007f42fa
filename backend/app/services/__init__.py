"""Business logic services."""

from app.services.content_store import ContentStore
from app.services.ocr_service import OCRService, get_ocr_service
from app.services.transcript_service import TranscriptService, get_transcript_service
from app.services.upload_service import UploadService, get_upload_service
from app.services.webpage_service import WebpageService, get_webpage_service
from app.services.youtube import YouTubeService, get_youtube_service

__all__ = [
    "ContentStore",
    "OCRService",
    "get_ocr_service",
    "TranscriptService",
    "get_transcript_service",
    "UploadService",
    "get_upload_service",
    "WebpageService",
    "get_webpage_service",
    "YouTubeService",
    "get_youtube_service",
]

"""
YouTube transcript extraction service.

Transcripts are a best-effort addition to a YouTube link: when one exists it
becomes the extracted text of the content record, when none exists the
record simply stays pending.

Lookup order:
1. Manual transcript in a preferred language
2. Auto-generated transcript in a preferred language
3. Any transcript (manual first)
"""

import asyncio
import re
from typing import Dict, List, Optional, Tuple

import requests
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class TranscriptError(Exception):
    """Base exception for transcript-related errors."""
    pass


class NoTranscriptAvailable(TranscriptError):
    """Raised when no transcript is available for a video."""
    pass


class TranscriptService:
    """
    Service for extracting and cleaning YouTube video transcripts.

    Example:
        >>> service = TranscriptService()
        >>> text, metadata = await service.get_transcript("dQw4w9WgXcQ")
        >>> metadata["language"], metadata["type"]
        ('en', 'manual')
    """

    def __init__(self, preferred_languages: Optional[List[str]] = None):
        self.preferred_languages = preferred_languages or settings.YOUTUBE_PREFERRED_TRANSCRIPT_LANGUAGES
        self._api = YouTubeTranscriptApi()

    async def get_transcript(self, video_id: str) -> Tuple[str, Dict]:
        """
        Get transcript for a YouTube video.

        Returns:
            Tuple of (transcript_text, metadata)

            metadata contains:
            {
                'language': str,
                'type': 'manual' or 'auto',
                'video_id': str,
            }

        Raises:
            NoTranscriptAvailable: If the video has no usable transcript
            TranscriptError: For any other retrieval failure
        """
        return await asyncio.to_thread(self._get_transcript_sync, video_id)

    async def fetch_transcript(self, video_id: str) -> Optional[Tuple[str, Dict]]:
        """
        Best-effort variant of get_transcript.

        Returns None (and logs why) instead of raising when no transcript can
        be obtained.
        """
        try:
            return await self.get_transcript(video_id)
        except TranscriptError as e:
            logger.info("transcript_unavailable", video_id=video_id, reason=str(e))
            return None

    def _get_transcript_sync(self, video_id: str) -> Tuple[str, Dict]:
        try:
            transcript_list = self._api.list(video_id)
            transcript = self._select_transcript(transcript_list)
            if transcript is None:
                raise NoTranscriptAvailable(
                    f"No transcript available for video {video_id} in any language"
                )

            fetched = transcript.fetch()
            text = self.clean_transcript(' '.join(snippet.text for snippet in fetched))

        except TranscriptError:
            raise
        except TranscriptsDisabled as e:
            raise NoTranscriptAvailable(f"Transcripts are disabled for video {video_id}") from e
        except VideoUnavailable as e:
            raise NoTranscriptAvailable(f"Video {video_id} is unavailable") from e
        except CouldNotRetrieveTranscript as e:
            logger.error("transcript_retrieval_failed", video_id=video_id, error=str(e))
            raise TranscriptError(f"Failed to get transcript: {e}") from e
        except requests.RequestException as e:
            logger.error("transcript_request_failed", video_id=video_id, error=str(e))
            raise TranscriptError(f"Failed to reach YouTube for transcript: {e}") from e

        logger.info(
            "transcript_fetched",
            video_id=video_id,
            language=transcript.language_code,
            generated=transcript.is_generated,
            chars=len(text),
        )
        return text, {
            'language': transcript.language_code,
            'type': 'auto' if transcript.is_generated else 'manual',
            'video_id': video_id,
        }

    def _select_transcript(self, transcript_list):
        """Pick the best transcript from a TranscriptList, or None."""
        for finder in (
            transcript_list.find_manually_created_transcript,
            transcript_list.find_generated_transcript,
        ):
            try:
                return finder(self.preferred_languages)
            except NoTranscriptFound:
                continue

        available = sorted(transcript_list, key=lambda t: t.is_generated)
        return available[0] if available else None

    @staticmethod
    def clean_transcript(text: str) -> str:
        """
        Clean and normalize transcript text.

        Removes bracketed sound tags ([Music], [Applause], ...) and inline
        timestamps, collapses whitespace, squashes repeated punctuation and
        unescapes the HTML entities auto-captions tend to contain.
        """
        if not text:
            return ""

        text = re.sub(r'\[.*?\]', '', text)
        text = re.sub(r'\d{1,2}:\d{2}(?::\d{2})?', '', text)

        text = re.sub(r'\s+', ' ', text).strip()
        text = re.sub(r'([.!?])\1+', r'\1', text)

        text = text.replace('&nbsp;', ' ')
        text = text.replace('&amp;', '&')
        text = text.replace('&lt;', '<')
        text = text.replace('&gt;', '>')

        return text


# ========================================
# Helper Functions
# ========================================

def get_transcript_service() -> TranscriptService:
    """Get a transcript service instance."""
    return TranscriptService()

"""
YouTube Data API service for video links.

Wraps the YouTube Data API v3 to validate video URLs and fetch the metadata
(title, channel, duration, ...) of a single video.
"""

import asyncio
import re
from typing import Dict, Optional, Tuple
from urllib.parse import urlparse, parse_qs

from fastapi import status
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
import isodate

from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import get_logger

logger = get_logger(__name__)


class YouTubeAPIError(AppError):
    """Base exception for YouTube API errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(message, status_code=status_code)


class YouTubeNotConfiguredError(YouTubeAPIError):
    """Raised when no YouTube API key is configured."""

    def __init__(self):
        super().__init__(
            "YouTube API key is not configured. Set YOUTUBE_API_KEY in environment variables.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class YouTubeQuotaExceededError(YouTubeAPIError):
    """Raised when YouTube API quota is exceeded."""

    def __init__(self):
        super().__init__(
            "YouTube API quota exceeded",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )


class YouTubeVideoNotFoundError(YouTubeAPIError):
    """Raised when a YouTube video is not found."""

    def __init__(self, video_id: str):
        super().__init__(f"Video not found: {video_id}", status_code=status.HTTP_404_NOT_FOUND)


class YouTubeService:
    """
    Service for interacting with YouTube Data API v3.

    Provides methods for:
    - Video URL parsing and validation
    - Video metadata fetching

    Example:
        >>> youtube = YouTubeService()
        >>> video_id = youtube.extract_video_id_from_url("https://youtu.be/dQw4w9WgXcQ")
        >>> video = await youtube.get_video_details(video_id)
        >>> video["title"]
    """

    VALID_HOSTS = frozenset({
        "youtube.com",
        "www.youtube.com",
        "m.youtube.com",
        "music.youtube.com",
        "gaming.youtube.com",
        "youtu.be",
    })
    # /embed/ID, /shorts/ID, /live/ID, /v/ID
    PATH_ID_PREFIXES = ("embed", "shorts", "live", "v")
    VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize YouTube service with API key.

        Args:
            api_key: YouTube Data API key. If None, uses settings.YOUTUBE_API_KEY

        Raises:
            YouTubeNotConfiguredError: If no API key is provided or found in settings
        """
        self.api_key = api_key or settings.YOUTUBE_API_KEY

        if not self.api_key:
            raise YouTubeNotConfiguredError()

        self._youtube = None
        self._initialize_client()

    def _initialize_client(self) -> None:
        """Initialize YouTube API client."""
        try:
            self._youtube = build(
                'youtube',
                'v3',
                developerKey=self.api_key,
                cache_discovery=False
            )
            logger.info("youtube_client_initialized")
        except Exception as e:
            logger.error("youtube_client_init_failed", error=str(e))
            raise YouTubeAPIError(f"Failed to initialize YouTube API: {e}") from e

    # ========================================
    # Video Operations
    # ========================================

    async def get_video_details(self, video_id: str) -> Dict:
        """
        Get detailed information about a specific video.

        Args:
            video_id: YouTube video ID

        Returns:
            Dictionary containing video information:
            {
                'video_id': str,
                'title': str,
                'description': str,
                'channel_id': str,
                'channel_title': str,
                'published_at': str,
                'duration_seconds': int,
                'duration_formatted': str,
                'thumbnail_url': str,
                'has_captions': bool
            }

        Raises:
            YouTubeVideoNotFoundError: If video doesn't exist
            YouTubeQuotaExceededError: If API quota exceeded
            YouTubeAPIError: For other API errors
        """
        request = self._youtube.videos().list(
            part='snippet,contentDetails',
            id=video_id
        )
        try:
            response = await asyncio.to_thread(request.execute)
        except HttpError as e:
            if e.resp.status == 403:
                raise YouTubeQuotaExceededError() from e
            elif e.resp.status == 404:
                raise YouTubeVideoNotFoundError(video_id) from e
            logger.error("youtube_api_error", video_id=video_id, error=str(e))
            raise YouTubeAPIError(f"YouTube API error: {e}") from e

        if not response.get('items'):
            raise YouTubeVideoNotFoundError(video_id)

        video = self._parse_video_details(response['items'][0])
        logger.info("youtube_video_fetched", video_id=video_id, title=video['title'])
        return video

    # ========================================
    # Utility Functions
    # ========================================

    @classmethod
    def extract_video_id_from_url(cls, url: str) -> Optional[str]:
        """
        Extract video ID from YouTube URL.

        Supports multiple URL formats:
        - https://www.youtube.com/watch?v=VIDEO_ID
        - https://youtu.be/VIDEO_ID
        - https://www.youtube.com/embed/VIDEO_ID
        - https://www.youtube.com/shorts/VIDEO_ID
        - https://www.youtube.com/live/VIDEO_ID

        Args:
            url: YouTube URL

        Returns:
            Video ID if found, None otherwise
        """
        try:
            parsed = urlparse(url.strip())
        except (AttributeError, ValueError):
            return None

        host = (parsed.hostname or '').lower()
        if parsed.scheme not in ('http', 'https') or host not in cls.VALID_HOSTS:
            return None

        # A v= parameter wins over the path, short links included
        video_id = parse_qs(parsed.query).get('v', [None])[0]

        if not video_id:
            path_parts = parsed.path.strip('/').split('/')
            if host == 'youtu.be':
                video_id = path_parts[0]
            elif len(path_parts) >= 2 and path_parts[0] in cls.PATH_ID_PREFIXES:
                video_id = path_parts[1]

        # Anything past the first 11 characters is ignored
        return video_id[:11] if video_id else None

    @classmethod
    def validate_url(cls, url: Optional[str]) -> bool:
        """True when url is a YouTube link carrying a well-formed video id."""
        if not url:
            return False
        video_id = cls.extract_video_id_from_url(url)
        return bool(video_id) and cls.validate_video_id(video_id)

    @classmethod
    def validate_video_id(cls, video_id: str) -> bool:
        """
        Validate YouTube video ID format.

        Video IDs are 11 characters of letters, digits, '-' and '_'.
        """
        return bool(cls.VIDEO_ID_PATTERN.match(video_id))

    @staticmethod
    def format_duration(iso_duration: str) -> Tuple[int, str]:
        """
        Convert ISO 8601 duration to seconds and human-readable format.

        Args:
            iso_duration: ISO 8601 duration string (e.g., "PT15M33S")

        Returns:
            Tuple of (total_seconds, formatted_string)

        Example:
            >>> YouTubeService.format_duration("PT1H2M3S")
            (3723, "1:02:03")
        """
        try:
            total_seconds = int(isodate.parse_duration(iso_duration).total_seconds())
        except (isodate.ISO8601Error, TypeError, ValueError):
            return 0, "0:00"

        hours, remainder = divmod(total_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours:
            return total_seconds, f"{hours}:{minutes:02d}:{seconds:02d}"
        return total_seconds, f"{minutes}:{seconds:02d}"

    def _parse_video_details(self, item: Dict) -> Dict:
        """Parse detailed video data from API response."""
        snippet = item['snippet']
        content_details = item.get('contentDetails', {})

        # Get best thumbnail
        thumbnails = snippet.get('thumbnails', {})
        thumbnail_url = (
            thumbnails.get('maxres', {}).get('url') or
            thumbnails.get('high', {}).get('url') or
            thumbnails.get('medium', {}).get('url') or
            thumbnails.get('default', {}).get('url')
        )

        duration_seconds, duration_formatted = self.format_duration(
            content_details.get('duration', 'PT0S')
        )

        return {
            'video_id': item['id'],
            'title': snippet.get('title', ''),
            'description': snippet.get('description', ''),
            'channel_id': snippet.get('channelId'),
            'channel_title': snippet.get('channelTitle', ''),
            'published_at': snippet.get('publishedAt'),
            'duration_seconds': duration_seconds,
            'duration_formatted': duration_formatted,
            'thumbnail_url': thumbnail_url,
            'has_captions': content_details.get('caption') == 'true'
        }


# ========================================
# Helper Functions
# ========================================

def get_youtube_service() -> YouTubeService:
    """
    Get a YouTube service instance.

    Raises:
        YouTubeNotConfiguredError: If YouTube API key is not configured
    """
    return YouTubeService()

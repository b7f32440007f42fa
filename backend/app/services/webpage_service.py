"""
Webpage service for fetching a page and extracting its readable text.

Extraction is deliberately simple:
- text of headings, paragraphs, <article> and common content containers
- fallback to the whole <body> when none of those yield anything
- <title> as the page title ("Untitled Webpage" when missing)
"""

import asyncio
import re
from typing import Dict, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup
from fastapi import status

from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import get_logger

logger = get_logger(__name__)


# ========================================
# Custom Exceptions
# ========================================


class WebpageServiceError(AppError):
    """Base exception for webpage service errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(message, status_code=status_code)


class WebpageFetchError(WebpageServiceError):
    """Raised when the page cannot be downloaded (network error, HTTP error status, timeout)."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to fetch web page: {reason}")


class WebpageProcessingError(WebpageServiceError):
    """Raised when the page was downloaded but could not be processed."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to process web page URL: {reason}")


# ========================================
# Webpage Service
# ========================================


class WebpageService:
    """
    Service for scraping text out of arbitrary webpages.

    Example:
        >>> service = WebpageService()
        >>> page = await service.scrape("https://example.com/article")
        >>> page["title"], len(page["text"])
    """

    USER_AGENT = "StudyAid-Bot/1.0 (+https://github.com/studyaid)"
    DEFAULT_TITLE = "Untitled Webpage"
    CONTENT_SELECTOR = "h1, h2, h3, h4, h5, h6, p, article, .main-content, .entry-content"

    _WHITESPACE_RUN = re.compile(r"\s\s+")

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout or settings.WEBPAGE_REQUEST_TIMEOUT

    # ========================================
    # URL Validation
    # ========================================

    @staticmethod
    def validate_url(url: str) -> bool:
        """
        Check that url is an absolute http(s) URL with a host.

        Examples:
            >>> WebpageService.validate_url("https://example.com/page")
            True
            >>> WebpageService.validate_url("not a url")
            False
        """
        try:
            parsed = urlparse(url.strip())
        except (AttributeError, ValueError):
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    # ========================================
    # Fetching
    # ========================================

    def fetch(self, url: str) -> bytes:
        """
        Download the raw HTML of a page.

        Raises:
            WebpageFetchError: On connection errors, timeouts or 4xx/5xx responses
        """
        logger.info("fetching_webpage", url=url, timeout=self.timeout)
        try:
            response = requests.get(
                url,
                headers={"User-Agent": self.USER_AGENT},
                timeout=self.timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("webpage_fetch_failed", url=url, error=str(e))
            raise WebpageFetchError(str(e)) from e

        return response.content

    # ========================================
    # Extraction
    # ========================================

    def extract(self, html: bytes | str) -> Dict[str, str]:
        """
        Extract the title and readable text from an HTML document.

        Matching elements are visited in document order; each one's text is
        trimmed and followed by a blank line. A nested match (a <p> inside an
        <article>) contributes its text again.

        Returns:
            {"title": str, "text": str}
        """
        soup = BeautifulSoup(html, "lxml")

        parts = []
        for element in soup.select(self.CONTENT_SELECTOR):
            parts.append(element.get_text().strip() + "\n\n")
        text = "".join(parts)

        if not text.strip():
            body = soup.body
            body_text = body.get_text() if body else ""
            text = self._WHITESPACE_RUN.sub(" ", body_text.strip())

        title_tag = soup.title
        title = title_tag.get_text() if title_tag else ""

        return {
            "title": title or self.DEFAULT_TITLE,
            "text": text,
        }

    def scrape_sync(self, url: str) -> Dict[str, str]:
        """Fetch and extract in one blocking call."""
        html = self.fetch(url)
        try:
            page = self.extract(html)
        except Exception as e:
            logger.error("webpage_extraction_failed", url=url, error=str(e))
            raise WebpageProcessingError(str(e)) from e

        logger.info(
            "webpage_scraped",
            url=url,
            title=page["title"],
            chars=len(page["text"]),
        )
        return page

    async def scrape(self, url: str) -> Dict[str, str]:
        """Fetch and extract without blocking the event loop."""
        return await asyncio.to_thread(self.scrape_sync, url)


# ========================================
# Helper Functions
# ========================================

def get_webpage_service() -> WebpageService:
    """FastAPI dependency returning a WebpageService."""
    return WebpageService()

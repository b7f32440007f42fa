"""
Unit tests for transcript service.

These tests mock the YouTube Transcript API to avoid network calls.
"""

import pytest
import requests
from unittest.mock import MagicMock

from app.services.transcript_service import (
    TranscriptService,
    TranscriptError,
    NoTranscriptAvailable,
)
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
)


class MockSnippet:
    """Mock FetchedTranscriptSnippet."""

    def __init__(self, text, start=0.0, duration=1.0):
        self.text = text
        self.start = start
        self.duration = duration


class MockTranscript:
    """Mock transcript object."""

    def __init__(self, language_code, is_generated=False, snippets=None):
        self.language = f"Language-{language_code}"
        self.language_code = language_code
        self.is_generated = is_generated
        self._snippets = snippets or ['Hello', 'world', '!']

    def fetch(self):
        """Return mock transcript snippets."""
        return [MockSnippet(text, start=float(i)) for i, text in enumerate(self._snippets)]


class MockTranscriptList:
    """Mock transcript list."""

    def __init__(self, transcripts):
        self._transcripts = transcripts

    def __iter__(self):
        return iter(self._transcripts)

    def find_manually_created_transcript(self, language_codes):
        """Find manual transcript in specified languages."""
        for transcript in self._transcripts:
            if not transcript.is_generated and transcript.language_code in language_codes:
                return transcript
        raise NoTranscriptFound('video_id', language_codes, None)

    def find_generated_transcript(self, language_codes):
        """Find auto-generated transcript in specified languages."""
        for transcript in self._transcripts:
            if transcript.is_generated and transcript.language_code in language_codes:
                return transcript
        raise NoTranscriptFound('video_id', language_codes, None)


class TestTranscriptService:
    """Test suite for TranscriptService."""

    @pytest.fixture
    def transcript_service(self):
        """Create TranscriptService instance with a mocked API client."""
        service = TranscriptService(preferred_languages=['en', 'en-US'])
        service._api = MagicMock()
        return service

    # ========================================
    # Transcript Selection Tests
    # ========================================

    @pytest.mark.asyncio
    async def test_get_transcript_manual_english(self, transcript_service):
        """Manual transcript in a preferred language wins."""
        transcript_service._api.list.return_value = MockTranscriptList([
            MockTranscript('en', is_generated=True, snippets=['auto']),
            MockTranscript('en', is_generated=False, snippets=['manual', 'text']),
        ])

        text, metadata = await transcript_service.get_transcript('dQw4w9WgXcQ')

        assert text == 'manual text'
        assert metadata == {'language': 'en', 'type': 'manual', 'video_id': 'dQw4w9WgXcQ'}
        transcript_service._api.list.assert_called_once_with('dQw4w9WgXcQ')

    @pytest.mark.asyncio
    async def test_get_transcript_generated_fallback(self, transcript_service):
        """Auto-generated transcript is used when no manual one matches."""
        transcript_service._api.list.return_value = MockTranscriptList([
            MockTranscript('en-US', is_generated=True, snippets=['generated']),
        ])

        text, metadata = await transcript_service.get_transcript('dQw4w9WgXcQ')

        assert text == 'generated'
        assert metadata['type'] == 'auto'
        assert metadata['language'] == 'en-US'

    @pytest.mark.asyncio
    async def test_get_transcript_any_language_prefers_manual(self, transcript_service):
        """Outside the preferred languages, manual still beats generated."""
        transcript_service._api.list.return_value = MockTranscriptList([
            MockTranscript('de', is_generated=True, snippets=['automatisch']),
            MockTranscript('fr', is_generated=False, snippets=['manuel']),
        ])

        text, metadata = await transcript_service.get_transcript('dQw4w9WgXcQ')

        assert text == 'manuel'
        assert metadata['language'] == 'fr'

    @pytest.mark.asyncio
    async def test_get_transcript_empty_list(self, transcript_service):
        transcript_service._api.list.return_value = MockTranscriptList([])

        with pytest.raises(NoTranscriptAvailable):
            await transcript_service.get_transcript('dQw4w9WgXcQ')

    # ========================================
    # Error Mapping Tests
    # ========================================

    @pytest.mark.asyncio
    async def test_transcripts_disabled(self, transcript_service):
        transcript_service._api.list.side_effect = TranscriptsDisabled('dQw4w9WgXcQ')

        with pytest.raises(NoTranscriptAvailable, match="disabled"):
            await transcript_service.get_transcript('dQw4w9WgXcQ')

    @pytest.mark.asyncio
    async def test_video_unavailable(self, transcript_service):
        transcript_service._api.list.side_effect = VideoUnavailable('dQw4w9WgXcQ')

        with pytest.raises(NoTranscriptAvailable, match="unavailable"):
            await transcript_service.get_transcript('dQw4w9WgXcQ')

    @pytest.mark.asyncio
    async def test_other_retrieval_errors(self, transcript_service):
        transcript_service._api.list.side_effect = CouldNotRetrieveTranscript('dQw4w9WgXcQ')

        with pytest.raises(TranscriptError) as exc_info:
            await transcript_service.get_transcript('dQw4w9WgXcQ')

        assert not isinstance(exc_info.value, NoTranscriptAvailable)

    @pytest.mark.asyncio
    async def test_network_errors(self, transcript_service):
        transcript_service._api.list.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(TranscriptError, match="Connection refused"):
            await transcript_service.get_transcript('dQw4w9WgXcQ')

    @pytest.mark.asyncio
    async def test_fetch_transcript_returns_none_on_timeout(self, transcript_service):
        transcript_service._api.list.side_effect = requests.Timeout("read timed out")

        assert await transcript_service.fetch_transcript('dQw4w9WgXcQ') is None

    @pytest.mark.asyncio
    async def test_fetch_transcript_returns_none_on_error(self, transcript_service):
        """The best-effort variant swallows transcript errors."""
        transcript_service._api.list.side_effect = TranscriptsDisabled('dQw4w9WgXcQ')

        assert await transcript_service.fetch_transcript('dQw4w9WgXcQ') is None

    @pytest.mark.asyncio
    async def test_fetch_transcript_success(self, transcript_service):
        transcript_service._api.list.return_value = MockTranscriptList([
            MockTranscript('en'),
        ])

        result = await transcript_service.fetch_transcript('dQw4w9WgXcQ')

        assert result is not None
        text, _ = result
        assert text == 'Hello world !'

    # ========================================
    # Cleaning Tests
    # ========================================

    def test_clean_transcript_removes_tags_and_timestamps(self):
        text = "[Music] Welcome back 01:23 to the   lecture [Applause]"

        assert TranscriptService.clean_transcript(text) == "Welcome back to the lecture"

    def test_clean_transcript_collapses_punctuation(self):
        assert TranscriptService.clean_transcript("Wait... what?!! Really??") == "Wait. what?! Really?"

    def test_clean_transcript_unescapes_entities(self):
        assert TranscriptService.clean_transcript("salt &amp; pepper &lt;3") == "salt & pepper <3"

    def test_clean_transcript_empty(self):
        assert TranscriptService.clean_transcript("") == ""

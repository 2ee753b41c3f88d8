from __future__ import annotations

from plain_lyrics.sources.service import LookupWorker, LyricsResponse, LyricsService
from plain_lyrics.sources.types import TrackKey

__all__ = ["LookupWorker", "LyricsResponse", "LyricsService", "TrackKey"]

"""Data models for lyric-sync.

This module provides Pydantic models for timed words, lines and parse results.
"""

from __future__ import annotations

from lyric_sync.models.lyrics import LyricsFormat, LyricsLine, LyricsResult, LyricsWord

__all__ = [
    "LyricsFormat",
    "LyricsLine",
    "LyricsResult",
    "LyricsWord",
]

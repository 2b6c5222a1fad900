"""Timed-lyric parsing and track alignment.

Provides parsers for the KRC, QRC, YRC and LRC grammars and the alignment
engine that maps secondary tracks onto the primary timeline.
"""

from lyric_sync.lyrics.align import align_lines
from lyric_sync.lyrics.parser import parse_lyrics, resolve_format

__all__ = [
    "align_lines",
    "parse_lyrics",
    "resolve_format",
]

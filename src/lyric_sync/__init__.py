"""Lyric Sync - Timed-lyrics parsing and multi-track synchronization.

Converts KRC, QRC, YRC and LRC lyric texts into one word-timed model and
aligns translation and romanization tracks onto the primary timeline.
"""

__version__ = "0.1.0"

"""Alignment of secondary lyric tracks onto a primary timeline.

Translation and romanization tracks usually carry only line-level time
stamps, recorded independently of the primary track, and may have a
different number of lines. ``align_lines`` assigns each secondary line to
the primary line whose time window it falls into and returns a track that
mirrors the primary one line for line.

Matching uses time stamps only, never text.
"""

from __future__ import annotations

from typing import Sequence

from lyric_sync.config import DEFAULT_SETTINGS, ParserSettings
from lyric_sync.logging import get_logger
from lyric_sync.models.lyrics import LyricsLine

logger = get_logger(__name__)


def align_lines(
    primary: Sequence[LyricsLine],
    secondary: Sequence[LyricsLine] | None,
    settings: ParserSettings | None = None,
    track: str = "secondary",
) -> list[LyricsLine] | None:
    """Map a secondary track onto the primary track's timeline.

    Window ``i`` spans ``[primary[i].start - tolerance, primary[i + 1].start)``
    (unbounded for the last line). A single forward pass walks both
    sequences:

    - secondary lines starting before the current window are stale and
      are dropped for good;
    - a secondary line starting at or after the window end is left for a
      later window and line ``i`` gets an empty placeholder;
    - otherwise that one secondary line fills window ``i`` and is consumed.
      Further lines in the same window are dropped by the next iteration's
      stale check, or fill the next window if they fall inside it.

    Args:
        primary: Reference lines, in timeline order
        secondary: Lines to align; sorted by start before matching
        settings: Parser settings (for the early-arrival tolerance)
        track: Name of the secondary track, bound to log records

    Returns:
        One line per primary line carrying the primary start/end, or None
        when there is no secondary track. Unmatched or textless entries are
        placeholder lines with no words.
    """
    if not secondary:
        return None

    settings = settings or DEFAULT_SETTINGS
    tolerance = settings.early_tolerance_ms

    candidates = sorted(secondary, key=lambda line: line.start)
    cursor = 0
    aligned: list[LyricsLine] = []

    for i, line in enumerate(primary):
        window_start = line.start
        window_end = primary[i + 1].start if i + 1 < len(primary) else None

        while cursor < len(candidates) and candidates[cursor].start < window_start - tolerance:
            cursor += 1

        matched_text = ""
        if cursor < len(candidates):
            candidate = candidates[cursor]
            if window_end is None or candidate.start < window_end:
                matched_text = candidate.text
                cursor += 1

        if matched_text:
            aligned.append(LyricsLine.single(line.start, line.end, matched_text))
        else:
            aligned.append(LyricsLine.placeholder(line.start, line.end))

    logger.with_context(track=track).debug(
        "Aligned secondary track",
        extra={
            "primary_lines": len(primary),
            "secondary_lines": len(candidates),
            "cursor": cursor,
        },
    )
    return aligned

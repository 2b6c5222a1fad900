"""Export of parse results.

Supports:
- Flattening a LyricsResult into enhanced LRC text (word stamps on the
  primary line, secondary tracks on following lines)
- JSON serialization of the full model
"""

from __future__ import annotations

from lyric_sync.models.lyrics import LyricsLine, LyricsResult

# Secondary lines this close to a primary line are shown under it
MATCH_TOLERANCE_MS = 500


def format_timestamp(millis: int) -> str:
    """Format milliseconds as an LRC ``mm:ss.mmm`` stamp.

    Args:
        millis: Time in milliseconds

    Returns:
        Timestamp string, e.g. "01:02.345"
    """
    total_seconds = millis // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    return f"{minutes:02d}:{seconds:02d}.{millis % 1000:03d}"


def _find_secondary(line: LyricsLine, by_start: dict[int, LyricsLine]) -> LyricsLine | None:
    matched = by_start.get(line.start)
    if matched is not None:
        return matched
    for start, candidate in by_start.items():
        if abs(start - line.start) < MATCH_TOLERANCE_MS:
            return candidate
    return None


def _secondary_text(line: LyricsLine | None) -> str:
    if line is None:
        return ""
    return " ".join(word.text for word in line.words).strip()


def _pair_secondary(
    original: list[LyricsLine],
    track: list[LyricsLine] | None,
) -> list[LyricsLine | None]:
    if track is None:
        return [None] * len(original)
    # Aligned tracks mirror the primary track line for line
    if len(track) == len(original):
        return list(track)

    # Last entry wins for a shared start
    by_start = {line.start: line for line in track}
    return [_find_secondary(line, by_start) for line in original]


def to_lrc(result: LyricsResult, include_romanization: bool = False) -> str:
    """Flatten a result into LRC text.

    Each primary line becomes one row of ``[mm:ss.mmm]word`` pairs. The
    matching romanization row (when enabled) and translation row follow it.
    A secondary track with one entry per primary line is paired by position;
    any other track is matched by start time. Secondary lines without text
    are left out.

    Args:
        result: Parse result to export
        include_romanization: Whether to emit romanization rows

    Returns:
        LRC text without leading or trailing whitespace
    """
    translated = _pair_secondary(result.original, result.translated)
    romanized = _pair_secondary(
        result.original,
        result.romanization if include_romanization else None,
    )

    rows: list[str] = []
    for line, roma, trans in zip(result.original, romanized, translated):
        rows.append("".join(f"[{format_timestamp(word.start)}]{word.text}" for word in line.words))

        for match in (roma, trans):
            text = _secondary_text(match)
            if text:
                rows.append(f"[{format_timestamp(match.start)}]{text}")

    return "\n".join(rows).strip()


def to_json(result: LyricsResult, indent: int | None = 2) -> str:
    """Serialize a result to JSON.

    Args:
        result: Parse result to serialize
        indent: JSON indentation, None for compact output

    Returns:
        JSON text
    """
    return result.model_dump_json(indent=indent)

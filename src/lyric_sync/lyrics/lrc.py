"""Line-timed LRC parsing.

LRC carries one ``[mm:ss.xx]`` stamp per line and no word timing. It is the
shape in which translation and romanization tracks usually arrive, and the
fallback primary track for YRC sources. Each entry becomes one line holding
a single word; end times are synthesized from the next entry's start.
"""

from __future__ import annotations

from lyric_sync.config import DEFAULT_SETTINGS, ParserSettings
from lyric_sync.logging import get_logger
from lyric_sync.lyrics.tokens import iter_lines, match_tag, split_lrc_timestamps
from lyric_sync.models.lyrics import LyricsLine, LyricsResult

logger = get_logger(__name__)


def parse_lrc_lines(
    text: str | None,
    settings: ParserSettings | None = None,
    tags: dict[str, str] | None = None,
    drop_empty: bool = False,
) -> list[LyricsLine]:
    """Parse LRC text into single-word lines.

    Args:
        text: LRC text; None or blank yields an empty list
        settings: Parser settings (guard and last-line duration)
        tags: If given, ``[key:value]`` lines are collected into it
        drop_empty: Leave out entries without text. Their stamps still end
            the preceding line.

    Returns:
        Lines sorted by start. A line with several stamps is repeated once
        per stamp; identical stamps each keep their own entry.
    """
    if not text:
        return []
    settings = settings or DEFAULT_SETTINGS

    entries: list[tuple[int, str]] = []
    skipped = 0
    for line in iter_lines(text):
        timestamps, content = split_lrc_timestamps(line)
        if timestamps:
            entries.extend((start, content) for start in timestamps)
            continue

        tag = match_tag(line)
        if tag is not None:
            if tags is not None:
                tags[tag[0]] = tag[1]
            continue

        skipped += 1

    # Stable: equal stamps keep their textual order
    entries.sort(key=lambda entry: entry[0])

    lines: list[LyricsLine] = []
    for i, (start, content) in enumerate(entries):
        if drop_empty and not content:
            skipped += 1
            continue
        if i + 1 < len(entries):
            end = max(start, entries[i + 1][0] - settings.end_guard_ms)
        else:
            end = start + settings.last_line_duration_ms
        lines.append(LyricsLine.single(start, end, content))

    logger.debug(
        "Parsed LRC text",
        extra={"lines": len(lines), "skipped": skipped},
    )
    return lines


def parse(text: str | None, settings: ParserSettings | None = None) -> LyricsResult:
    """Parse a standalone LRC file as a primary track."""
    tags: dict[str, str] = {}
    original = parse_lrc_lines(text, settings, tags)
    return LyricsResult(tags=tags, original=original)

"""YRC lyrics parser.

YRC lines look like::

    [1000,2400](1000,300,0)Hel(1300,500,0)lo (1800,600,0)world

Word times are absolute and lines are not guaranteed to be in time order.
Sources that have no YRC track provide a legacy LRC track instead.
Translation and romanization arrive as LRC texts aligned onto the primary
timeline. Stamped lines without text are left out of all three LRC tracks;
they still end the line before them.
"""

from __future__ import annotations

from lyric_sync.config import ParserSettings
from lyric_sync.logging import get_logger
from lyric_sync.lyrics.align import align_lines
from lyric_sync.lyrics.lrc import parse_lrc_lines
from lyric_sync.lyrics.tokens import iter_lines, iter_yrc_words, match_tag, match_timed_line
from lyric_sync.models.lyrics import LyricsLine, LyricsResult, LyricsWord

logger = get_logger(__name__)


def _has_text(text: str | None) -> bool:
    return bool(text and text.strip())


def parse_yrc_lines(text: str, tags: dict[str, str]) -> list[LyricsLine]:
    """Parse a word-timed YRC track into lines sorted by start.

    Lines without any content are dropped. Non-lyric lines, such as the
    JSON credit lines some sources interleave, are skipped.
    """
    lines: list[LyricsLine] = []

    for line in iter_lines(text):
        tag = match_tag(line)
        if tag is not None:
            tags[tag[0]] = tag[1]
            continue

        timed = match_timed_line(line)
        if timed is None:
            continue

        words = [
            LyricsWord(start=token.start, end=token.end, text=token.text)
            for token in iter_yrc_words(timed.content)
        ]
        if not words:
            if not timed.content:
                continue
            words.append(LyricsWord(start=timed.start, end=timed.end, text=timed.content))

        words.sort(key=lambda word: word.start)
        lines.append(LyricsLine(start=timed.start, end=timed.end, words=words))

    lines.sort(key=lambda line: line.start)
    return lines


def parse(
    original: str | None,
    legacy: str | None = None,
    translated: str | None = None,
    romanization: str | None = None,
    settings: ParserSettings | None = None,
) -> LyricsResult | None:
    """Parse YRC text (or its legacy LRC fallback) and secondary tracks.

    Args:
        original: YRC text
        legacy: LRC text used when there is no YRC text
        translated: LRC translation text
        romanization: LRC romanization text
        settings: Parser settings

    Returns:
        LyricsResult, or None when neither primary source has any text
    """
    if not _has_text(original) and not _has_text(legacy):
        return None

    tags: dict[str, str] = {}
    if _has_text(original):
        original_lines = parse_yrc_lines(original, tags)
        source = "yrc"
    else:
        original_lines = parse_lrc_lines(legacy, settings, tags, drop_empty=True)
        source = "lrc"

    translated_lines = parse_lrc_lines(translated, settings, drop_empty=True)
    romanization_lines = parse_lrc_lines(romanization, settings, drop_empty=True)

    result = LyricsResult(
        tags=tags,
        original=original_lines,
        translated=align_lines(original_lines, translated_lines, settings, track="translated"),
        romanization=align_lines(
            original_lines, romanization_lines, settings, track="romanization"
        ),
    )
    logger.debug(
        "Parsed YRC lyrics",
        extra={
            "primary_source": source,
            "lines": len(original_lines),
            "translated": result.has_translation,
            "romanization": result.has_romanization,
        },
    )
    return result

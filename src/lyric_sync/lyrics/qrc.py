"""QRC lyrics parser.

QRC lines look like::

    [1000,2400]Hel(1000,300)lo (1300,500)world(1800,600)

Word times are absolute. The text may come wrapped in an XML envelope
(``<Lyric_1 LyricType="1" LyricContent="..."/>``). Translation arrives as a
separate LRC text and romanization as a separate QRC text; both are aligned
onto the primary timeline.
"""

from __future__ import annotations

from lyric_sync.config import ParserSettings
from lyric_sync.logging import get_logger
from lyric_sync.lyrics.align import align_lines
from lyric_sync.lyrics.lrc import parse_lrc_lines
from lyric_sync.lyrics.tokens import (
    iter_lines,
    iter_qrc_words,
    match_tag,
    match_timed_line,
    strip_qrc_timings,
    unwrap_qrc_xml,
)
from lyric_sync.models.lyrics import LyricsLine, LyricsResult, LyricsWord

logger = get_logger(__name__)


def parse_qrc_lines(text: str, tags: dict[str, str]) -> list[LyricsLine]:
    """Parse a word-timed QRC track, collecting tag lines into ``tags``."""
    lines: list[LyricsLine] = []

    for line in iter_lines(unwrap_qrc_xml(text)):
        tag = match_tag(line)
        if tag is not None:
            tags[tag[0]] = tag[1]
            continue

        timed = match_timed_line(line)
        if timed is None:
            continue

        words = [
            LyricsWord(start=token.start, end=token.end, text=token.text)
            for token in iter_qrc_words(timed.content)
        ]
        if not words and timed.content:
            words.append(LyricsWord(start=timed.start, end=timed.end, text=timed.content))

        lines.append(LyricsLine(start=timed.start, end=timed.end, words=words))

    return lines


def parse_qrc_plain_lines(text: str | None) -> list[LyricsLine]:
    """Parse a QRC track line by line, dropping word timing.

    Used for romanization, whose syllable timing is not kept: each timed
    line becomes one single-word line of its plain text.
    """
    if not text or not text.strip():
        return []

    lines: list[LyricsLine] = []
    for line in iter_lines(unwrap_qrc_xml(text)):
        if match_tag(line) is not None:
            continue

        timed = match_timed_line(line)
        if timed is None:
            continue

        plain = strip_qrc_timings(timed.content)
        if plain:
            lines.append(LyricsLine.single(timed.start, timed.end, plain))

    return lines


def parse(
    original: str | None,
    translated: str | None = None,
    romanization: str | None = None,
    settings: ParserSettings | None = None,
) -> LyricsResult:
    """Parse decrypted QRC text and its secondary tracks.

    Args:
        original: QRC text, optionally inside the XML envelope
        translated: LRC translation text
        romanization: QRC romanization text
        settings: Parser settings

    Returns:
        LyricsResult with secondary tracks aligned to the primary lines
    """
    tags: dict[str, str] = {}
    original_lines = parse_qrc_lines(original or "", tags)

    translated_lines = parse_lrc_lines(translated, settings)
    romanization_lines = parse_qrc_plain_lines(romanization)

    result = LyricsResult(
        tags=tags,
        original=original_lines,
        translated=align_lines(original_lines, translated_lines, settings, track="translated"),
        romanization=align_lines(
            original_lines, romanization_lines, settings, track="romanization"
        ),
    )
    logger.debug(
        "Parsed QRC lyrics",
        extra={
            "lines": len(original_lines),
            "tags": len(tags),
            "translated": result.has_translation,
            "romanization": result.has_romanization,
        },
    )
    return result

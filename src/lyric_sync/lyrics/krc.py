"""KRC lyrics parser.

KRC lines look like::

    [ar:Artist]
    [1000,2400]<0,300,0>Hel<300,500,0>lo <800,600,0>world
    [language:eyJjb250ZW50IjpbXX0=]

Word offsets are relative to the line start. Translation and romanization
tracks travel inside the ``language`` tag and are positionally aligned, so
the timestamp alignment engine is not involved.
"""

from __future__ import annotations

from lyric_sync.config import DEFAULT_SETTINGS, ParserSettings
from lyric_sync.errors import PayloadDecodeError
from lyric_sync.logging import get_logger
from lyric_sync.lyrics.payload import build_language_tracks, decode_language_payload
from lyric_sync.lyrics.tokens import iter_krc_words, iter_lines, match_tag, match_timed_line
from lyric_sync.models.lyrics import LyricsLine, LyricsResult, LyricsWord

logger = get_logger(__name__)


def parse_krc_lines(text: str, tags: dict[str, str]) -> list[LyricsLine]:
    """Parse the primary track, collecting tag lines into ``tags``."""
    lines: list[LyricsLine] = []

    for line in iter_lines(text):
        if not line.startswith("["):
            continue

        tag = match_tag(line)
        if tag is not None:
            # Last occurrence wins
            tags[tag[0]] = tag[1]
            continue

        timed = match_timed_line(line)
        if timed is None:
            continue

        words = [
            LyricsWord(
                start=timed.start + token.start,
                end=timed.start + token.end,
                text=token.text,
            )
            for token in iter_krc_words(timed.content)
        ]

        # Plain LRC-style content without word timing
        if not words and timed.content:
            words.append(LyricsWord(start=timed.start, end=timed.end, text=timed.content))

        lines.append(LyricsLine(start=timed.start, end=timed.end, words=words))

    return lines


def parse(text: str | None, settings: ParserSettings | None = None) -> LyricsResult:
    """Parse decrypted KRC text.

    Args:
        text: KRC text
        settings: Parser settings (for the payload tag name)

    Returns:
        LyricsResult; translated/romanization come from the embedded
        payload and are None when it is absent or cannot be decoded
    """
    settings = settings or DEFAULT_SETTINGS
    tags: dict[str, str] = {}
    original = parse_krc_lines(text or "", tags)

    translated = None
    romanization = None
    payload_value = tags.get(settings.language_tag, "").strip()
    if payload_value:
        try:
            payload = decode_language_payload(payload_value)
        except PayloadDecodeError as e:
            logger.warning(
                f"Ignoring undecodable language payload: {e.message}",
                extra={"error_type": type(e.__cause__).__name__},
            )
        else:
            translated, romanization = build_language_tracks(payload, original)

    logger.debug(
        "Parsed KRC lyrics",
        extra={
            "lines": len(original),
            "tags": len(tags),
            "translated": translated is not None,
            "romanization": romanization is not None,
        },
    )
    return LyricsResult(
        tags=tags,
        original=original,
        translated=translated,
        romanization=romanization,
    )

"""Format dispatch for the lyric parsers.

The caller knows which source produced the text and passes a format
selector; ``parse_lyrics`` routes the texts to the matching parser.
"""

from __future__ import annotations

from lyric_sync.config import ParserSettings
from lyric_sync.errors import UnsupportedFormatError
from lyric_sync.lyrics import krc, lrc, qrc, yrc
from lyric_sync.models.lyrics import LyricsFormat, LyricsResult


def resolve_format(fmt: LyricsFormat | str) -> LyricsFormat:
    """Normalize a format selector.

    Args:
        fmt: LyricsFormat or its value ("krc", "qrc", "yrc", "lrc"),
            case-insensitive

    Returns:
        The matching LyricsFormat

    Raises:
        UnsupportedFormatError: If the selector names no known format
    """
    if isinstance(fmt, LyricsFormat):
        return fmt
    try:
        return LyricsFormat(str(fmt).strip().lower())
    except ValueError as e:
        raise UnsupportedFormatError(fmt) from e


def parse_lyrics(
    fmt: LyricsFormat | str,
    original: str | None,
    translated: str | None = None,
    romanization: str | None = None,
    legacy: str | None = None,
    settings: ParserSettings | None = None,
) -> LyricsResult | None:
    """Parse lyric texts of the given format.

    Args:
        fmt: Format selector
        original: Primary lyric text
        translated: Translation text (QRC/YRC; KRC embeds its own)
        romanization: Romanization text (QRC/YRC; KRC embeds its own)
        legacy: LRC fallback primary text (YRC only)
        settings: Parser settings

    Returns:
        LyricsResult, or None for YRC when neither primary text is present

    Raises:
        UnsupportedFormatError: If the format selector is unknown
    """
    fmt = resolve_format(fmt)

    if fmt is LyricsFormat.KRC:
        return krc.parse(original, settings)
    if fmt is LyricsFormat.QRC:
        return qrc.parse(original, translated, romanization, settings)
    if fmt is LyricsFormat.YRC:
        return yrc.parse(original, legacy, translated, romanization, settings)
    return lrc.parse(original, settings)

"""Embedded multi-language payload of KRC lyrics.

KRC files may carry translation and romanization tracks inside a
``[language:...]`` tag: base64-encoded JSON of the form

    {"content": [{"type": 1, "lyricContent": [["line one"], ["line two"]]}]}

Track type 0 is romanization (one list of syllables per line), type 1 is
translation (the first string of each list is the line). Position ``i`` of
``lyricContent`` belongs to the ``i``-th non-blank line of the primary
track.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from lyric_sync.errors import PayloadDecodeError
from lyric_sync.models.lyrics import LyricsLine

ROMANIZATION_TRACK = 0
TRANSLATION_TRACK = 1


class LanguageTrack(BaseModel):
    """One alternate track of the payload."""

    model_config = ConfigDict(populate_by_name=True)

    type: int
    lyric_content: list[list[str]] = Field(default_factory=list, alias="lyricContent")


class LanguagePayload(BaseModel):
    """Decoded ``language`` tag."""

    content: list[LanguageTrack] = Field(default_factory=list)

    def track(self, track_type: int) -> LanguageTrack | None:
        """Get the last track of the given type, if any."""
        found = None
        for item in self.content:
            if item.type == track_type:
                found = item
        return found


def decode_language_payload(value: str) -> LanguagePayload:
    """Decode the value of a KRC ``language`` tag.

    Args:
        value: Base64 text; embedded whitespace and missing padding are tolerated

    Returns:
        LanguagePayload with the alternate tracks

    Raises:
        PayloadDecodeError: If the value is not base64, not UTF-8 JSON, or
            does not have the expected structure
    """
    compact = "".join(value.split())
    if not compact:
        raise PayloadDecodeError("Language payload is empty")
    compact += "=" * (-len(compact) % 4)

    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadDecodeError(
            f"Language payload is not valid base64: {e}",
            context={"length": len(value)},
        ) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadDecodeError(f"Language payload is not UTF-8 JSON: {e}") from e

    try:
        return LanguagePayload.model_validate(data)
    except PydanticValidationError as e:
        raise PayloadDecodeError(
            f"Language payload has unexpected structure: {e.error_count()} error(s)",
        ) from e


def _distribute(
    original: list[LyricsLine],
    rows: list[list[str]],
    pick: Callable[[list[str]], str],
) -> list[LyricsLine]:
    # Blank primary lines take no payload row; every primary line still gets
    # exactly one output line
    lines: list[LyricsLine] = []
    row_index = 0
    for line in original:
        if line.is_blank:
            lines.append(LyricsLine.placeholder(line.start, line.end))
            continue

        text = pick(rows[row_index]) if row_index < len(rows) else ""
        row_index += 1
        if text:
            lines.append(LyricsLine.single(line.start, line.end, text))
        else:
            lines.append(LyricsLine.placeholder(line.start, line.end))
    return lines


def _first_string(row: list[str]) -> str:
    # Only the first alternate of a row is used
    return row[0] if row else ""


def _joined_syllables(row: list[str]) -> str:
    return " ".join(part.strip() for part in row if part.strip())


def build_language_tracks(
    payload: LanguagePayload,
    original: list[LyricsLine],
) -> tuple[list[LyricsLine] | None, list[LyricsLine] | None]:
    """Turn the payload into tracks aligned with the primary lines.

    Args:
        payload: Decoded payload
        original: Parsed primary lines

    Returns:
        (translated, romanization); each is None when the payload has no
        track of that type
    """
    translated = None
    romanization = None

    translation_track = payload.track(TRANSLATION_TRACK)
    if translation_track is not None:
        translated = _distribute(original, translation_track.lyric_content, _first_string)

    romanization_track = payload.track(ROMANIZATION_TRACK)
    if romanization_track is not None:
        romanization = _distribute(original, romanization_track.lyric_content, _joined_syllables)

    return translated, romanization

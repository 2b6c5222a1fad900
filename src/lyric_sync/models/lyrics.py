"""Canonical lyric models.

Every format parser produces these values: words with absolute millisecond
timing, lines grouping words, and a result holding the primary track plus
optional translation and romanization tracks aligned to it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LyricsFormat(str, Enum):
    """Source grammars understood by the engine."""

    KRC = "krc"  # Inline <offset,duration,0> word timing, embedded language payload
    QRC = "qrc"  # text(start,duration) word timing, optional XML envelope
    YRC = "yrc"  # (start,duration,0)text word timing
    LRC = "lrc"  # [mm:ss.xx] line timing only


class LyricsWord(BaseModel):
    """The smallest timed unit: a syllable or short token."""

    model_config = ConfigDict(frozen=True)

    start: int  # Absolute start in milliseconds
    end: int  # Absolute end in milliseconds
    text: str

    @model_validator(mode="after")
    def _check_bounds(self) -> "LyricsWord":
        if self.end < self.start:
            raise ValueError(f"word end {self.end} is before start {self.start}")
        return self

    @property
    def duration(self) -> int:
        """Get the duration of this word in milliseconds."""
        return self.end - self.start


class LyricsLine(BaseModel):
    """A timed lyric line.

    A line may have no words (a placeholder or gap) or a single word
    spanning it when the source has no sub-line timing. Line bounds may
    exceed the bounds of its words.
    """

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    words: list[LyricsWord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_bounds(self) -> "LyricsLine":
        if self.end < self.start:
            raise ValueError(f"line end {self.end} is before start {self.start}")
        return self

    @classmethod
    def placeholder(cls, start: int, end: int) -> "LyricsLine":
        """Build the empty line used where a secondary track has no text."""
        return cls(start=start, end=end, words=[])

    @classmethod
    def single(cls, start: int, end: int, text: str) -> "LyricsLine":
        """Build a line holding one word that spans the whole line."""
        return cls(start=start, end=end, words=[LyricsWord(start=start, end=end, text=text)])

    @property
    def text(self) -> str:
        """Get the words of this line concatenated without separator."""
        return "".join(word.text for word in self.words)

    @property
    def is_blank(self) -> bool:
        """True when no word carries non-whitespace text."""
        return not any(word.text.strip() for word in self.words)


class LyricsResult(BaseModel):
    """Complete output of one parse call.

    ``translated`` and ``romanization``, when present, have exactly one
    entry per line of ``original`` with the same start and end.
    """

    model_config = ConfigDict(frozen=True)

    tags: dict[str, str] = Field(default_factory=dict)
    original: list[LyricsLine] = Field(default_factory=list)
    translated: list[LyricsLine] | None = None
    romanization: list[LyricsLine] | None = None

    @property
    def has_translation(self) -> bool:
        return self.translated is not None

    @property
    def has_romanization(self) -> bool:
        return self.romanization is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump()

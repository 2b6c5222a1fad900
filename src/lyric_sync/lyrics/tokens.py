"""Token extraction for the timed-lyric grammars.

Each grammar is scanned with a small set of compiled patterns. The helpers
here only recognise shapes and emit tokens in left-to-right order; turning
tokens into absolute-time models is left to the per-format parsers.

Shapes:
- Tag line:        [ar:Artist]
- Timed line:      [1000,2500]content           (start ms, duration ms)
- KRC word:        <0,300,0>text                 (offset from line start)
- QRC word:        text(1000,300)                (absolute start)
- YRC word:        (1000,300,0)text              (absolute start)
- LRC time stamp:  [01:02.34] / [01:02] / [01:02:340]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

TAG_PATTERN = re.compile(r"^\[(\w+):([^\]]*)\]$")
TIMED_LINE_PATTERN = re.compile(r"^\[(\d+),(\d+)\](.*)$")

KRC_WORD_PATTERN = re.compile(r"<(\d+),(\d+),(\d+)>([^<]*)")
# Everything up to the next "(start,duration)" pair is that word's text
QRC_WORD_PATTERN = re.compile(r"((?:(?!\(\d+,\d+\)).)*)\((\d+),(\d+)\)")
QRC_TIMING_PATTERN = re.compile(r"\(\d+,\d+\)")
YRC_WORD_PATTERN = re.compile(r"\((\d+),(\d+),\d+\)([^()]*)")

LRC_TIMESTAMP_PATTERN = re.compile(r"\[(\d+):(\d+)(?:[.:](\d+))?\]")

QRC_XML_PATTERN = re.compile(
    r'<Lyric_1 LyricType="1" LyricContent="(.*?)"/>',
    re.DOTALL,
)

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class TimedLine:
    """A ``[start,duration]content`` line."""

    start: int
    duration: int
    content: str

    @property
    def end(self) -> int:
        return self.start + self.duration


@dataclass(frozen=True)
class WordToken:
    """A word-timing token.

    ``start`` is relative to the line for KRC and absolute for QRC/YRC.
    """

    start: int
    duration: int
    text: str

    @property
    def end(self) -> int:
        return self.start + self.duration


def match_tag(line: str) -> tuple[str, str] | None:
    """Match a ``[key:value]`` metadata line.

    Args:
        line: A single stripped line

    Returns:
        (key, value) tuple, or None if the line is not a tag
    """
    match = TAG_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1), match.group(2)


def match_timed_line(line: str) -> TimedLine | None:
    """Match a ``[start,duration]content`` line."""
    match = TIMED_LINE_PATTERN.match(line)
    if match is None:
        return None
    return TimedLine(
        start=int(match.group(1)),
        duration=int(match.group(2)),
        content=match.group(3),
    )


def iter_krc_words(content: str) -> Iterator[WordToken]:
    """Yield ``<offset,duration,reserved>text`` tokens.

    Text runs up to the next ``<``, so spaces and punctuation stay attached
    to the preceding word.
    """
    for match in KRC_WORD_PATTERN.finditer(content):
        yield WordToken(
            start=int(match.group(1)),
            duration=int(match.group(2)),
            text=match.group(4),
        )


def iter_qrc_words(content: str) -> Iterator[WordToken]:
    """Yield ``text(start,duration)`` tokens.

    Trailing text after the last timing pair is not a word.
    """
    for match in QRC_WORD_PATTERN.finditer(content):
        yield WordToken(
            start=int(match.group(2)),
            duration=int(match.group(3)),
            text=match.group(1),
        )


def iter_yrc_words(content: str) -> Iterator[WordToken]:
    """Yield ``(start,duration,reserved)text`` tokens."""
    for match in YRC_WORD_PATTERN.finditer(content):
        yield WordToken(
            start=int(match.group(1)),
            duration=int(match.group(2)),
            text=match.group(3),
        )


def strip_qrc_timings(content: str) -> str:
    """Remove every ``(start,duration)`` pair and collapse whitespace runs."""
    plain = QRC_TIMING_PATTERN.sub("", content).strip()
    return _WHITESPACE_RUN.sub(" ", plain)


def unwrap_qrc_xml(text: str) -> str:
    """Return the ``LyricContent`` attribute of a QRC XML envelope.

    Text without the envelope is returned unchanged.
    """
    match = QRC_XML_PATTERN.search(text)
    if match is None:
        return text
    return match.group(1)


def _fraction_to_ms(fraction: str | None) -> int:
    # ".5" is half a second; digits past milliseconds are dropped
    if not fraction:
        return 0
    return int(fraction[:3].ljust(3, "0"))


def split_lrc_timestamps(line: str) -> tuple[list[int], str]:
    """Split the leading ``[mm:ss.xx]`` stamps off an LRC line.

    Args:
        line: A single stripped line

    Returns:
        (timestamps in ms, remaining content). The list is empty when the
        line does not start with a time stamp.
    """
    timestamps: list[int] = []
    pos = 0
    while True:
        match = LRC_TIMESTAMP_PATTERN.match(line, pos)
        if match is None:
            break
        minutes, seconds, fraction = match.groups()
        timestamps.append(int(minutes) * 60_000 + int(seconds) * 1000 + _fraction_to_ms(fraction))
        pos = match.end()

    return timestamps, line[pos:].strip()


def iter_lines(text: str) -> Iterator[str]:
    """Yield stripped, non-empty lines of a text blob."""
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line:
            yield line

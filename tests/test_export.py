"""Tests for LRC and JSON export."""

import json

import pytest

from lyric_sync.export import format_timestamp, to_json, to_lrc
from lyric_sync.lyrics import qrc
from lyric_sync.models import LyricsLine, LyricsResult


PRIMARY = "[0,1000]Hel(0,500)lo(500,500)\n[1500,1000]World(1500,1000)"


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    @pytest.mark.parametrize(
        "millis, expected",
        [
            (0, "00:00.000"),
            (500, "00:00.500"),
            (62345, "01:02.345"),
            (600_000, "10:00.000"),
        ],
    )
    def test_format(self, millis, expected):
        assert format_timestamp(millis) == expected


class TestToLrc:
    """Tests for to_lrc."""

    def test_primary_words_stamped(self):
        result = qrc.parse(PRIMARY)

        assert to_lrc(result) == "[00:00.000]Hel[00:00.500]lo\n[00:01.500]World"

    def test_translation_follows_line(self):
        result = qrc.parse(PRIMARY, translated="[00:00.00]Hi")

        assert to_lrc(result) == (
            "[00:00.000]Hel[00:00.500]lo\n"
            "[00:00.000]Hi\n"
            "[00:01.500]World"
        )

    def test_romanization_before_translation(self):
        result = qrc.parse(
            PRIMARY,
            translated="[00:00.00]Hi\n[00:01.50]Earth",
            romanization="[0,1000]he(0,500)lo(500,500)",
        )

        assert to_lrc(result, include_romanization=True) == (
            "[00:00.000]Hel[00:00.500]lo\n"
            "[00:00.000]helo\n"
            "[00:00.000]Hi\n"
            "[00:01.500]World\n"
            "[00:01.500]Earth"
        )

    def test_romanization_off_by_default(self):
        result = qrc.parse(PRIMARY, romanization="[0,1000]he(0,500)lo(500,500)")
        assert "helo" not in to_lrc(result)

    def test_duplicate_primary_starts_paired_by_position(self):
        result = qrc.parse(
            "[0,1000]a(0,1000)\n[0,1000]b(0,1000)",
            translated="[00:00.00]X\n[00:00.00]Y",
        )

        assert [line.text for line in result.translated] == ["", "X"]
        assert to_lrc(result) == "[00:00.000]a\n[00:00.000]b\n[00:00.000]X"

    def test_unaligned_track_matched_by_nearby_start(self):
        result = LyricsResult(
            original=[LyricsLine.single(1000, 2000, "a"), LyricsLine.single(5000, 6000, "c")],
            translated=[LyricsLine.single(1300, 2000, "b")],
        )

        assert to_lrc(result) == "[00:01.000]a\n[00:01.300]b\n[00:05.000]c"

    def test_unaligned_track_distant_start_not_matched(self):
        result = LyricsResult(
            original=[LyricsLine.single(1000, 2000, "a"), LyricsLine.single(5000, 6000, "c")],
            translated=[LyricsLine.single(1500, 2000, "b")],
        )

        assert to_lrc(result) == "[00:01.000]a\n[00:05.000]c"

    def test_unaligned_track_last_entry_wins_for_shared_start(self):
        result = LyricsResult(
            original=[LyricsLine.single(1000, 2000, "a")],
            translated=[LyricsLine.single(1000, 1000, "old"), LyricsLine.single(1000, 2000, "new")],
        )

        assert to_lrc(result) == "[00:01.000]a\n[00:01.000]new"

    def test_empty_result(self):
        assert to_lrc(LyricsResult()) == ""


class TestToJson:
    """Tests for to_json."""

    def test_json(self):
        result = qrc.parse(PRIMARY, translated="[00:00.00]你好")

        data = json.loads(to_json(result))

        assert data["original"][0]["words"][1] == {"start": 500, "end": 1000, "text": "lo"}
        assert data["translated"][0]["words"][0]["text"] == "你好"
        assert data["translated"][1]["words"] == []
        assert data["romanization"] is None

    def test_compact(self):
        assert "\n" not in to_json(LyricsResult(), indent=None)

"""Tests for format dispatch."""

import pytest

from lyric_sync.errors import UnsupportedFormatError
from lyric_sync.lyrics import parse_lyrics, resolve_format
from lyric_sync.models import LyricsFormat


class TestResolveFormat:
    """Tests for resolve_format."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("krc", LyricsFormat.KRC),
            ("QRC", LyricsFormat.QRC),
            (" yrc ", LyricsFormat.YRC),
            (LyricsFormat.LRC, LyricsFormat.LRC),
        ],
    )
    def test_known(self, value, expected):
        assert resolve_format(value) is expected

    def test_unknown(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            resolve_format("ttml")
        assert exc_info.value.context["format"] == "ttml"


class TestParseLyrics:
    """Tests for parse_lyrics."""

    def test_krc(self):
        result = parse_lyrics("krc", "[0,1000]<0,500,0>Hel<500,500,0>lo")
        assert [w.text for w in result.original[0].words] == ["Hel", "lo"]

    def test_krc_ignores_separate_tracks(self):
        result = parse_lyrics(LyricsFormat.KRC, "[0,1000]<0,1000,0>a", translated="[00:00.00]x")
        assert result.translated is None

    def test_qrc_with_translation(self):
        result = parse_lyrics(
            LyricsFormat.QRC,
            "[0,1000]Hel(0,500)lo(500,500)",
            translated="[00:00.00]Hi",
        )

        assert [w.text for w in result.original[0].words] == ["Hel", "lo"]
        assert result.translated[0].text == "Hi"

    def test_yrc_legacy(self):
        result = parse_lyrics("yrc", None, legacy="[00:01.00]line")
        assert result.original[0].text == "line"

    def test_yrc_nothing(self):
        assert parse_lyrics("yrc", "", legacy=None) is None

    def test_lrc(self):
        result = parse_lyrics("lrc", "[00:01.00]line")
        assert result.original[0].start == 1000

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormatError):
            parse_lyrics("midi", "anything")

    @pytest.mark.parametrize("fmt", ["krc", "qrc", "lrc"])
    def test_garbage_never_raises(self, fmt):
        result = parse_lyrics(fmt, "\x00\x01 ][ <<>> (,) [,] [:]\n" * 10, translated="[[[", romanization=")))")

        assert result.original == []

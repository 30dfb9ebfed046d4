"""
Tests for progress parsing.
"""

import pytest

from ffmpeg_supervisor.executor.parser import (
    ChunkKind,
    ChunkSplitter,
    ProgressParser,
    decode_chunk,
)
from ffmpeg_supervisor.utils import parse_time_to_seconds


@pytest.fixture
def status_chunk():
    """Sample FFmpeg status chunk."""
    return "   45306kB time=00:02:42.28 bitrate=2287.0kbits/s speed=1.2x\nframe= 4855 fps= 46 q=31.0 size="


class TestProgressParser:
    """Test ProgressParser class."""

    def test_progress_is_elapsed_over_duration(self, status_chunk):
        """Progress equals elapsed seconds divided by duration."""
        parser = ProgressParser(duration=600.0)
        result = parser.parse(status_chunk)

        assert result.kind is ChunkKind.PROGRESS
        assert result.progress == (0 * 3600 + 2 * 60 + 42.28) / 600.0

    def test_hours_minutes_seconds(self):
        """All three time components contribute."""
        parser = ProgressParser(duration=7322.5)
        result = parser.parse("time=02:02:02.50 bitrate=1k")

        assert result.progress == (2 * 3600 + 2 * 60 + 2.50) / 7322.5

    @pytest.mark.parametrize("duration", [0, 0.0, None, -5.0])
    def test_unknown_or_zero_duration_gives_zero(self, status_chunk, duration):
        """Zero, negative or unknown duration never divides."""
        result = ProgressParser(duration=duration).parse(status_chunk)

        assert result.kind is ChunkKind.PROGRESS
        assert result.progress == 0.0

    def test_progress_not_clamped(self):
        """Encoder overrun beyond the duration passes through."""
        result = ProgressParser(duration=10.0).parse("time=00:00:12.00")

        assert result.progress == pytest.approx(1.2)

    @pytest.mark.parametrize(
        "chunk",
        [
            "time=N/A bitrate=N/A",
            "time=00:00:xx.00",
            "time=12",
            "time=",
        ],
    )
    def test_malformed_time_yields_zero(self, chunk):
        """Malformed time fields fail soft."""
        result = ProgressParser(duration=10.0).parse(chunk)

        assert result.kind is ChunkKind.PROGRESS
        assert result.progress == 0.0

    def test_other_chunk(self):
        """Chunks without marker or time field are neither."""
        result = ProgressParser(duration=10.0).parse("Stream mapping:\n  Stream #0:0 -> #0:0")

        assert result.kind is ChunkKind.OTHER
        assert result.progress == 0.0
        assert not result.has_progress
        assert not result.is_error

    @pytest.mark.parametrize(
        "chunk",
        [
            "Error while decoding stream #0:0",
            "frame=1 time=00:00:01.00 Error while opening encoder",
            "prefix garbageError while",
        ],
    )
    def test_error_marker_anywhere(self, chunk):
        """The error marker wins over a time field at any position."""
        result = ProgressParser(duration=10.0).parse(chunk)

        assert result.kind is ChunkKind.ERROR
        assert result.is_error

    def test_elapsed_seconds(self):
        """Elapsed seconds are extracted independently of duration."""
        parser = ProgressParser(duration=None)

        assert parser.elapsed_seconds("time=01:00:00.25") == 3600.25
        assert parser.elapsed_seconds("no time here") == 0.0


class TestDecodeChunk:
    """Test raw output decoding."""

    def test_utf8(self):
        assert decode_chunk("título time=00:00:01.00".encode("utf-8")) == "título time=00:00:01.00"

    def test_invalid_bytes_fall_back(self):
        """Invalid UTF-8 is reinterpreted as ISO-8859-1."""
        data = b"caf\xe9 time=00:00:01.00 \xff\xfe"
        text = decode_chunk(data)

        assert text == data.decode("iso-8859-1")
        assert "time=00:00:01.00" in text

    def test_fallback_still_parses(self):
        """Scanning works on fallback-decoded text."""
        text = decode_chunk(b"\xff size=  1kB time=00:00:05.00")

        assert ProgressParser(duration=10.0).parse(text).progress == 0.5


class TestChunkSplitter:
    """Test delimiter-based chunking."""

    def test_split_keeps_delimiter(self):
        splitter = ChunkSplitter()
        chunks = splitter.feed(b"frame=1 size=  1kB time=00:00:01.00\nframe=2 size=")

        assert chunks == [b"frame=1 size=", b"  1kB time=00:00:01.00\nframe=2 size="]
        assert splitter.flush() is None

    def test_partial_delimiter_across_reads(self):
        """A delimiter split across two reads is still found."""
        splitter = ChunkSplitter()

        assert splitter.feed(b"frame=1 si") == []
        assert splitter.feed(b"ze= 1kB") == [b"frame=1 size="]
        assert splitter.flush() == b" 1kB"

    def test_flush_tail(self):
        splitter = ChunkSplitter()
        splitter.feed(b"video:3000kB audio:200kB")

        assert splitter.flush() == b"video:3000kB audio:200kB"
        assert splitter.flush() is None

    def test_empty_delimiter_rejected(self):
        with pytest.raises(ValueError):
            ChunkSplitter(b"")

    def test_pending_holds_undelimited_tail(self):
        splitter = ChunkSplitter()
        splitter.feed(b"frame=1 size=  1kB time=00:00:01.00\nError while decoding")

        assert splitter.pending == b"  1kB time=00:00:01.00\nError while decoding"
        splitter.flush()
        assert splitter.pending == b""


class TestParseTimeToSeconds:
    """Test the time field helper used by the parser."""

    @pytest.mark.parametrize(
        "value,expected",
        [("01:02:03.50", 3723.5), ("02:03.25", 123.25), ("7.5", 7.5)],
    )
    def test_formats(self, value, expected):
        assert parse_time_to_seconds(value) == expected

"""
Progress parsing for FFmpeg status output.

FFmpeg writes status lines such as

    frame= 4855 fps= 46 q=31.0 size=   45306kB time=00:02:42.28 bitrate=2287.0kbits/s

to stderr. Each chunk is classified as an error report, a progress report or
anything else, and progress reports are converted into a fraction of the
known total duration.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils import parse_time_to_seconds

ERROR_MARKER = "Error while"
TIME_FIELD = "time="
CHUNK_DELIMITER = b"size="

FALLBACK_ENCODING = "iso-8859-1"


class ChunkKind(str, Enum):
    """Category of a status chunk."""

    ERROR = "error"
    PROGRESS = "progress"
    OTHER = "other"


@dataclass(frozen=True)
class ChunkResult:
    """Classification of one status chunk."""

    kind: ChunkKind
    progress: float = 0.0

    @property
    def is_error(self) -> bool:
        return self.kind is ChunkKind.ERROR

    @property
    def has_progress(self) -> bool:
        return self.kind is ChunkKind.PROGRESS


def decode_chunk(data: bytes) -> str:
    """
    Decode raw process output.

    Tries the default encoding first and falls back to ISO-8859-1, which
    maps every byte and therefore never fails.

    Args:
        data: Raw bytes read from the process

    Returns:
        Decoded text
    """
    try:
        return data.decode()
    except UnicodeDecodeError:
        return data.decode(FALLBACK_ENCODING)


class ChunkSplitter:
    """
    Splits a byte stream into chunks terminated by a delimiter.

    The delimiter stays at the end of the chunk it terminates. Bytes after
    the last delimiter are buffered until more data arrives or flush().
    """

    def __init__(self, delimiter: bytes = CHUNK_DELIMITER):
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self.delimiter = delimiter
        self._buffer = b""

    def feed(self, data: bytes) -> list[bytes]:
        """
        Add data and return the chunks it completes.

        Args:
            data: Bytes read from the stream

        Returns:
            Complete chunks in stream order
        """
        self._buffer += data
        chunks: list[bytes] = []
        while True:
            index = self._buffer.find(self.delimiter)
            if index < 0:
                break
            end = index + len(self.delimiter)
            chunks.append(self._buffer[:end])
            self._buffer = self._buffer[end:]
        return chunks

    @property
    def pending(self) -> bytes:
        """Bytes received after the last delimiter."""
        return self._buffer

    def flush(self) -> Optional[bytes]:
        """Return the buffered tail, if any."""
        if not self._buffer:
            return None
        tail, self._buffer = self._buffer, b""
        return tail


class ProgressParser:
    """
    Parser turning FFmpeg status chunks into progress fractions.

    Progress is elapsed seconds divided by the total duration. Values are
    not clamped; an encoder overrunning the estimated duration reports
    values above 1.0.
    """

    PROGRESS_PATTERN = re.compile(r"time=(\d+:\d+:\d+\.\d+)")

    def __init__(self, duration: Optional[float]):
        """
        Initialize parser.

        Args:
            duration: Total duration of the source in seconds (None if unknown)
        """
        self.duration = duration

    def parse(self, chunk: str) -> ChunkResult:
        """
        Classify a status chunk.

        The error marker is checked first, then the elapsed-time field.
        Chunks carrying a malformed time field still count as progress
        reports and yield 0.0.

        Args:
            chunk: Decoded chunk of status output

        Returns:
            ChunkResult for the chunk
        """
        if ERROR_MARKER in chunk:
            return ChunkResult(ChunkKind.ERROR)

        if TIME_FIELD in chunk:
            return ChunkResult(ChunkKind.PROGRESS, self.calculate_progress(chunk))

        return ChunkResult(ChunkKind.OTHER)

    def elapsed_seconds(self, chunk: str) -> float:
        """
        Extract elapsed seconds from the time field.

        Returns:
            Elapsed seconds, 0.0 if the field is missing or malformed
        """
        match = self.PROGRESS_PATTERN.search(chunk)
        if not match:
            return 0.0
        return parse_time_to_seconds(match.group(1))

    def calculate_progress(self, chunk: str) -> float:
        """
        Convert the time field of a chunk to a progress fraction.

        Returns:
            Elapsed / duration, or 0.0 if the duration is unknown or not positive
        """
        if not self.duration or self.duration <= 0:
            return 0.0
        return self.elapsed_seconds(chunk) / self.duration

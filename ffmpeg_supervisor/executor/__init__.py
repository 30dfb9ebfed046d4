"""Process execution and supervision."""

from ffmpeg_supervisor.executor.channel import ProgressChannel
from ffmpeg_supervisor.executor.command import build_command
from ffmpeg_supervisor.executor.parser import (
    ChunkKind,
    ChunkResult,
    ChunkSplitter,
    ProgressParser,
    decode_chunk,
)
from ffmpeg_supervisor.executor.state import RunState
from ffmpeg_supervisor.executor.subprocess import ProgressSink, StreamSupervisor
from ffmpeg_supervisor.executor.watchdog import InactivityWatchdog

__all__ = [
    "build_command",
    "ChunkKind",
    "ChunkResult",
    "ChunkSplitter",
    "InactivityWatchdog",
    "ProgressChannel",
    "ProgressParser",
    "ProgressSink",
    "RunState",
    "StreamSupervisor",
    "decode_chunk",
]

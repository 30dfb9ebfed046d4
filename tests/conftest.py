"""
Shared fixtures: a scriptable stand-in for the ffmpeg binary and an
in-memory metadata service.
"""

import shlex
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

from ffmpeg_supervisor.config import FFmpegConfig
from ffmpeg_supervisor.models import MediaMetadata

requires_posix_shell = pytest.mark.skipif(
    sys.platform == "win32", reason="fake ffmpeg scripts need a POSIX shell"
)

# Writes its last argument (the output path) as an empty file.
TOUCH_OUTPUT = 'for last in "$@"; do :; done\n: > "$last"\n'


class FakeMetadataService:
    """Metadata service answering from a fixed validity flag."""

    def __init__(self, valid: bool = True, duration: float = 10.0):
        self.valid = valid
        self.duration = duration
        self.exists_calls: list[Path] = []
        self.probe_calls: list[Path] = []

    def exists(self, path: Path) -> bool:
        self.exists_calls.append(Path(path))
        return Path(path).exists()

    async def probe(self, path: Path) -> MediaMetadata:
        self.probe_calls.append(Path(path))
        return MediaMetadata(
            path=Path(path),
            exists=True,
            valid=self.valid,
            duration=self.duration,
            width=640,
            height=360,
        )


@pytest.fixture
def metadata_service() -> FakeMetadataService:
    return FakeMetadataService()


@pytest.fixture
def source(tmp_path: Path) -> MediaMetadata:
    """Ten-second 2:1 source clip."""
    path = tmp_path / "input file.mp4"
    path.write_bytes(b"\x00")
    return MediaMetadata(
        path=path, exists=True, valid=True, duration=10.0, width=200, height=100, aspect_ratio=2.0
    )


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> Callable[..., str]:
    """
    Factory writing a shell script that stands in for ffmpeg.

    Returns the command prefix to use as the ffmpeg binary.
    """

    def factory(body: str, name: str = "fake_ffmpeg.sh") -> str:
        script = tmp_path / name
        script.write_text("#!/bin/sh\n" + body)
        return f"sh {shlex.quote(str(script))}"

    return factory


@pytest.fixture
def fast_config() -> Callable[..., FFmpegConfig]:
    def factory(binary: str = "ffmpeg", timeout: Optional[float] = 5.0) -> FFmpegConfig:
        return FFmpegConfig(ffmpeg_binary=binary, timeout=timeout, kill_grace_period=1.0)

    return factory


def status_line(seconds: str, size: str = "100kB") -> str:
    """FFmpeg-style status line reporting the given elapsed time."""
    return f"frame=  100 fps= 25 q=28.0 size=   {size} time={seconds} bitrate= 800.0kbits/s\\n"

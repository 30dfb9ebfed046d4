"""
Media metadata inspection using FFprobe.

This module provides the metadata service the supervisor consults for the
source duration and aspect ratio and for validating the produced output.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional, Protocol

from ..models import MediaMetadata
from ..utils import MediaInspectionError, get_logger, parse_ratio

logger = get_logger(__name__)


class MetadataService(Protocol):
    """Service answering existence and metadata queries for media files."""

    def exists(self, path: Path) -> bool:
        """Check whether a media file exists."""
        ...

    async def probe(self, path: Path) -> MediaMetadata:
        """Inspect an existing media file."""
        ...


class FFprobeMetadataService:
    """
    Metadata service backed by FFprobe.

    A file is valid when FFprobe reads it without error and finds at least
    one audio or video stream.
    """

    UNSUPPORTED_MARKERS = ("is not supported", "Invalid data found")

    def __init__(self, ffprobe_path: str = "ffprobe"):
        """
        Initialize metadata service.

        Args:
            ffprobe_path: Path to ffprobe executable (default: "ffprobe")
        """
        self._ffprobe_path = ffprobe_path

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    async def probe(self, path: Path) -> MediaMetadata:
        """
        Inspect media file.

        Args:
            path: Path to media file

        Returns:
            MediaMetadata for the file; missing files are reported with exists=False

        Raises:
            MediaInspectionError: If FFprobe cannot be executed
        """
        path = Path(path)
        if not self.exists(path):
            return MediaMetadata.missing(path)

        logger.debug(f"Inspecting media file: {path.name}")
        returncode, stdout, stderr = await self._run_ffprobe(path)

        if returncode != 0 or any(marker in stderr for marker in self.UNSUPPORTED_MARKERS):
            logger.warning(f"FFprobe rejected {path}: {stderr.strip() or returncode}")
            return MediaMetadata(path=path, exists=True, valid=False)

        try:
            probe_data = json.loads(stdout or "{}")
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse FFprobe output for {path}: {e}")
            return MediaMetadata(path=path, exists=True, valid=False)

        return self._parse(path, probe_data)

    async def _run_ffprobe(self, path: Path) -> tuple[int, str, str]:
        """
        Run ffprobe and capture its output.

        Returns:
            Tuple of (return code, stdout, stderr)

        Raises:
            MediaInspectionError: If ffprobe cannot be started
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self._ffprobe_path,
                "-v",
                "error",
                "-print_format",
                "json",
                "-show_format",
                "-show_streams",
                str(path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise MediaInspectionError(f"FFprobe execution failed: {e}") from e

        stdout, stderr = await process.communicate()
        return (
            process.returncode if process.returncode is not None else -1,
            stdout.decode(errors="replace") if stdout else "",
            stderr.decode(errors="replace") if stderr else "",
        )

    def _parse(self, path: Path, probe_data: dict) -> MediaMetadata:
        """
        Build metadata from ffprobe JSON output.

        Args:
            path: Inspected file
            probe_data: FFprobe JSON output

        Returns:
            MediaMetadata
        """
        if "error" in probe_data:
            return MediaMetadata(path=path, exists=True, valid=False)

        format_data = probe_data.get("format", {})
        streams = probe_data.get("streams", [])
        video = next((s for s in streams if s.get("codec_type") == "video"), None)
        audio = next((s for s in streams if s.get("codec_type") == "audio"), None)

        width = height = None
        aspect_ratio: Optional[float] = None
        if video is not None:
            width = int(video.get("width") or 0) or None
            height = int(video.get("height") or 0) or None
            aspect_ratio = parse_ratio(video.get("display_aspect_ratio"))
            if self._is_rotated(video):
                width, height = height, width
                if aspect_ratio:
                    aspect_ratio = 1 / aspect_ratio

        return MediaMetadata(
            path=path,
            exists=True,
            valid=video is not None or audio is not None,
            duration=self._parse_float(format_data.get("duration")),
            width=width,
            height=height,
            aspect_ratio=aspect_ratio,
            format_name=format_data.get("format_name"),
            video_codec=video.get("codec_name") if video else None,
            audio_codec=audio.get("codec_name") if audio else None,
            size=int(self._parse_float(format_data.get("size")) or 0),
            bitrate=int(self._parse_float(format_data.get("bit_rate")) or 0),
        )

    @staticmethod
    def _is_rotated(stream: dict) -> bool:
        rotation = stream.get("tags", {}).get("rotate")
        if rotation is None:
            for side_data in stream.get("side_data_list", []):
                if "rotation" in side_data:
                    rotation = side_data["rotation"]
                    break
        try:
            return abs(int(float(rotation or 0))) % 180 == 90
        except ValueError:
            return False

    @staticmethod
    def _parse_float(value) -> Optional[float]:
        if value in (None, "", "N/A"):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

"""
Data models for media file information.

This module contains the metadata returned by the metadata service for a
source or output file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class MediaMetadata:
    """Metadata of a media file as reported by the metadata service."""

    path: Path
    exists: bool = True
    valid: bool = False
    duration: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    aspect_ratio: Optional[float] = None
    format_name: Optional[str] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    size: int = 0
    bitrate: int = 0

    @property
    def resolution(self) -> Optional[str]:
        """Get resolution as string (e.g., '1920x1080')."""
        if self.width is None or self.height is None:
            return None
        return f"{self.width}x{self.height}"

    @property
    def calculated_aspect_ratio(self) -> Optional[float]:
        """Display aspect ratio, falling back to width / height."""
        if self.aspect_ratio:
            return self.aspect_ratio
        if self.width and self.height:
            return self.width / self.height
        return None

    @classmethod
    def missing(cls, path: Path) -> "MediaMetadata":
        """Metadata for a file that does not exist."""
        return cls(path=path, exists=False, valid=False)

"""Configuration management for the FFmpeg supervisor."""

from ffmpeg_supervisor.config.manager import ConfigManager
from ffmpeg_supervisor.config.models import (
    FFmpegConfig,
    TranscodeOptions,
    TranscoderConfig,
)

__all__ = [
    # Manager
    "ConfigManager",
    # Models
    "FFmpegConfig",
    "TranscodeOptions",
    "TranscoderConfig",
]

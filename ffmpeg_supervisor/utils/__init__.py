"""Utility functions, logging and exceptions."""

from ffmpeg_supervisor.utils.errors import (
    ConfigurationError,
    CrashedProcessError,
    HungProcessError,
    MediaInspectionError,
    NoOutputError,
    OutputValidationError,
    TranscoderError,
    TranscodingError,
    format_diagnostic,
)
from ffmpeg_supervisor.utils.helpers import (
    format_duration,
    format_size,
    parse_ratio,
    parse_time_to_seconds,
)
from ffmpeg_supervisor.utils.logger import get_logger, setup_logger

__all__ = [
    # Errors
    "ConfigurationError",
    "CrashedProcessError",
    "HungProcessError",
    "MediaInspectionError",
    "NoOutputError",
    "OutputValidationError",
    "TranscoderError",
    "TranscodingError",
    "format_diagnostic",
    # Helpers
    "format_duration",
    "format_size",
    "parse_ratio",
    "parse_time_to_seconds",
    # Logging
    "get_logger",
    "setup_logger",
]

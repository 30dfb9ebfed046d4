"""
FFmpeg Supervisor

Runs FFmpeg transcodes under supervision: streams progress, detects hung
and crashed processes and validates the produced output.
"""

__version__ = "0.1.0"

from ffmpeg_supervisor.config import (
    ConfigManager,
    FFmpegConfig,
    TranscodeOptions,
    TranscoderConfig,
)
from ffmpeg_supervisor.executor import ProgressChannel, StreamSupervisor, build_command
from ffmpeg_supervisor.inspector import FFprobeMetadataService, MetadataService
from ffmpeg_supervisor.models import (
    Crashed,
    EncodingOptions,
    Hung,
    Invocation,
    MediaMetadata,
    NoOutput,
    Outcome,
    OutcomeKind,
    Succeeded,
    ValidationFailed,
)
from ffmpeg_supervisor.transcoder import Transcoder
from ffmpeg_supervisor.utils import (
    ConfigurationError,
    CrashedProcessError,
    HungProcessError,
    MediaInspectionError,
    NoOutputError,
    OutputValidationError,
    TranscoderError,
    TranscodingError,
    get_logger,
    setup_logger,
)

__all__ = [
    "__version__",
    # Config
    "ConfigManager",
    "FFmpegConfig",
    "TranscodeOptions",
    "TranscoderConfig",
    # Execution
    "ProgressChannel",
    "StreamSupervisor",
    "Transcoder",
    "build_command",
    # Metadata
    "FFprobeMetadataService",
    "MetadataService",
    # Models
    "Crashed",
    "EncodingOptions",
    "Hung",
    "Invocation",
    "MediaMetadata",
    "NoOutput",
    "Outcome",
    "OutcomeKind",
    "Succeeded",
    "ValidationFailed",
    # Errors
    "ConfigurationError",
    "CrashedProcessError",
    "HungProcessError",
    "MediaInspectionError",
    "NoOutputError",
    "OutputValidationError",
    "TranscoderError",
    "TranscodingError",
    # Logging
    "get_logger",
    "setup_logger",
]

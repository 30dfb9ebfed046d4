"""Data models for the FFmpeg supervisor."""

from ffmpeg_supervisor.models.invocation import (
    EncodingOptions,
    Invocation,
    OptionsFragment,
    coerce_options,
)
from ffmpeg_supervisor.models.media import MediaMetadata
from ffmpeg_supervisor.models.outcome import (
    Crashed,
    Hung,
    NoOutput,
    Outcome,
    OutcomeKind,
    Succeeded,
    ValidationFailed,
)

__all__ = [
    # Invocation models
    "EncodingOptions",
    "Invocation",
    "OptionsFragment",
    "coerce_options",
    # Media models
    "MediaMetadata",
    # Outcome models
    "Crashed",
    "Hung",
    "NoOutput",
    "Outcome",
    "OutcomeKind",
    "Succeeded",
    "ValidationFailed",
]

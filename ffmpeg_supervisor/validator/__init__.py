"""Output validation and outcome classification."""

from ffmpeg_supervisor.validator.checker import (
    INVALID_OUTPUT_NOTE,
    NO_OUTPUT_NOTE,
    OutcomeClassifier,
)

__all__ = ["INVALID_OUTPUT_NOTE", "NO_OUTPUT_NOTE", "OutcomeClassifier"]

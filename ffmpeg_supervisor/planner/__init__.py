"""Pre-flight planning of output options."""

from ffmpeg_supervisor.planner.aspect import (
    PreserveMode,
    adjust_resolution,
    calculate_resolution,
    round_to_even,
)

__all__ = [
    "PreserveMode",
    "adjust_resolution",
    "calculate_resolution",
    "round_to_even",
]

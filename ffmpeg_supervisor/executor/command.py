"""
Command line construction for FFmpeg runs.
"""

import shlex

from ..models import Invocation

OVERWRITE_FLAG = "-y"
ERROR_DETECTION_FLAGS = "-err_detect explode -xerror"


def build_command(invocation: Invocation, ffmpeg_binary: str = "ffmpeg") -> str:
    """
    Build the shell command line for an invocation.

    A literal command override is returned unchanged. Otherwise the parts
    are joined in a fixed order: binary, overwrite flag, input options,
    error-detection flags (unless errors are ignored), quoted source, output
    options and the quoted destination when one is given.

    Args:
        invocation: Invocation to render
        ffmpeg_binary: FFmpeg executable name or path

    Returns:
        Command line string
    """
    if invocation.command:
        return invocation.command

    parts = [
        ffmpeg_binary,
        OVERWRITE_FLAG,
        invocation.input_options,
        "" if invocation.ignore_errors else ERROR_DETECTION_FLAGS,
        "-i",
        shlex.quote(str(invocation.source_path)),
        invocation.output_options,
    ]
    if invocation.output_path is not None:
        parts.append(shlex.quote(str(invocation.output_path)))

    return " ".join(part for part in parts if part)

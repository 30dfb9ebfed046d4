"""
Custom exceptions for the FFmpeg supervisor.

This module defines the exception hierarchy used throughout the application.
Run failures carry the exact command and the full accumulated output so that
callers have everything needed to diagnose a hung or crashed transcode.
"""

from typing import Optional


class TranscoderError(Exception):
    """Base exception for all supervisor errors."""

    pass


class ConfigurationError(TranscoderError):
    """Configuration is invalid or missing."""

    pass


class MediaInspectionError(TranscoderError):
    """Failed to inspect media file."""

    pass


class TranscodingError(TranscoderError):
    """Transcoding run failed."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        output: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        """
        Initialize transcoding error with run diagnostics.

        Args:
            message: Human-readable error message
            command: Command line that was executed
            output: Full accumulated process output
            cause: Underlying exception, if any
        """
        super().__init__(format_diagnostic(message, command, output, cause))
        self.message = message
        self.command = command
        self.output = output
        self.cause = cause


class HungProcessError(TranscodingError):
    """Process produced no output within the inactivity timeout."""

    def __init__(
        self,
        message: str,
        timeout: float,
        command: Optional[str] = None,
        output: Optional[str] = None,
    ):
        super().__init__(message, command=command, output=output)
        self.timeout = timeout


class CrashedProcessError(TranscodingError):
    """Process exited with failure or reported an error in its output."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        command: Optional[str] = None,
        output: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, command=command, output=output, cause=cause)
        self.returncode = returncode


class NoOutputError(TranscodingError):
    """Process succeeded but no output file was created."""

    pass


class OutputValidationError(TranscodingError):
    """Output file exists but failed validation."""

    def __init__(
        self,
        message: str,
        errors: Optional[list[str]] = None,
        command: Optional[str] = None,
        output: Optional[str] = None,
    ):
        super().__init__(message, command=command, output=output)
        self.errors = list(errors or [])


def format_diagnostic(
    message: str,
    command: Optional[str] = None,
    output: Optional[str] = None,
    cause: Optional[BaseException] = None,
) -> str:
    """
    Format a failure message with its run diagnostics.

    Args:
        message: Human-readable error message
        command: Command line that was executed
        output: Full accumulated process output
        cause: Underlying exception, if any

    Returns:
        Multi-line diagnostic string
    """
    parts = [message]
    if command is not None:
        parts.append(f"Command: {command}")
    if output is not None:
        parts.append(f"Output: {output}")
    if cause is not None:
        parts.append(f"Cause: {type(cause).__name__}: {cause}")
    return "\n".join(parts)

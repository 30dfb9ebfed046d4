"""
Terminal outcomes of a supervised transcode run.

Exactly one outcome is produced per run. Failure outcomes convert to the
matching TranscodingError subclass via to_error().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from ..utils.errors import (
    CrashedProcessError,
    HungProcessError,
    NoOutputError,
    OutputValidationError,
    TranscodingError,
)
from .media import MediaMetadata


class OutcomeKind(str, Enum):
    """Classification of a finished run."""

    SUCCEEDED = "succeeded"
    VALIDATION_FAILED = "validation_failed"
    HUNG = "hung"
    CRASHED = "crashed"
    NO_OUTPUT = "no_output"


@dataclass(frozen=True)
class Outcome:
    """Base outcome carrying the run diagnostics."""

    command: str
    output: str

    kind: ClassVar[Optional[OutcomeKind]] = None

    @property
    def succeeded(self) -> bool:
        """Check if the run succeeded."""
        return self.kind is OutcomeKind.SUCCEEDED

    @property
    def message(self) -> str:
        """Human-readable summary."""
        return self.kind.value if self.kind is not None else "unclassified"

    def to_error(self) -> Optional[TranscodingError]:
        """Exception for this outcome, None on success."""
        return None


@dataclass(frozen=True)
class Succeeded(Outcome):
    """Process exited cleanly and, if requested, the output validated."""

    artifact: Optional[MediaMetadata] = None

    kind = OutcomeKind.SUCCEEDED

    @property
    def message(self) -> str:
        return "Transcoding succeeded"


@dataclass(frozen=True)
class ValidationFailed(Outcome):
    """Output file exists but the metadata service reports it invalid."""

    reasons: tuple[str, ...] = field(default_factory=tuple)

    kind = OutcomeKind.VALIDATION_FAILED

    @property
    def message(self) -> str:
        return f"Failed encoding. Errors: {', '.join(self.reasons)}."

    def to_error(self) -> TranscodingError:
        return OutputValidationError(
            self.message, errors=list(self.reasons), command=self.command, output=self.output
        )


@dataclass(frozen=True)
class Hung(Outcome):
    """No output arrived within the inactivity timeout."""

    diagnostic: str = ""
    timeout: float = 0.0

    kind = OutcomeKind.HUNG

    @property
    def message(self) -> str:
        return f"Process hung: {self.diagnostic}" if self.diagnostic else "Process hung"

    def to_error(self) -> TranscodingError:
        return HungProcessError(
            self.message, timeout=self.timeout, command=self.command, output=self.output
        )


@dataclass(frozen=True)
class Crashed(Outcome):
    """Process exited with failure or printed the error marker."""

    diagnostic: str = ""
    returncode: Optional[int] = None

    kind = OutcomeKind.CRASHED

    @property
    def message(self) -> str:
        return f"Error executing FFmpeg: {self.diagnostic}" if self.diagnostic else (
            "Error executing FFmpeg"
        )

    def to_error(self) -> TranscodingError:
        return CrashedProcessError(
            self.message, returncode=self.returncode, command=self.command, output=self.output
        )


@dataclass(frozen=True)
class NoOutput(Outcome):
    """Process exited cleanly but no output file was created."""

    diagnostic: str = ""

    kind = OutcomeKind.NO_OUTPUT

    @property
    def message(self) -> str:
        return f"Failed encoding. Errors: {self.diagnostic}." if self.diagnostic else (
            "Failed encoding. No output file created."
        )

    def to_error(self) -> TranscodingError:
        return NoOutputError(self.message, command=self.command, output=self.output)

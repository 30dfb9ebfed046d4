"""
Configuration models using Pydantic.

This module defines the configuration structure for the FFmpeg supervisor.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class FFmpegConfig(BaseModel):
    """Process-wide FFmpeg execution settings."""

    ffmpeg_binary: str = Field(default="ffmpeg", description="FFmpeg executable name or path")
    ffprobe_binary: str = Field(default="ffprobe", description="FFprobe executable name or path")
    timeout: Optional[float] = Field(
        default=30.0,
        gt=0,
        description="Inactivity timeout in seconds between stderr reads (null disables)",
    )
    kill_grace_period: float = Field(
        default=5.0, ge=0, description="Seconds to wait after SIGTERM before SIGKILL"
    )
    read_size: int = Field(
        default=4096, ge=1, le=1048576, description="Bytes requested per stderr read"
    )

    @field_validator("ffmpeg_binary", "ffprobe_binary")
    @classmethod
    def validate_binary(cls, v: str) -> str:
        """Validate executable name."""
        if not v.strip():
            raise ValueError("binary name must not be empty")
        return v.strip()


class TranscodeOptions(BaseModel):
    """Per-run transcoding options."""

    validate_output: bool = Field(
        default=True, description="Check the output file with the metadata service"
    )
    ignore_errors: bool = Field(
        default=False, description="Drop the -err_detect explode -xerror flags"
    )
    command: Optional[str] = Field(
        default=None, description="Literal command line, bypasses the command builder"
    )
    preserve_aspect_ratio: Optional[Literal["width", "height"]] = Field(
        default=None, description="Derive the other dimension from the source aspect ratio"
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-run inactivity timeout; only applied when explicitly set",
    )

    @field_validator("preserve_aspect_ratio", mode="before")
    @classmethod
    def validate_preserve_aspect_ratio(cls, v: Optional[str]) -> Optional[str]:
        """Normalise aspect-ratio preservation mode."""
        if v is None:
            return None
        v = str(v).lower()
        if v in ("", "none"):
            return None
        return v

    def resolve_timeout(self, default: Optional[float]) -> Optional[float]:
        """
        Resolve the inactivity timeout for a run.

        An explicitly set timeout wins, including an explicit None which
        disables the watchdog. Otherwise the process-wide default applies.

        Args:
            default: Process-wide timeout from FFmpegConfig

        Returns:
            Timeout in seconds or None
        """
        if "timeout" in self.model_fields_set:
            return self.timeout
        return default


class TranscoderConfig(BaseModel):
    """Main supervisor configuration."""

    ffmpeg: FFmpegConfig = Field(default_factory=FFmpegConfig)
    defaults: TranscodeOptions = Field(default_factory=TranscodeOptions)

    @classmethod
    def create_default(cls) -> "TranscoderConfig":
        """Create default configuration."""
        return cls()

    def options(self, **overrides) -> TranscodeOptions:
        """
        Build per-run options from the configured defaults.

        Args:
            **overrides: Option values for this run

        Returns:
            TranscodeOptions with overrides applied
        """
        data = self.defaults.model_dump(exclude_unset=True)
        data.update(overrides)
        return TranscodeOptions(**data)

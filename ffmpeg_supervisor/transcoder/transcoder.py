"""
Transcoder facade.

Ties together aspect-ratio planning, command building, process supervision
and outcome classification for a single source and destination.
"""

import asyncio
from pathlib import Path
from typing import Any, AsyncIterator, Optional, Union

from ..config import FFmpegConfig, TranscodeOptions
from ..executor import ProgressChannel, ProgressSink, StreamSupervisor, build_command
from ..inspector import FFprobeMetadataService, MetadataService
from ..models import (
    EncodingOptions,
    Invocation,
    MediaMetadata,
    OptionsFragment,
    Outcome,
    coerce_options,
)
from ..planner import adjust_resolution
from ..utils import ConfigurationError, get_logger
from ..validator import OutcomeClassifier

logger = get_logger(__name__)

OptionsInput = Union[OptionsFragment, dict[str, Any], None]


class Transcoder:
    """
    Runs one FFmpeg transcode of a source file.

    Output options may request a preserved aspect ratio; the missing
    dimension is derived from the source before the command is built.
    Each call to execute() or run() is an independent run with its own
    run state.
    """

    def __init__(
        self,
        source: MediaMetadata,
        output_file: Optional[Path],
        options: OptionsInput = None,
        input_options: OptionsInput = None,
        transcode_options: Optional[TranscodeOptions] = None,
        config: Optional[FFmpegConfig] = None,
        metadata_service: Optional[MetadataService] = None,
    ):
        """
        Initialize transcoder.

        Args:
            source: Metadata of the source file (duration, aspect ratio)
            output_file: Destination file, None if the options carry the destination
            options: Output options (EncodingOptions, dict or raw string)
            input_options: Input options (EncodingOptions, dict or raw string)
            transcode_options: Per-run options (validation, error strictness, ...)
            config: Process-wide FFmpeg settings
            metadata_service: Service used to validate the output

        Raises:
            TypeError: If an options argument has an unsupported type
            ConfigurationError: If aspect-ratio preservation lacks a target dimension
        """
        self.source = source
        self.output_file = Path(output_file) if output_file is not None else None
        self.config = config or FFmpegConfig()
        self.transcode_options = transcode_options or TranscodeOptions()
        self.metadata_service = metadata_service or FFprobeMetadataService(
            self.config.ffprobe_binary
        )

        self.input_options = coerce_options(input_options)
        self.options = coerce_options(options)
        if isinstance(self.options, EncodingOptions):
            self.options = EncodingOptions(self.options)

        self._apply_transcode_options()

    @property
    def timeout(self) -> Optional[float]:
        """Inactivity timeout for this run."""
        return self.transcode_options.resolve_timeout(self.config.timeout)

    @property
    def invocation(self) -> Invocation:
        return Invocation.create(
            source_path=self.source.path,
            output_path=self.output_file,
            output_options=self.options,
            input_options=self.input_options,
            ignore_errors=self.transcode_options.ignore_errors,
            command=self.transcode_options.command,
        )

    @property
    def transcode_command(self) -> str:
        """Command line that will be executed."""
        return build_command(self.invocation, self.config.ffmpeg_binary)

    def _apply_transcode_options(self) -> None:
        mode = self.transcode_options.preserve_aspect_ratio
        aspect_ratio = self.source.calculated_aspect_ratio
        if self.transcode_options.command or aspect_ratio is None or mode is None:
            return

        if not isinstance(self.options, EncodingOptions):
            logger.warning("Cannot preserve aspect ratio with a raw option string; skipping")
            return

        try:
            adjust_resolution(self.options, aspect_ratio, mode)
        except ValueError as e:
            raise ConfigurationError(f"Cannot preserve aspect ratio: {e}") from e

    async def execute(self, progress_sink: Optional[ProgressSink] = None) -> Outcome:
        """
        Run the transcode and classify how it ended.

        Progress starts at 0.0, follows every status chunk carrying a time
        field and ends with 1.0 only when validation ran and succeeded.

        Args:
            progress_sink: Callback receiving progress fractions

        Returns:
            The run's single Outcome

        Raises:
            MediaInspectionError: If the metadata service fails unexpectedly
        """
        try:
            supervisor = StreamSupervisor(
                self.transcode_command,
                duration=self.source.duration,
                timeout=self.timeout,
                progress_sink=progress_sink,
                kill_grace_period=self.config.kill_grace_period,
                read_size=self.config.read_size,
            )
            outcome = await supervisor.run()

            if not outcome.succeeded or not self.transcode_options.validate_output:
                return outcome

            classifier = OutcomeClassifier(self.metadata_service)
            outcome = await classifier.classify(self.output_file, supervisor.state)
            if outcome.succeeded:
                if progress_sink is not None:
                    progress_sink(1.0)
                logger.info(
                    f"Transcoding of {self.source.path} to {self.output_file} succeeded"
                )
            else:
                logger.error(
                    f"Failed encoding...\n{outcome.command}\n\n{outcome.output}\n{outcome.message}"
                )
            return outcome
        finally:
            if isinstance(progress_sink, ProgressChannel):
                progress_sink.close()

    async def run(self, progress_sink: Optional[ProgressSink] = None) -> Optional[MediaMetadata]:
        """
        Run the transcode, raising on any failure outcome.

        Args:
            progress_sink: Callback receiving progress fractions

        Returns:
            Metadata of the encoded file when validation is enabled, otherwise None

        Raises:
            HungProcessError: If the process stopped producing output
            CrashedProcessError: If the process failed or reported an error
            NoOutputError: If no output file was created
            OutputValidationError: If the output file is invalid
        """
        outcome = await self.execute(progress_sink)
        error = outcome.to_error()
        if error is not None:
            raise error
        return getattr(outcome, "artifact", None)

    async def progress(self) -> AsyncIterator[float]:
        """
        Run the transcode, yielding progress values as they arrive.

        The failure of the run, if any, is raised once the values are drained.
        """
        channel = ProgressChannel()
        task = asyncio.create_task(self.run(channel))
        try:
            async for value in channel:
                yield value
        except BaseException:
            task.cancel()
            raise
        await task

"""
CLI interface for the FFmpeg supervisor.

This module provides the command-line interface using Typer and Rich.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import ConfigManager, TranscodeOptions, TranscoderConfig
from ..inspector import FFprobeMetadataService
from ..models import EncodingOptions, MediaMetadata
from ..transcoder import Transcoder
from ..ui import RichProgressSink
from ..utils import (
    ConfigurationError,
    TranscoderError,
    TranscodingError,
    format_duration,
    format_size,
    setup_logger,
)

app = typer.Typer(
    name="ffmpeg-supervisor",
    help="Run FFmpeg transcodes with progress, hang detection and output validation",
    add_completion=False,
)

console = Console()


def parse_option_pairs(pairs: Optional[list[str]]) -> EncodingOptions:
    """
    Parse "key=value" pairs into encoding options.

    A pair without "=" becomes a bare flag.

    Raises:
        ConfigurationError: If a key is empty
    """
    options = EncodingOptions()
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip().lstrip("-")
        if not key:
            raise ConfigurationError(f"Invalid option: {pair!r}")
        options[key] = value if sep else True
    return options


def load_config(config_file: Optional[Path]) -> TranscoderConfig:
    """Load configuration from an explicit file or the default locations."""
    return ConfigManager(config_file).config


@app.command()
def transcode(
    input_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Input media file",
    ),
    output_file: Optional[Path] = typer.Argument(
        None,
        help="Output file (omit when --command or the options carry the destination)",
    ),
    output_option: Optional[list[str]] = typer.Option(
        None,
        "--option",
        "-o",
        help="Output option as key=value (repeatable), e.g. -o vcodec=libx264",
    ),
    input_option: Optional[list[str]] = typer.Option(
        None,
        "--input-option",
        "-i",
        help="Input option as key=value (repeatable), e.g. -i ss=10",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.001,
        help="Inactivity timeout in seconds (default from config)",
    ),
    no_timeout: bool = typer.Option(
        False,
        "--no-timeout",
        help="Disable the inactivity timeout",
    ),
    no_validate: bool = typer.Option(
        False,
        "--no-validate",
        help="Skip output validation",
    ),
    ignore_errors: bool = typer.Option(
        False,
        "--ignore-errors",
        help="Do not pass -err_detect explode -xerror to FFmpeg",
    ),
    preserve_aspect_ratio: Optional[str] = typer.Option(
        None,
        "--preserve-aspect-ratio",
        "-p",
        help="Preserve source aspect ratio: width or height",
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        help="Literal command line to run instead of the built one",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Custom configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log",
        help="Log file path",
    ),
) -> None:
    """
    Transcode a media file with FFmpeg under supervision.
    """
    setup_logger(level="DEBUG" if verbose else "INFO", log_file=log_file, verbose=verbose)

    try:
        config = load_config(config_file)

        overrides: dict = {}
        if no_validate:
            overrides["validate_output"] = False
        if ignore_errors:
            overrides["ignore_errors"] = True
        if command is not None:
            overrides["command"] = command
        if preserve_aspect_ratio is not None:
            overrides["preserve_aspect_ratio"] = preserve_aspect_ratio
        if no_timeout:
            overrides["timeout"] = None
        elif timeout is not None:
            overrides["timeout"] = timeout

        try:
            options = config.options(**overrides)
        except ValueError as e:
            raise ConfigurationError(f"Invalid option: {e}") from e

        encoded = asyncio.run(
            _transcode_async(
                input_file=input_file,
                output_file=output_file,
                output_options=parse_option_pairs(output_option),
                input_options=parse_option_pairs(input_option),
                config=config,
                options=options,
            )
        )

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Transcoding cancelled by user[/yellow]")
        sys.exit(130)
    except TranscodingError as e:
        console.print(Panel(e.message, title="[bold red]✗ Transcoding failed", border_style="red"))
        if verbose and e.output:
            console.print(e.output, markup=False, highlight=False)
        sys.exit(1)
    except TranscoderError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transcoded {input_file.name}")
    if encoded is not None:
        _print_metadata(encoded)


async def _transcode_async(
    input_file: Path,
    output_file: Optional[Path],
    output_options: EncodingOptions,
    input_options: EncodingOptions,
    config: TranscoderConfig,
    options: TranscodeOptions,
) -> Optional[MediaMetadata]:
    """
    Async implementation of the transcode workflow.
    """
    metadata_service = FFprobeMetadataService(config.ffmpeg.ffprobe_binary)
    source = await metadata_service.probe(input_file)

    transcoder = Transcoder(
        source,
        output_file,
        output_options,
        input_options,
        transcode_options=options,
        config=config.ffmpeg,
        metadata_service=metadata_service,
    )

    with RichProgressSink(input_file.name, console=console) as sink:
        return await transcoder.run(sink)


def _print_metadata(metadata: MediaMetadata) -> None:
    table = Table(show_header=True)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("File", str(metadata.path))
    table.add_row("Valid", "yes" if metadata.valid else "no")
    if metadata.duration is not None:
        table.add_row("Duration", format_duration(metadata.duration))
    if metadata.resolution:
        table.add_row("Resolution", metadata.resolution)
    if metadata.calculated_aspect_ratio:
        table.add_row("Aspect ratio", f"{metadata.calculated_aspect_ratio:.3f}")
    if metadata.video_codec:
        table.add_row("Video codec", metadata.video_codec)
    if metadata.audio_codec:
        table.add_row("Audio codec", metadata.audio_codec)
    table.add_row("Size", format_size(metadata.size))
    console.print(table)


@app.command("probe")
def probe_command(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Media file"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Custom configuration file"
    ),
) -> None:
    """
    Display metadata of a media file.
    """
    try:
        config = load_config(config_file)
        metadata = asyncio.run(FFprobeMetadataService(config.ffmpeg.ffprobe_binary).probe(input_file))
    except TranscoderError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    _print_metadata(metadata)
    if not metadata.valid:
        sys.exit(1)


@app.command("init-config")
def init_config_command(
    output: Path = typer.Argument(
        Path(".ffmpeg-supervisor.yaml"),
        help="Configuration file to create",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """
    Create a default configuration file.
    """
    try:
        path = ConfigManager().init_default_config(output, force=force)
    except ConfigurationError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Created config file: {path}")


@app.command("version")
def version_command() -> None:
    """
    Display version information.
    """
    from .. import __version__

    console.print(f"ffmpeg-supervisor {__version__}")


def main() -> None:
    """
    Main entry point for CLI.
    """
    app()


if __name__ == "__main__":
    main()

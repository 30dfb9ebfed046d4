"""UI components and progress display."""

from ffmpeg_supervisor.ui.progress import RichProgressSink

__all__ = ["RichProgressSink"]

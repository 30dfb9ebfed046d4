"""High-level transcoding interface."""

from ffmpeg_supervisor.transcoder.transcoder import Transcoder

__all__ = ["Transcoder"]

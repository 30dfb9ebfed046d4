"""Media metadata inspection."""

from ffmpeg_supervisor.inspector.analyzer import FFprobeMetadataService, MetadataService

__all__ = ["FFprobeMetadataService", "MetadataService"]

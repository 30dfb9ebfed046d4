"""
Mutable bookkeeping for one supervised run.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from ..models import MediaMetadata
from .watchdog import InactivityWatchdog


@dataclass
class RunState:
    """
    State of one in-flight run.

    Owned by the supervisor and written only from the task that reads the
    process output. Discarded once the run's outcome has been produced.
    """

    command: str
    watchdog: InactivityWatchdog
    progress: float = 0.0
    errors: list[str] = field(default_factory=list)
    process: Optional[asyncio.subprocess.Process] = None
    artifact: Optional[MediaMetadata] = None
    _chunks: list[str] = field(default_factory=list, repr=False)

    @property
    def output(self) -> str:
        """Full accumulated process output."""
        return "".join(self._chunks)

    def append_output(self, text: str) -> None:
        self._chunks.append(text)

    def add_error(self, note: str) -> None:
        """Record a human-readable error note."""
        self.errors.append(note)

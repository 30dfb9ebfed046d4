"""
Rich-based progress display for transcoding runs.
"""

import time
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


class RichProgressSink:
    """
    Progress sink rendering a Rich progress bar.

    Use as a context manager around the run and pass the instance as the
    progress sink. Reported values are recorded as received; only the bar
    is capped at 100%.
    """

    def __init__(self, description: str, console: Optional[Console] = None):
        """
        Initialize progress display.

        Args:
            description: Label shown next to the bar
            console: Rich console to render on (creates new if None)
        """
        self.description = description
        self.values: list[float] = []
        self.start_time: Optional[float] = None
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "RichProgressSink":
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=100.0)
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._progress.stop()

    def __call__(self, progress: float) -> None:
        self.values.append(progress)
        if self._task_id is not None:
            self._progress.update(self._task_id, completed=min(max(progress, 0.0), 1.0) * 100)

    @property
    def last(self) -> Optional[float]:
        """Last reported progress value."""
        return self.values[-1] if self.values else None

    @property
    def elapsed_time(self) -> float:
        """Seconds since the display started."""
        if self.start_time is None:
            return 0.0
        return time.time() - self.start_time

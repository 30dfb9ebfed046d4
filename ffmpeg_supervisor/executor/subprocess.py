"""
Async subprocess supervision for FFmpeg execution.

This module runs an FFmpeg command line, streams its stderr through the
progress parser, enforces an inactivity timeout and turns the way the
process ended into an Outcome.
"""

import asyncio
import os
import signal
from collections import deque
from typing import Callable, Optional

from ..models import Crashed, Hung, Outcome, Succeeded
from ..utils import format_diagnostic, get_logger
from .parser import ERROR_MARKER, ChunkResult, ChunkSplitter, ProgressParser, decode_chunk
from .state import RunState
from .watchdog import InactivityWatchdog

logger = get_logger(__name__)

ProgressSink = Callable[[float], None]


class _InactivityTimeout(Exception):
    """No stderr data arrived within the inactivity window."""


class StreamSupervisor:
    """
    Async supervisor for one FFmpeg process.

    Provides:
    - Shell execution of a prepared command line
    - Chunked stderr streaming split on the "size=" status delimiter
    - Progress reporting through a caller-supplied sink
    - Inactivity timeout that resets on every read
    - Early abort on the "Error while" marker
    - Graceful termination (SIGTERM, then SIGKILL)
    """

    def __init__(
        self,
        command: str,
        duration: Optional[float] = None,
        timeout: Optional[float] = None,
        progress_sink: Optional[ProgressSink] = None,
        kill_grace_period: float = 5.0,
        read_size: int = 4096,
    ):
        """
        Initialize supervisor.

        Args:
            command: Command line to run through the shell
            duration: Total source duration in seconds, used for progress
            timeout: Maximum gap between stderr reads in seconds (None = no timeout)
            progress_sink: Callback receiving progress fractions
            kill_grace_period: Seconds to wait after SIGTERM before SIGKILL
            read_size: Bytes requested per stderr read
        """
        self.command = command
        self.timeout = timeout
        self.progress_sink = progress_sink
        self.kill_grace_period = kill_grace_period
        self.read_size = read_size
        self.parser = ProgressParser(duration)
        self.state = RunState(command=command, watchdog=InactivityWatchdog(timeout))
        self._splitter = ChunkSplitter()
        self._ready: deque[bytes] = deque()

    async def run(self) -> Outcome:
        """
        Run the command and wait for it to finish.

        Returns:
            Succeeded on a clean exit, Hung on inactivity timeout,
            Crashed on the error marker or a non-zero exit status

        Raises:
            OSError: If the process cannot be spawned
            Exception: Anything raised by the progress sink
        """
        logger.info(f"Running transcoding...\n{self.command}")

        process = await asyncio.create_subprocess_shell(
            self.command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=hasattr(os, "killpg"),
        )
        self.state.process = process
        self.state.watchdog.touch()

        try:
            self._emit(0.0)
            outcome = await self._read_status()
        except _InactivityTimeout:
            self._drain()
            await self.terminate()
            return self._hung()
        except BaseException:
            self._drain()
            await self.terminate()
            raise

        if outcome is not None:
            await self.terminate()
            return outcome

        returncode = await process.wait()
        if returncode != 0:
            return self._crashed(f"process exited with code {returncode}", returncode)

        logger.debug(f"Process exited cleanly: {self.command}")
        return Succeeded(command=self.command, output=self.state.output)

    async def _read_status(self) -> Optional[Outcome]:
        """
        Stream stderr until EOF or the error marker.

        The marker is also looked for in the text following the last
        delimiter, so a process that reports an error and keeps running is
        stopped without waiting for its next status line.

        Returns:
            Crashed outcome if the error marker was seen, otherwise None

        Raises:
            _InactivityTimeout: If the inactivity timeout expires
        """
        process = self.state.process
        if process is None or process.stderr is None:
            raise RuntimeError("Process not started")

        marker = ERROR_MARKER.encode()
        while True:
            data = await self._read_block(process.stderr)
            if not data:
                break
            self.state.watchdog.touch()

            self._ready.extend(self._splitter.feed(data))
            while self._ready:
                if self._handle_chunk(self._ready.popleft()).is_error:
                    return self._marker_crash()
            if marker in self._splitter.pending:
                return self._marker_crash()

        tail = self._splitter.flush()
        if tail is not None and self._handle_chunk(tail).is_error:
            return self._marker_crash()
        return None

    async def _read_block(self, stream: asyncio.StreamReader) -> bytes:
        """
        Read the next block of stderr within the remaining inactivity window.

        Raises:
            _InactivityTimeout: If the window is used up before data arrives
        """
        remaining = self.state.watchdog.remaining()
        if remaining is None:
            return await stream.read(self.read_size)
        if remaining <= 0:
            raise _InactivityTimeout()
        try:
            return await asyncio.wait_for(stream.read(self.read_size), timeout=remaining)
        except asyncio.TimeoutError:
            raise _InactivityTimeout() from None

    def _record(self, data: bytes) -> str:
        chunk = decode_chunk(data)
        self.state.append_output(chunk)
        logger.debug(f"FFmpeg: {chunk.strip()}")
        return chunk

    def _handle_chunk(self, data: bytes) -> ChunkResult:
        """
        Record one status chunk and dispatch it to the parser.

        Progress chunks are forwarded to the sink; error chunks are left to
        the caller.
        """
        result = self.parser.parse(self._record(data))
        if result.has_progress:
            self._emit(result.progress)
        return result

    def _drain(self) -> None:
        """Record buffered output without parsing it."""
        while self._ready:
            self._record(self._ready.popleft())
        tail = self._splitter.flush()
        if tail is not None:
            self._record(tail)

    def _marker_crash(self) -> Crashed:
        self._drain()
        return self._crashed("error reported in process output")

    def _emit(self, progress: float) -> None:
        self.state.progress = progress
        if self.progress_sink is not None:
            self.progress_sink(progress)

    def _hung(self) -> Hung:
        diagnostic = f"no output for {self.timeout}s"
        logger.error(
            format_diagnostic(
                f"Process hung: {diagnostic}", self.command, self.state.output
            )
        )
        return Hung(
            command=self.command,
            output=self.state.output,
            diagnostic=diagnostic,
            timeout=self.timeout or 0.0,
        )

    def _crashed(self, diagnostic: str, returncode: Optional[int] = None) -> Crashed:
        logger.error(
            format_diagnostic(
                f"Error executing FFmpeg: {diagnostic}", self.command, self.state.output
            )
        )
        return Crashed(
            command=self.command,
            output=self.state.output,
            diagnostic=diagnostic,
            returncode=returncode,
        )

    async def terminate(self) -> None:
        """
        Terminate the process gracefully.

        Sends SIGTERM, waits for the grace period, then sends SIGKILL if needed.
        """
        process = self.state.process
        if process is None or process.returncode is not None:
            return

        logger.info("Terminating FFmpeg process...")
        try:
            self._signal(process, force=False)
        except ProcessLookupError:
            await process.wait()
            return

        try:
            await asyncio.wait_for(process.wait(), timeout=self.kill_grace_period)
            logger.info("Process terminated gracefully")
        except asyncio.TimeoutError:
            logger.warning("Forcing process termination...")
            try:
                self._signal(process, force=True)
            except ProcessLookupError:
                pass
            await process.wait()
            logger.info("Process killed")

    @staticmethod
    def _signal(process: asyncio.subprocess.Process, force: bool) -> None:
        # The shell runs in its own session; signal the whole group so that
        # FFmpeg and any pipeline members go down with it.
        if hasattr(os, "killpg"):
            os.killpg(process.pid, signal.SIGKILL if force else signal.SIGTERM)
        elif force:
            process.kill()
        else:
            process.terminate()

    @property
    def is_running(self) -> bool:
        """Check if process is currently running."""
        process = self.state.process
        return process is not None and process.returncode is None

    @property
    def returncode(self) -> Optional[int]:
        """Get process return code."""
        process = self.state.process
        return process.returncode if process else None

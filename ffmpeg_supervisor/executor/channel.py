"""
Queue-backed progress sink for consumers that pull values.
"""

import asyncio
from typing import AsyncIterator, Union

_CLOSED = object()


class ProgressChannel:
    """
    Progress sink that buffers values for asynchronous iteration.

    The supervisor pushes values by calling the channel; a consumer iterates
    it with ``async for`` until the channel is closed. Values arrive in the
    order they were pushed.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Union[float, object]] = asyncio.Queue()
        self._closed = False

    def __call__(self, progress: float) -> None:
        if self._closed:
            raise RuntimeError("Progress channel is closed")
        self._queue.put_nowait(progress)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Signal the end of the progress sequence."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[float]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

"""Async buffer for outbound messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from asyncio import Queue, QueueFull
from typing import Any, List


@dataclass
class StreamBuffer:
    """Bounded buffer based on :class:`asyncio.Queue`.

    Parameters
    ----------
    maxsize:
        Maximum number of messages to buffer. ``0`` means unbounded.
    """

    maxsize: int
    queue: Queue = field(init=False)

    def __post_init__(self) -> None:
        self.queue = Queue(maxsize=self.maxsize)

    async def put(self, item: Any) -> None:
        """Put a message into the buffer."""

        await self.queue.put(item)

    async def get(self) -> Any:
        """Retrieve a message from the buffer."""

        return await self.queue.get()

    def offer(self, item: Any) -> bool:
        """Put ``item`` without waiting; return ``False`` if it was dropped."""

        try:
            self.queue.put_nowait(item)
        except QueueFull:
            return False
        return True

    def drain(self) -> List[Any]:
        """Remove and return every message currently buffered."""

        items = []
        while not self.queue.empty():
            items.append(self.queue.get_nowait())
        return items

    def qsize(self) -> int:
        return self.queue.qsize()

"""Append-only observable log of recorded effects.

Each consumer reads through its own cursor, so several consumers can
observe the same stream without taking items away from each other.
"""

import asyncio
from typing import Generic, TypeVar

E = TypeVar("E")


class StreamClosedError(Exception):
    """Raised when reading past the end of a closed stream, or appending to one."""

    pass


class EffectStream(Generic[E]):
    """Append-only log that tests can pull from asynchronously.

    Items are kept in arrival order and never removed. Reading methods on
    the stream itself (``next``, ``pull``, ``take``, ``has_next``) share one
    default cursor; use :meth:`cursor` for an independent consumer.

    Args:
        name: Label used in error messages.
    """

    def __init__(self, name: str = "stream") -> None:
        self.name = name
        self._items: list[E] = []
        self._closed = False
        self._waiters: list[asyncio.Future] = []
        self._default_cursor: EffectCursor[E] | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def items(self) -> tuple[E, ...]:
        """Snapshot of every item recorded so far."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def append(self, item: E) -> None:
        """Record an item and wake any waiting consumers.

        Raises:
            StreamClosedError: If the stream was closed.
        """
        if self._closed:
            raise StreamClosedError(f"Cannot append to closed {self.name} stream")
        self._items.append(item)
        self._wake()

    def close(self) -> None:
        """Close the stream. Consumers drain what is left, then stop."""
        if self._closed:
            return
        self._closed = True
        self._wake()

    def cursor(self) -> "EffectCursor[E]":
        """Return a new cursor starting at the first recorded item."""
        return EffectCursor(self)

    @property
    def default_cursor(self) -> "EffectCursor[E]":
        if self._default_cursor is None:
            self._default_cursor = self.cursor()
        return self._default_cursor

    async def next(self, timeout: float | None = None) -> E:
        return await self.default_cursor.next(timeout)

    async def pull(self, timeout: float = 1.0) -> E | None:
        return await self.default_cursor.pull(timeout)

    async def take(self, count: int) -> list[E]:
        return await self.default_cursor.take(count)

    def has_next(self) -> bool:
        return self.default_cursor.has_next()

    def __aiter__(self) -> "EffectCursor[E]":
        return self.cursor()

    def _wake(self) -> None:
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(None)
        self._waiters.clear()

    async def _wait(self) -> None:
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        await waiter


class EffectCursor(Generic[E]):
    """Read position of one consumer in an EffectStream."""

    def __init__(self, stream: EffectStream[E]) -> None:
        self._stream = stream
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def has_next(self) -> bool:
        """Return True if an item is available without waiting."""
        return self._position < len(self._stream)

    async def next(self, timeout: float | None = None) -> E:
        """Wait for the next item.

        Args:
            timeout: Maximum seconds to wait. None means wait indefinitely.

        Raises:
            StreamClosedError: If the stream is closed and fully consumed.
            TimeoutError: If no item arrives within ``timeout``.
        """
        if timeout is None:
            return await self._next()
        return await asyncio.wait_for(self._next(), timeout)

    async def pull(self, timeout: float = 1.0) -> E | None:
        """Like :meth:`next`, but return None when the timeout expires."""
        try:
            return await self.next(timeout)
        except TimeoutError:
            return None

    async def take(self, count: int) -> list[E]:
        """Wait for and return the next ``count`` items."""
        return [await self._next() for _ in range(count)]

    async def _next(self) -> E:
        while not self.has_next():
            if self._stream.closed:
                raise StreamClosedError(f"No more items in closed {self._stream.name} stream")
            await self._stream._wait()
        item = self._stream._items[self._position]
        self._position += 1
        return item

    def __aiter__(self) -> "EffectCursor[E]":
        return self

    async def __anext__(self) -> E:
        try:
            return await self._next()
        except StreamClosedError:
            raise StopAsyncIteration

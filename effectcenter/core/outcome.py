"""Settle-once result cell backing every awaitable effect."""

import asyncio
from collections.abc import Generator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_PENDING = object()


class OutcomeAlreadySettledError(asyncio.InvalidStateError):
    """Raised when an outcome is settled a second time."""

    pass


class Outcome(Generic[T]):
    """Single-assignment result cell that can be awaited any number of times.

    An Outcome does not bind to an event loop when it is created, so effects
    can be constructed from synchronous code. The asyncio future used for
    waiting is created lazily on the loop of the first awaiter.
    """

    def __init__(self) -> None:
        self._value: Any = _PENDING
        self._error: BaseException | None = None
        self._waiter: asyncio.Future | None = None

    def done(self) -> bool:
        return self._value is not _PENDING or self._error is not None

    def settle(self, value: T) -> None:
        """Settle the outcome with a value.

        Raises:
            OutcomeAlreadySettledError: If the outcome was already settled.
        """
        self._check_pending()
        self._value = value
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(value)

    def settle_error(self, error: BaseException) -> None:
        """Settle the outcome with an error that awaiters will receive.

        Raises:
            OutcomeAlreadySettledError: If the outcome was already settled.
        """
        self._check_pending()
        self._error = error
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_exception(error)

    def result(self) -> T:
        """Return the settled value, re-raising a settled error.

        Raises:
            asyncio.InvalidStateError: If the outcome is still pending.
        """
        if self._error is not None:
            raise self._error
        if self._value is _PENDING:
            raise asyncio.InvalidStateError("Outcome is not settled yet")
        return self._value

    def exception(self) -> BaseException | None:
        if not self.done():
            raise asyncio.InvalidStateError("Outcome is not settled yet")
        return self._error

    def _check_pending(self) -> None:
        if self.done():
            raise OutcomeAlreadySettledError(f"Outcome was already settled: {self!r}")

    def _get_waiter(self) -> asyncio.Future:
        if self._waiter is None:
            self._waiter = asyncio.get_running_loop().create_future()
            if self._error is not None:
                self._waiter.set_exception(self._error)
            elif self._value is not _PENDING:
                self._waiter.set_result(self._value)
        return self._waiter

    def __await__(self) -> Generator[Any, None, T]:
        if self.done():
            return self.result()
        # shield keeps a cancelled awaiter from cancelling the shared waiter
        return (yield from asyncio.shield(self._get_waiter()).__await__())

    def __repr__(self) -> str:
        if self._error is not None:
            state = f"error={self._error!r}"
        elif self._value is not _PENDING:
            state = f"value={self._value!r}"
        else:
            state = "pending"
        return f"<Outcome {state}>"

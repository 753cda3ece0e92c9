"""
Reactive state primitives - observable value slots and shared streams.
Challenge: One writer, many readers; every new reader first sees the latest value.
Design: Readers park on asyncio futures and always resume on the newest value (conflation).
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import aclosing, suppress
from typing import Generic, TypeVar

from inventory.core.metrics import SHARED_STATE_SUBSCRIBERS, SHARED_STATE_UPSTREAM_STARTS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateFlow(Generic[T]):
    """Read-only observable value. Subscribers get the current value, then each change."""

    def __init__(self, initial: T):
        self._value = initial
        self._version = 0
        self._waiters: set[asyncio.Future] = set()

    @property
    def value(self) -> T:
        return self._value

    def _publish(self, value: T) -> None:
        """Replace the value and wake readers. Equal values are not re-published."""
        if value == self._value:
            return
        self._value = value
        self._version += 1
        waiters, self._waiters = self._waiters, set()
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    async def subscribe(self) -> AsyncGenerator[T, None]:
        """Yield the current value, then every newer one. Slow readers skip intermediate values."""
        seen: int | None = None
        while True:
            if seen != self._version:
                seen = self._version
                yield self._value
                continue
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.add(waiter)
            try:
                await waiter
            finally:
                self._waiters.discard(waiter)


class MutableStateFlow(StateFlow[T]):
    """StateFlow owned by a single writer. Assigning ``value`` publishes synchronously."""

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._publish(value)


class SharedState(StateFlow[T]):
    """
    StateFlow fed by an upstream stream while it has observers.

    The upstream starts with the first observer. When the last observer leaves it
    keeps running for ``stop_timeout`` seconds, so a quick re-attach (screen rotation)
    reuses it instead of re-querying the store. The latest value outlives the upstream.
    """

    def __init__(
        self,
        upstream: Callable[[], AsyncGenerator[T, None]],
        initial: T,
        *,
        stop_timeout: float,
        name: str = "state",
    ):
        super().__init__(initial)
        self._upstream = upstream
        self._stop_timeout = stop_timeout
        self._name = name
        self._observers = 0
        self._task: asyncio.Task | None = None
        self._stop_handle: asyncio.TimerHandle | None = None

    @property
    def is_active(self) -> bool:
        """True while the upstream is being collected."""
        return self._task is not None and not self._task.done()

    @property
    def observers(self) -> int:
        return self._observers

    async def subscribe(self) -> AsyncGenerator[T, None]:
        self._attach()
        try:
            async with aclosing(super().subscribe()) as values:
                async for value in values:
                    yield value
        finally:
            self._detach()

    async def aclose(self) -> None:
        """Stop the upstream now, skipping the grace period. Owner calls this on teardown."""
        if self._stop_handle is not None:
            self._stop_handle.cancel()
            self._stop_handle = None
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    def _attach(self) -> None:
        self._observers += 1
        SHARED_STATE_SUBSCRIBERS.labels(state=self._name).inc()
        if self._stop_handle is not None:
            self._stop_handle.cancel()
            self._stop_handle = None
        if self._task is None or self._task.done():
            SHARED_STATE_UPSTREAM_STARTS.labels(state=self._name).inc()
            logger.debug("%s: starting upstream", self._name)
            self._task = asyncio.get_running_loop().create_task(self._collect())

    def _detach(self) -> None:
        self._observers -= 1
        SHARED_STATE_SUBSCRIBERS.labels(state=self._name).dec()
        if self._observers > 0 or self._task is None:
            return
        if self._stop_timeout <= 0:
            self._stop()
        else:
            self._stop_handle = self._task.get_loop().call_later(self._stop_timeout, self._stop)

    def _stop(self) -> None:
        self._stop_handle = None
        if self._task is not None:
            logger.debug("%s: no observers left, stopping upstream", self._name)
            self._task.cancel()
            self._task = None

    async def _collect(self) -> None:
        try:
            async with aclosing(self._upstream()) as values:
                async for value in values:
                    self._publish(value)
        except Exception:
            # Keep the last good value; the next observer restarts the upstream
            logger.exception("%s: upstream failed", self._name)


async def first(stream: AsyncGenerator[T, None], predicate: Callable[[T], bool] | None = None) -> T:
    """Return the first value of ``stream`` (matching ``predicate``) and close the stream."""
    async with aclosing(stream) as values:
        async for value in values:
            if predicate is None or predicate(value):
                return value
    raise LookupError("Stream completed without a matching value")

"""
Recurring timers keyed by an activation epoch.

Every timer scheduled through a TimerGroup remembers the epoch it was
scheduled in. Cancelling the group advances the epoch, so a callback that
was already queued on the loop wakes up stale and does nothing.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..utils.logger import get_logger

logger = get_logger("saver.timers")

Delay = Union[float, Callable[[], float]]


class Scheduler(ABC):
    """Minimal single-threaded scheduling surface the screensaver needs."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """Queue callback after delay seconds; return a handle with cancel()."""

    @abstractmethod
    def spawn(self, coro: Awaitable[Any]) -> "asyncio.Future[Any]":
        """Run coro as a task on the same loop."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)

    def spawn(self, coro: Awaitable[Any]) -> "asyncio.Future[Any]":
        return asyncio.ensure_future(coro, loop=self.loop)


class TimerGroup:
    """
    A set of named recurring timers sharing one activation epoch.

    Attributes:
        epoch: Incremented on every cancel_all(); callbacks from an older
            epoch are inert
    """

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self.epoch = 0
        self._handles: Dict[str, Any] = {}

    @property
    def active(self) -> List[str]:
        """Names of timers with a firing currently queued."""
        return sorted(self._handles)

    def schedule_recurring(
        self,
        name: str,
        first_delay: float,
        callback: Callable[[], None],
        next_delay: Delay,
    ) -> None:
        """
        Fire callback after first_delay, then again after each next_delay.

        Args:
            name: Timer name, unique within the group
            first_delay: Seconds until the first firing
            callback: Called on every firing
            next_delay: Seconds between firings, or a callable computing it
                after each firing
        """
        if name in self._handles:
            self._handles.pop(name).cancel()
        self._queue(name, first_delay, callback, next_delay, self.epoch)
        logger.debug(f"Timer '{name}' scheduled in {first_delay:.3f}s (epoch {self.epoch})")

    def _queue(
        self, name: str, delay: float, callback: Callable[[], None], next_delay: Delay, epoch: int
    ) -> None:
        self._handles[name] = self.scheduler.call_later(
            delay, lambda: self._fire(name, callback, next_delay, epoch)
        )

    def _fire(self, name: str, callback: Callable[[], None], next_delay: Delay, epoch: int) -> None:
        if epoch != self.epoch:
            logger.debug(f"Stale timer '{name}' from epoch {epoch} ignored")
            return

        self._handles.pop(name, None)
        try:
            callback()
        except Exception as e:
            logger.error(f"Timer '{name}' callback failed: {e}", exc_info=True)

        # The callback may have cancelled the group or rescheduled this timer
        if epoch != self.epoch or name in self._handles:
            return

        delay = next_delay() if callable(next_delay) else next_delay
        self._queue(name, delay, callback, next_delay, epoch)

    def cancel_all(self) -> int:
        """
        Cancel every queued firing and start a new epoch.

        Safe to call repeatedly.

        Returns:
            The new epoch
        """
        for handle in self._handles.values():
            handle.cancel()
        if self._handles:
            logger.debug(f"Cancelled timers: {', '.join(self.active)}")
        self._handles.clear()
        self.epoch += 1
        return self.epoch

"""Delay sources for the second phase of a move.

The controller never measures time itself. It hands a callback to a
Scheduler, which calls it once the delay has elapsed.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable


class Scheduler(ABC):
    """Abstract base class for delay sources."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Call callback once after delay seconds.

        Args:
            delay: Delay in seconds
            callback: Function to call when the delay has elapsed
        """
        pass


class ManualScheduler(Scheduler):
    """Queues callbacks until run_pending() is called.

    Lets tests and embedding hosts drive the delay synchronously.
    """

    def __init__(self) -> None:
        self._pending: list[tuple[float, Callable[[], None]]] = []

    @property
    def pending(self) -> int:
        """Get number of queued callbacks."""
        return len(self._pending)

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append((delay, callback))

    def run_pending(self) -> int:
        """Run all queued callbacks in order.

        Callbacks scheduled while running are run too.

        Returns:
            Number of callbacks run
        """
        count = 0
        while self._pending:
            _, callback = self._pending.pop(0)
            callback()
            count += 1
        return count


class BlockingScheduler(Scheduler):
    """Sleeps for the delay, then calls back. For single-threaded hosts."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        if delay > 0:
            self._sleep(delay)
        callback()

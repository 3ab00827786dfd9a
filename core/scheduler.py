"""Deferred transitions for feedback delays.

Callbacks run on the caller's thread: the virtual scheduler when a test
advances time, the wall-clock scheduler when the owner polls it.
"""

import heapq
import itertools
import time
from abc import abstractmethod
from typing import Callable

from .interfaces import Scheduler


class _QueueScheduler(Scheduler):
    """Priority queue of (due_ms, seq, callback) shared by both clocks."""

    def __init__(self):
        self._queue = []
        self._seq = itertools.count()

    @abstractmethod
    def now_ms(self) -> float:
        """Current time in milliseconds on this scheduler's clock."""
        pass

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> None:
        due = self.now_ms() + max(0, delay_ms)
        heapq.heappush(self._queue, (due, next(self._seq), callback))

    def run_due(self) -> int:
        """Fire every callback that is due by now."""
        return self._run_until(self.now_ms())

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _run_until(self, deadline_ms: float) -> int:
        """Run every callback due at or before the deadline, in due order."""
        ran = 0
        while self._queue and self._queue[0][0] <= deadline_ms:
            _, _, callback = heapq.heappop(self._queue)
            callback()
            ran += 1
        return ran


class VirtualScheduler(_QueueScheduler):
    """Manually advanced clock for tests."""

    def __init__(self):
        super().__init__()
        self._now = 0.0

    def now_ms(self) -> float:
        return self._now

    def advance(self, delay_ms: float) -> int:
        """Move time forward and fire whatever came due. Returns callbacks run."""
        deadline = self._now + delay_ms
        ran = 0
        # Callbacks may schedule more work that is also due before the deadline
        while self._queue and self._queue[0][0] <= deadline:
            self._now = self._queue[0][0]
            ran += self._run_until(self._now)
        self._now = deadline
        return ran

    def run_all(self) -> int:
        """Fire everything queued, however far in the future."""
        ran = 0
        while self._queue:
            self._now = max(self._now, self._queue[0][0])
            ran += self._run_until(self._now)
        return ran


class WallClockScheduler(_QueueScheduler):
    """Real-time clock. Due callbacks fire when the owner calls run_due()."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._clock = clock

    def now_ms(self) -> float:
        return self._clock() * 1000

"""A callback that runs at most once per time slot until it finishes."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import Enum


class TaskStatus(Enum):
    KEEP_RUNNING = 0
    FINISHED = 1


def _finished() -> TaskStatus:
    return TaskStatus.FINISHED


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TimeCycledTask:
    """Call a function at most once per cycle of ``cycle_ms`` milliseconds.

    ``clock`` returns the current time in milliseconds.
    """

    def __init__(
        self,
        cycle_ms: int = 1,
        callback: Callable[[], TaskStatus] = _finished,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self._cycle_ms = max(1, int(cycle_ms))
        self._callback = callback
        self._clock = clock
        self._current_id = 0
        self._status = TaskStatus.KEEP_RUNNING
        self._started = clock()

    @property
    def last_task_status(self) -> TaskStatus:
        return self._status

    @property
    def is_finished(self) -> bool:
        return self._status is TaskStatus.FINISHED

    def run(self) -> TaskStatus:
        """Call the function if a new cycle has begun; return the latest status."""
        cycle_id = int((self._clock() - self._started) // self._cycle_ms)
        if self._status is TaskStatus.FINISHED or cycle_id == self._current_id:
            return self._status
        self._current_id = cycle_id
        self._status = self._callback()
        return self._status

    def reset(self) -> None:
        """Restart the clock and allow the function to run again."""
        self._current_id = 0
        self._status = TaskStatus.KEEP_RUNNING
        self._started = self._clock()

    def set_finished(self) -> None:
        self._status = TaskStatus.FINISHED
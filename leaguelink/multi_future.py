"""A list of futures that can be waited on and collected together."""

from __future__ import annotations

import concurrent.futures
from concurrent.futures import Future
from typing import Any


class MultiFuture(list):
    """A list of futures, usually one per submitted task or block."""

    def get(self) -> list[Any]:
        """Wait for every future and return the results in order.

        The first stored exception, in list order, is raised.
        """
        return [future.result() for future in self]

    def ready_count(self) -> int:
        """Number of futures that have already finished."""
        return sum(1 for future in self if future.done())

    def valid(self) -> bool:
        """True if every element is a future that has not been cancelled."""
        return all(
            isinstance(future, Future) and not future.cancelled() for future in self
        )

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for all futures, for at most ``timeout`` seconds in total.

        Returns True if every future finished before the time ran out.
        """
        if not self:
            return True
        _, not_done = concurrent.futures.wait(
            self, timeout=timeout, return_when=concurrent.futures.ALL_COMPLETED
        )
        return not not_done
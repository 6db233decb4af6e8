"""Background loops on a shared worker pool, plus a simple data broadcaster."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Generic, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

_POOL_SIZE = 6
_CLEANUP_INTERVAL = 2.0


class ThreadTaskStatus(Enum):
    RUNNING_FINISHED = 0
    CONTINUE_RUNNING = 1


def _nothing() -> None:
    return None


class ThreadHandler:
    """Runs repeating tasks on a worker pool until they finish or the handler stops."""

    def __init__(self) -> None:
        self._running = True
        self._cleanup_finished = False
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._tasks: list[Future] = []
        self._pool = ThreadPoolExecutor(max_workers=_POOL_SIZE)
        self._cleanup = self._pool.submit(self._cleanup_loop)

    @property
    def is_running_allowed(self) -> bool:
        return self._running

    @property
    def is_cleanup_finished(self) -> bool:
        return self._cleanup_finished

    def _cleanup_loop(self) -> None:
        while not self._stop.wait(_CLEANUP_INTERVAL):
            with self._lock:
                remaining = []
                for task in self._tasks:
                    if not task.done():
                        remaining.append(task)
                    elif task.exception() is not None:
                        log.error("Background task failed: %r", task.exception())
                self._tasks = remaining

    def append_as_thread(
        self,
        function: Callable[[], ThreadTaskStatus],
        sleep_ms: int,
        on_finished: Callable[[], None] = _nothing,
    ) -> Future:
        """Call ``function`` every ``sleep_ms`` milliseconds until it reports it is done.

        ``on_finished`` runs once the loop ends normally. An exception from
        ``function`` is logged and stored in the returned future.
        """

        def loop() -> None:
            try:
                while True:
                    keep_going = function() is ThreadTaskStatus.CONTINUE_RUNNING
                    self._stop.wait(sleep_ms / 1000.0)
                    if not (self._running and keep_going):
                        break
                on_finished()
            except Exception:
                log.exception(
                    "Exception in background task (sleep time %d ms)", sleep_ms
                )
                raise

        future = self._pool.submit(loop)
        with self._lock:
            self._tasks.append(future)
        return future

    def create_async_task(self, function: Callable[[], T]) -> Future:
        """Run ``function`` once on a thread of its own and return its future."""
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = function()
            except BaseException as error:
                future.set_exception(error)
            else:
                future.set_result(result)

        threading.Thread(target=run, daemon=True).start()
        return future

    def stop_all_threads(self) -> None:
        """Ask every loop to stop and end the cleanup task."""
        self._running = False
        self._stop.set()
        self._cleanup.result()
        with self._lock:
            self._tasks.clear()
        self._pool.shutdown(wait=False)
        self._cleanup_finished = True

    def __enter__(self) -> ThreadHandler:
        return self

    def __exit__(self, *args: object) -> None:
        if not self._cleanup_finished:
            self.stop_all_threads()


_instance: ThreadHandler | None = None
_instance_lock = threading.Lock()


def get_instance() -> ThreadHandler:
    """The shared handler, created on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = ThreadHandler()
        return _instance


def shutdown_instance() -> None:
    """Stop the shared handler and forget it."""
    global _instance
    with _instance_lock:
        handler, _instance = _instance, None
    if handler is not None and not handler.is_cleanup_finished:
        handler.stop_all_threads()


class DataListener(Generic[T]):
    """Hands each piece of data to every registered listener, in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[Callable[[T], None]] = []

    def provide(self, data: T) -> None:
        with self._lock:
            for listener in list(self._listeners):
                listener(data)

    def add_listener(self, listener: Callable[[T], None]) -> None:
        with self._lock:
            self._listeners.append(listener)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()
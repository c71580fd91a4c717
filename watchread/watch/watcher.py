"""
Single-file watcher with a latched change signal.

A :class:`FileWatcher` owns one change source (native or polling) and turns
its events into a "change pending" flag guarded by a condition variable.
Consumers block on :meth:`FileWatcher.wait_for_change`; a change that fires
while nobody is waiting stays latched until the next wait consumes it.
Bursts coalesce into one pending signal.

Example:
    watcher = FileWatcher()
    watcher.start(Path("in.txt"))
    if watcher.wait_for_change(timeout=1.0):
        print("in.txt was written")
    watcher.stop()
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from watchread.logging_config import get_logger
from watchread.watch import sources
from watchread.watch.sources import ChangeSource

logger = get_logger(__name__)


class WorkerState(Enum):
    """Lifecycle of the watcher's worker."""
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class FileWatcher:
    """
    Watches one file and exposes blocking waits for its changes.

    Thread-safe: ``start``/``stop`` are serialized, and the pending flag is
    only touched under the condition's lock.

    Args:
        prefer_native: Use native change notification when available.
            When False the adaptive polling source is always used.
    """

    def __init__(self, prefer_native: bool = True):
        self.prefer_native = prefer_native
        self.path: Path | None = None

        self._lifecycle_lock = threading.RLock()
        self._cond = threading.Condition(threading.Lock())
        self._pending = False
        self._running = False
        self._generation = 0
        self._state = WorkerState.STOPPED
        self._source: ChangeSource | None = None
        self._on_change: Callable[[Path], None] | None = None

    @staticmethod
    def has_native_support() -> bool:
        """Whether native change notification exists on this platform."""
        return sources.has_native_support()

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is WorkerState.RUNNING

    @property
    def native_active(self) -> bool:
        """True while the running source is event based."""
        source = self._source
        return bool(source is not None and source.native)

    def start(
        self,
        path: Path | str,
        on_change: Callable[[Path], None] | None = None,
    ) -> bool:
        """
        Start watching ``path``.

        If already running, the previous worker is stopped first.

        Args:
            path: File to watch; it does not need to exist yet
            on_change: Optional callback run on the worker for each change

        Returns:
            True if a native or polling source was armed, False if no
            worker could be spawned at all
        """
        with self._lifecycle_lock:
            if self._state is not WorkerState.STOPPED:
                self.stop()

            self._state = WorkerState.STARTING
            self.path = Path(path)
            self._on_change = on_change
            with self._cond:
                self._generation += 1
                generation = self._generation
                self._pending = False
                self._running = True

            try:
                self._source = sources.create_change_source(
                    self.path,
                    lambda: self._signal(generation),
                    prefer_native=self.prefer_native,
                )
            except RuntimeError as e:
                logger.error("watcher_spawn_failed", path=str(self.path), error=str(e))
                with self._cond:
                    self._running = False
                    self._cond.notify_all()
                self._state = WorkerState.STOPPED
                return False

            self._state = WorkerState.RUNNING

        logger.debug(
            "watcher_started",
            path=str(self.path),
            mode="native" if self._source.native else "polling",
        )
        return True

    def stop(self) -> None:
        """Stop the worker and wake any waiters. Safe to call repeatedly."""
        with self._lifecycle_lock:
            if self._state is WorkerState.STOPPED:
                return
            self._state = WorkerState.STOPPING

            with self._cond:
                self._running = False
                self._cond.notify_all()

            source, self._source = self._source, None
            if source is not None:
                source.stop()

            self._state = WorkerState.STOPPED

        logger.debug("watcher_stopped", path=str(self.path))

    def _signal(self, generation: int) -> None:
        with self._cond:
            # Late event from a source replaced by a restart
            if generation != self._generation or not self._running:
                return
            self._pending = True
            self._cond.notify_all()

        callback = self._on_change
        if callback is not None:
            try:
                callback(self.path)
            except Exception as e:
                logger.error("watcher_callback_failed", path=str(self.path), error=str(e))

    def wait_for_change(self, timeout: float | None = None) -> bool:
        """
        Block until a change is pending or ``timeout`` seconds elapse.

        On success the pending flag is cleared (one signal consumed). With
        ``timeout=None`` the call also returns False once the watcher is
        stopped, so no caller is left blocked after shutdown. A bounded wait
        always lasts until a change or its timeout.

        Returns:
            True if a change was consumed, False otherwise
        """
        with self._cond:
            if timeout is None:
                self._cond.wait_for(lambda: self._pending or not self._running)
            else:
                self._cond.wait_for(lambda: self._pending, timeout=max(0.0, timeout))
            if self._pending:
                self._pending = False
                return True
            return False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

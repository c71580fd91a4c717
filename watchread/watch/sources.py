"""
Change sources for a single watched file.

A change source turns "the file at this path was written" into calls of an
``on_change()`` callback, made from the source's own worker thread.

Two implementations share the :class:`ChangeSource` interface:

- :class:`NativeChangeSource` uses the platform notification facility through
  watchdog (inotify, FSEvents, kqueue, ReadDirectoryChangesW). It watches the
  parent directory and filters by filename, so the file may not exist yet.
- :class:`PollingChangeSource` stats the file on an adaptive schedule
  (see :mod:`watchread.watch.backoff`). It is always available.

:func:`create_change_source` picks one at startup and degrades to polling when
the native facility cannot be set up.

Example:
    from watchread.watch.sources import create_change_source

    source = create_change_source(Path("in.txt"), lambda: print("changed"))
    ...
    source.stop()
"""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from watchread.core.io import file_fingerprint
from watchread.logging_config import get_logger
from watchread.watch.backoff import BackoffSchedule

logger = get_logger(__name__)

OBSERVER_JOIN_TIMEOUT = 2.0


def has_native_support() -> bool:
    """Whether this platform has an event-based (non-polling) observer."""
    return not issubclass(Observer, PollingObserver)


class ChangeSource(ABC):
    """Produces change events for one file until stopped."""

    native: bool = False

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @abstractmethod
    def start(self, on_change: Callable[[], None]) -> None:
        """Arm the source and spawn its worker.

        Raises:
            OSError: the backing facility could not be set up
            RuntimeError: no worker thread could be spawned
        """

    @abstractmethod
    def stop(self) -> None:
        """Release resources and join the worker. Safe to call twice."""


class _TargetFileHandler(FileSystemEventHandler):
    """Forwards write/create/move-in events whose filename is the target's."""

    _WRITE_EVENTS = {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_CLOSED}

    def __init__(self, name: str, on_change: Callable[[], None]):
        super().__init__()
        self._name = name
        self._on_change = on_change

    def _matches(self, raw_path: str | bytes) -> bool:
        return os.path.basename(os.fsdecode(raw_path)) == self._name

    def on_any_event(self, event: FileSystemEvent):
        if event.is_directory:
            return
        if event.event_type in self._WRITE_EVENTS:
            hit = self._matches(event.src_path)
        elif event.event_type == EVENT_TYPE_MOVED:
            hit = self._matches(event.dest_path)
        else:
            return
        if hit:
            logger.debug("native_change", event_type=event.event_type, name=self._name)
            self._on_change()


class NativeChangeSource(ChangeSource):
    """watchdog observer scheduled on the target's parent directory."""

    native = True

    def __init__(self, path: Path | str):
        super().__init__(path)
        self._observer = None
        self._lock = threading.Lock()

    def start(self, on_change: Callable[[], None]) -> None:
        directory = self.path.absolute().parent
        handler = _TargetFileHandler(self.path.name, on_change)

        observer = Observer()
        observer.schedule(handler, str(directory), recursive=False)
        try:
            observer.start()
        except (OSError, RuntimeError):
            observer.unschedule_all()
            raise

        with self._lock:
            self._observer = observer
        logger.debug("native_source_started", path=str(self.path), directory=str(directory))

    def stop(self) -> None:
        with self._lock:
            observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        # Callbacks run on the observer thread, which cannot join itself
        if observer is not threading.current_thread() and observer.is_alive():
            observer.join(timeout=OBSERVER_JOIN_TIMEOUT)
        logger.debug("native_source_stopped", path=str(self.path))


class PollingChangeSource(ChangeSource):
    """Compares the file's (mtime, size) against the last observed value."""

    native = False

    def __init__(self, path: Path | str, schedule: BackoffSchedule | None = None):
        super().__init__(path)
        self.schedule = schedule or BackoffSchedule()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._last = None

    def start(self, on_change: Callable[[], None]) -> None:
        if self._thread and self._thread.is_alive():
            return

        self._stop.clear()
        self.schedule.reset()
        self._last = file_fingerprint(self.path)

        def _run() -> None:
            interval = self.schedule.interval
            while not self._stop.wait(interval):
                if self.poll_once():
                    interval = self.schedule.record_change()
                    on_change()
                else:
                    interval = self.schedule.record_idle()

        thread = threading.Thread(
            target=_run, name=f"watchread-poll:{self.path.name}", daemon=True
        )
        thread.start()
        self._thread = thread
        logger.debug("polling_source_started", path=str(self.path))

    def poll_once(self) -> bool:
        """Stat the file once; True when it was written or (re)created."""
        current = file_fingerprint(self.path)
        changed = current is not None and current != self._last
        self._last = current
        return changed

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=OBSERVER_JOIN_TIMEOUT)
            logger.debug("polling_source_stopped", path=str(self.path))


def create_change_source(
    path: Path | str,
    on_change: Callable[[], None],
    prefer_native: bool = True,
) -> ChangeSource:
    """Create and start the best available change source for ``path``.

    Native notification is tried first when supported and preferred; if its
    setup fails (missing directory, watch limit reached, permissions) the
    polling source is used instead.

    Raises:
        RuntimeError: not even the polling worker could be spawned
    """
    path = Path(path)

    if prefer_native and has_native_support():
        native = NativeChangeSource(path)
        try:
            native.start(on_change)
            return native
        except (OSError, RuntimeError) as e:
            logger.warning(
                "native_watch_unavailable", path=str(path), error=str(e), fallback="polling"
            )

    poller = PollingChangeSource(path)
    poller.start(on_change)
    return poller

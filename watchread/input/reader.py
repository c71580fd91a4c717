"""
Typed input read from a watched text file.

An :class:`InputReader` offers four ways to get the next value from its file:

- :meth:`InputReader.try_read`: immediate check, cheap enough for a per-frame loop
- :meth:`InputReader.read_with_timeout`: bounded wait
- :meth:`InputReader.read`: block until a value appears
- :meth:`InputReader.read_async`: future/callback style, on a separate thread

The blocking and async variants share one read-until-success loop:
read once on entry, then re-check on every detected change (or at least
every :data:`RECHECK_INTERVAL` seconds) until a line parses.

Example:
    reader = InputReader(Path("in.txt"), int)

    value = reader.try_read()            # None if nothing yet
    value = reader.read_with_timeout(5)  # None on timeout

    future = reader.read_async()
    print(future.result())

    reader.read_async(callback=lambda v: print("got", v))
    reader.join()
    reader.close()
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Generic, TypeVar

from watchread.core.io import ensure_input_file, file_fingerprint
from watchread.errors import ReaderClosedError
from watchread.input.debounce import DebounceCache
from watchread.input.parser import describe_type, first_value
from watchread.logging_config import get_logger
from watchread.watch.watcher import FileWatcher

logger = get_logger(__name__)

T = TypeVar("T")

# Upper bound between two re-checks, independent of the watcher's own schedule
RECHECK_INTERVAL = 0.1


class InputReader(Generic[T]):
    """
    Reads typed scalar values from one input file.

    The debounce cache used by :meth:`try_read` and :meth:`read_with_timeout`
    is private to this reader; call those two from one thread at a time.
    Async reads never touch it.

    Args:
        path: Input file
        value_type: Converter for a line's leading token (int, float, str, ...)
        event_driven: Prefer native change notification over polling
        opener: Function used to open the file (``open`` signature)
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        path: Path | str,
        value_type: Callable[[str], T] = int,
        *,
        event_driven: bool = True,
        opener: Callable[..., Any] = open,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.path = Path(path)
        self.value_type = value_type
        self.event_driven = event_driven
        self._opener = opener
        self._clock = clock
        self._cache = DebounceCache()
        self._closed = threading.Event()
        self._pending_lock = threading.Lock()
        self._pending: set[Future] = set()

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _scan(self, value_type: Callable[[str], T]) -> T | None:
        """Open and parse the file; raises OSError if it cannot be opened."""
        with self._opener(self.path, "r", encoding="utf-8", errors="replace") as fh:
            return first_value(fh, value_type)

    def _scan_quietly(self, value_type: Callable[[str], T]) -> T | None:
        try:
            return self._scan(value_type)
        except OSError:
            return None

    def _new_watcher(self) -> FileWatcher:
        watcher = FileWatcher(prefer_native=self.event_driven)
        if not watcher.start(self.path):
            logger.warning("watcher_unavailable", path=str(self.path), fallback="recheck_interval")
        return watcher

    def _check_alive(self) -> None:
        if self._closed.is_set():
            raise ReaderClosedError(self.path)

    # ------------------------------------------------------------------
    # Immediate check
    # ------------------------------------------------------------------

    def try_read(self, value_type: Callable[[str], T] | None = None) -> T | None:
        """
        Return a value if the file holds one right now, else None.

        Back-to-back calls within the debounce window on an unchanged file
        return None without opening it. The file is never created here.
        """
        value_type = value_type or self.value_type
        now = self._clock()
        mtime = file_fingerprint(self.path)

        if self._cache.is_hit(now, mtime):
            return None

        try:
            value = self._scan(value_type)
        except OSError:
            self._cache.record(now, mtime, existed=False)
            return None

        self._cache.record(now, mtime, existed=True)
        return value

    # ------------------------------------------------------------------
    # Bounded wait
    # ------------------------------------------------------------------

    def read_with_timeout(
        self,
        timeout: float,
        value_type: Callable[[str], T] | None = None,
    ) -> T | None:
        """
        Wait up to ``timeout`` seconds for a value.

        The timeout is approximate: it may overshoot by up to
        :data:`RECHECK_INTERVAL`. A read already in progress is never
        interrupted.

        Returns:
            The value, or None if the deadline passed first

        Raises:
            ReaderClosedError: the reader was closed while waiting
        """
        value_type = value_type or self.value_type
        deadline = self._clock() + max(0.0, timeout)

        logger.info("input_waiting", path=str(self.path), timeout_ms=int(timeout * 1000))
        watcher = self._new_watcher()
        try:
            while True:
                value = self.try_read(value_type)
                if value is not None:
                    logger.info("input_read", path=str(self.path), value=value)
                    return value

                remaining = deadline - self._clock()
                if remaining <= 0:
                    logger.info("input_timeout", path=str(self.path))
                    return None

                if watcher.wait_for_change(min(remaining, RECHECK_INTERVAL)):
                    logger.info("input_file_updated", path=str(self.path))
                self._check_alive()
        finally:
            watcher.stop()

    # ------------------------------------------------------------------
    # Blocking read
    # ------------------------------------------------------------------

    def _read_until_found(self, value_type: Callable[[str], T]) -> T:
        try:
            ensure_input_file(self.path)
        except OSError as e:
            # Unreachable targets behave like a file that never holds a value
            logger.warning("input_create_failed", path=str(self.path), error=str(e))
        logger.info("input_waiting", path=str(self.path), type=describe_type(value_type))

        watcher = self._new_watcher()
        try:
            while True:
                self._check_alive()
                value = self._scan_quietly(value_type)
                if value is not None:
                    logger.info("input_read", path=str(self.path), value=value)
                    return value

                if watcher.wait_for_change(RECHECK_INTERVAL):
                    logger.info("input_file_updated", path=str(self.path))
        finally:
            watcher.stop()

    def read(self, value_type: Callable[[str], T] | None = None) -> T:
        """
        Block until the file holds a value and return it.

        Creates the file with a placeholder comment if it is missing. A file
        that cannot be created is waited on like one without a value.

        Raises:
            ReaderClosedError: the reader was closed while waiting
        """
        return self._read_until_found(value_type or self.value_type)

    # ------------------------------------------------------------------
    # Async reads
    # ------------------------------------------------------------------

    def read_async(
        self,
        callback: Callable[[T], None] | None = None,
        value_type: Callable[[str], T] | None = None,
    ) -> Future:
        """
        Start a blocking read on its own thread.

        The thread owns its own watcher. It cannot be cancelled once started;
        :meth:`close` makes it finish with :class:`ReaderClosedError`.

        Args:
            callback: Called with the value on the reading thread
            value_type: Override the reader's value type

        Returns:
            Future resolved with the value (after ``callback`` ran)
        """
        value_type = value_type or self.value_type
        future: Future = Future()
        future.set_running_or_notify_cancel()

        def _run() -> None:
            try:
                value = self._read_until_found(value_type)
                if callback is not None:
                    callback(value)
            except Exception as e:
                self._forget(future)
                future.set_exception(e)
            else:
                self._forget(future)
                future.set_result(value)

        with self._pending_lock:
            self._pending.add(future)
        try:
            threading.Thread(
                target=_run, name=f"watchread-read:{self.path.name}", daemon=True
            ).start()
        except RuntimeError:
            self._forget(future)
            raise
        return future

    def _forget(self, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    async def aread(self, value_type: Callable[[str], T] | None = None) -> T:
        """Await a value from asyncio code."""
        return await asyncio.wrap_future(self.read_async(value_type=value_type))

    def pending(self) -> int:
        """Number of async reads still running."""
        with self._pending_lock:
            return len(self._pending)

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for outstanding async reads.

        Returns:
            True if none are left running
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._pending_lock:
                futures = list(self._pending)
            if not futures:
                return True
            for future in futures:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return self.pending() == 0
                try:
                    future.exception(timeout=remaining)
                except concurrent.futures.TimeoutError:
                    return self.pending() == 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def reset(self) -> None:
        """Forget cached modification-time and timestamp state."""
        self._cache.reset()

    def close(self, timeout: float | None = None) -> bool:
        """
        Stop outstanding read loops and wait for them to finish.

        Returns:
            True if every async read has finished
        """
        self._closed.set()
        return self.join(timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

"""
Append-only output files with memoised handles.

Each path is opened once (append mode, UTF-8) and kept open until
:meth:`OutputCache.close_all`. A single lock serialises all writes so a
message never interleaves with another writer's.

Example:
    out = OutputCache()
    out.write(Path("log.txt"), "x=10, y=20\n")

    with out.locked(Path("debug.txt")) as fh:
        fh.write("part one, ")
        fh.write("part two\n")

    out.close_all()
"""

from __future__ import annotations

import io
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from watchread.errors import OutputOpenError
from watchread.logging_config import get_logger

logger = get_logger(__name__)


class OutputCache:
    """
    Thread-safe cache of open output handles.

    Args:
        silent: On open failure, log a warning and discard the write
            instead of raising :class:`OutputOpenError`.
    """

    def __init__(self, silent: bool = True):
        self._handles: dict[Path, TextIO] = {}
        self._lock = threading.Lock()
        self._silent = silent

    @property
    def silent(self) -> bool:
        with self._lock:
            return self._silent

    @silent.setter
    def silent(self, value: bool) -> None:
        with self._lock:
            self._silent = bool(value)

    def _open(self, path: Path) -> TextIO:
        handle = self._handles.get(path)
        if handle is not None and not handle.closed:
            return handle

        try:
            handle = open(path, "a", encoding="utf-8")  # noqa: SIM115
        except OSError as e:
            if not self._silent:
                raise OutputOpenError(path, str(e)) from e
            logger.warning("output_open_failed", path=str(path), error=str(e))
            # Writes to an unopenable path are dropped
            return io.StringIO()

        self._handles[path] = handle
        return handle

    def write(self, path: Path | str, content: str) -> None:
        """Append ``content`` to ``path`` and flush it."""
        with self._lock:
            handle = self._open(Path(path))
            handle.write(content)
            handle.flush()

    @contextmanager
    def locked(self, path: Path | str) -> Iterator[TextIO]:
        """Hold the write lock and yield the handle for a multi-part write."""
        with self._lock:
            handle = self._open(Path(path))
            try:
                yield handle
            finally:
                handle.flush()

    def is_open(self, path: Path | str) -> bool:
        with self._lock:
            handle = self._handles.get(Path(path))
            return handle is not None and not handle.closed

    def flush(self, path: Path | str | None = None) -> None:
        """Flush one path, or every open handle when ``path`` is None."""
        with self._lock:
            if path is not None:
                handle = self._handles.get(Path(path))
                if handle is not None and not handle.closed:
                    handle.flush()
                return
            for handle in self._handles.values():
                if not handle.closed:
                    handle.flush()

    def close_all(self) -> None:
        with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()
            for handle in handles:
                handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_all()

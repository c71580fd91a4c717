"""
Explicit context bundling one input reader and one output cache.

Code that wants default paths without wiring objects by hand can use
:func:`get_default_context`; everything else should construct and pass a
:class:`WatchReadContext`.

Example:
    ctx = WatchReadContext(WatchReadConfig(input_path=Path("in.txt")))
    ctx.log("input number:\\n")
    num = ctx.read()
    ctx.log("you input number is: ", num, "\\n")
    ctx.close()
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import replace
from pathlib import Path
from typing import Any, TypeVar

from watchread.config import WatchReadConfig
from watchread.input.reader import InputReader
from watchread.logging_config import configure_from_config, get_logger, is_configured
from watchread.output.cache import OutputCache
from watchread.watch.sources import has_native_support

logger = get_logger(__name__)

T = TypeVar("T")


def _join(parts: tuple[Any, ...]) -> str:
    return "".join(str(part) for part in parts)


class WatchReadContext:
    """Input/output state that would otherwise be process-global."""

    def __init__(self, config: WatchReadConfig | None = None):
        self._defaults = config or WatchReadConfig()
        self.config = replace(self._defaults)
        self.output = OutputCache(silent=self.config.silent)
        self._reader = self._make_reader()

    def _make_reader(self) -> InputReader:
        return InputReader(self.config.input_path, event_driven=self.config.event_driven)

    def _replace_reader(self) -> None:
        old, self._reader = self._reader, self._make_reader()
        old.close(timeout=0)

    @property
    def reader(self) -> InputReader:
        return self._reader

    # Paths

    def set_input_path(self, path: Path | str) -> None:
        self.config.input_path = Path(path)
        self._replace_reader()

    def set_output_path(self, path: Path | str) -> None:
        self.config.output_path = Path(path)

    # Capabilities

    @staticmethod
    def has_native_support() -> bool:
        return has_native_support()

    @property
    def event_driven(self) -> bool:
        return self.config.event_driven

    def set_event_driven(self, enabled: bool) -> None:
        """Toggle native notification; when off, reads always poll."""
        self.config.event_driven = bool(enabled)
        self._reader.event_driven = self.config.event_driven

    @property
    def silent(self) -> bool:
        return self.output.silent

    def set_silent(self, silent: bool) -> None:
        self.config.silent = bool(silent)
        self.output.silent = self.config.silent

    # Output

    def log(self, *parts: Any) -> None:
        """Append ``parts`` to the configured output file."""
        self.output.write(self.config.output_path, _join(parts))

    def log_to(self, path: Path | str, *parts: Any) -> None:
        self.output.write(path, _join(parts))

    def flush(self, path: Path | str | None = None) -> None:
        self.output.flush(path)

    def close_all(self) -> None:
        self.output.close_all()

    # Input

    def try_read(self, value_type: Callable[[str], T] = int) -> T | None:
        return self._reader.try_read(value_type)

    def read(self, value_type: Callable[[str], T] = int) -> T:
        return self._reader.read(value_type)

    def read_with_timeout(self, timeout: float, value_type: Callable[[str], T] = int) -> T | None:
        return self._reader.read_with_timeout(timeout, value_type)

    def read_async(
        self,
        callback: Callable[[T], None] | None = None,
        value_type: Callable[[str], T] = int,
    ) -> Future:
        return self._reader.read_async(callback=callback, value_type=value_type)

    # Lifecycle

    def reset(self) -> None:
        """Clear cached read state and restore default paths and modes."""
        self.output.close_all()
        self.config = replace(self._defaults)
        self.output.silent = self.config.silent
        self._replace_reader()
        logger.debug("context_reset", input_path=str(self.config.input_path))

    def close(self, timeout: float | None = None) -> bool:
        """Close output handles and stop outstanding reads."""
        self.output.close_all()
        return self._reader.close(timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


# Process-wide default context
_default_context: WatchReadContext | None = None
_default_lock = threading.Lock()


def get_default_context() -> WatchReadContext:
    """Get the lazily created default context (configured from the environment).

    The first call also configures logging from the same environment unless
    the application already did.
    """
    global _default_context
    with _default_lock:
        if _default_context is None:
            config = WatchReadConfig.from_env()
            if not is_configured():
                configure_from_config(config)
            _default_context = WatchReadContext(config)
        return _default_context


def reset_default_context() -> None:
    """Close and drop the default context; the next access builds a new one."""
    global _default_context
    with _default_lock:
        context, _default_context = _default_context, None
    if context is not None:
        context.close(timeout=0)

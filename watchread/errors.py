"""
Exceptions raised by watchread.

Capability degradation (no native change notification) and transient read
misses are not errors and never surface as exceptions.
"""

from __future__ import annotations

from pathlib import Path


class WatchReadError(Exception):
    """Base class for watchread errors."""


class ReaderClosedError(WatchReadError):
    """Raised by a read loop that observes its reader was closed."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Reader for '{self.path}' was closed before a value arrived")


class OutputOpenError(WatchReadError):
    """Raised when an output file cannot be opened and silent mode is off."""

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Failed to open output file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

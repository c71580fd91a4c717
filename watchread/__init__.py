"""
watchread: typed input from a watched text file.

This package contains:
- Change sources (native notification via watchdog, adaptive polling)
- A single-file watcher with a latched change signal
- An input reader with immediate, timeout, blocking and async modes
- Append-only output files with cached handles
"""

from .config import WatchReadConfig
from .context import WatchReadContext, get_default_context, reset_default_context
from .errors import OutputOpenError, ReaderClosedError, WatchReadError
from .input import InputReader
from .logging_config import configure_from_config, configure_logging
from .output import OutputCache
from .watch import FileWatcher, has_native_support

__version__ = "0.1.0"

__all__ = [
    "FileWatcher",
    "InputReader",
    "OutputCache",
    "OutputOpenError",
    "ReaderClosedError",
    "WatchReadConfig",
    "WatchReadContext",
    "WatchReadError",
    "configure_from_config",
    "configure_logging",
    "get_default_context",
    "has_native_support",
    "reset_default_context",
]

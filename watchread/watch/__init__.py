"""
Change detection for a single file.

Provides:
- Native change sources backed by watchdog observers
- Adaptive polling fallback
- FileWatcher with latched, coalescing change signal
"""

from __future__ import annotations

from .backoff import BackoffSchedule
from .sources import (
    ChangeSource,
    NativeChangeSource,
    PollingChangeSource,
    create_change_source,
    has_native_support,
)
from .watcher import FileWatcher, WorkerState

__all__ = [
    "BackoffSchedule",
    "ChangeSource",
    "FileWatcher",
    "NativeChangeSource",
    "PollingChangeSource",
    "WorkerState",
    "create_change_source",
    "has_native_support",
]

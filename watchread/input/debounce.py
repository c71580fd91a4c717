"""
Short-lived memo of the last immediate-check read.

Lets :meth:`InputReader.try_read` skip opening the file when it is called
again within :data:`DEBOUNCE_WINDOW` seconds and the file's modification
stamp has not moved. Only an actual open+read advances the entry.
Elapsed time is compared in whole nanoseconds, so a check exactly one
window later is a miss.

Not thread-safe: a cache belongs to exactly one reader and is only used from
the thread calling that reader's immediate/timeout reads.
"""

from __future__ import annotations

from dataclasses import dataclass

from watchread.core.io import Fingerprint

DEBOUNCE_WINDOW = 0.010


def _to_ns(seconds: float) -> int:
    return round(seconds * 1_000_000_000)


@dataclass
class DebounceEntry:
    last_observed_mtime: Fingerprint | None = None
    last_check: float | None = None
    file_existed: bool = False


class DebounceCache:
    def __init__(self, window: float = DEBOUNCE_WINDOW):
        self.window = window
        self.entry = DebounceEntry()

    def is_hit(self, now: float, mtime: Fingerprint | None) -> bool:
        entry = self.entry
        return (
            entry.file_existed
            and entry.last_check is not None
            and _to_ns(now) - _to_ns(entry.last_check) < _to_ns(self.window)
            and mtime == entry.last_observed_mtime
        )

    def record(self, now: float, mtime: Fingerprint | None, existed: bool) -> None:
        self.entry = DebounceEntry(
            last_observed_mtime=mtime,
            last_check=now,
            file_existed=existed,
        )

    def reset(self) -> None:
        self.entry = DebounceEntry()

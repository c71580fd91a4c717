"""
Adaptive polling schedule.

Bursty edits get low latency; idle periods shed stat() load:

- start at ``initial``
- any detected change resets the interval to ``minimum``
- ``idle_threshold`` consecutive idle polls double it, capped at ``maximum``
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_INITIAL_INTERVAL = 0.05
DEFAULT_MIN_INTERVAL = 0.01
DEFAULT_MAX_INTERVAL = 0.5
DEFAULT_IDLE_THRESHOLD = 10


@dataclass
class BackoffSchedule:
    """Poll interval (seconds) that grows on inactivity and shrinks on activity."""

    initial: float = DEFAULT_INITIAL_INTERVAL
    minimum: float = DEFAULT_MIN_INTERVAL
    maximum: float = DEFAULT_MAX_INTERVAL
    idle_threshold: int = DEFAULT_IDLE_THRESHOLD

    interval: float = field(init=False)
    idle_polls: int = field(init=False, default=0)

    def __post_init__(self):
        if self.minimum <= 0:
            raise ValueError("minimum must be > 0")
        if not self.minimum <= self.initial <= self.maximum:
            raise ValueError("initial must lie between minimum and maximum")
        if self.idle_threshold < 1:
            raise ValueError("idle_threshold must be >= 1")
        self.interval = self.initial

    def record_change(self) -> float:
        """A poll saw a change; return the next interval."""
        self.interval = self.minimum
        self.idle_polls = 0
        return self.interval

    def record_idle(self) -> float:
        """A poll saw nothing; return the next interval."""
        self.idle_polls += 1
        if self.idle_polls >= self.idle_threshold:
            self.interval = min(self.interval * 2, self.maximum)
            self.idle_polls = 0
        return self.interval

    def reset(self):
        self.interval = self.initial
        self.idle_polls = 0

"""
Typed input reading from watched files.
"""

from __future__ import annotations

from .debounce import DEBOUNCE_WINDOW, DebounceCache, DebounceEntry
from .parser import first_value, parse_scalar
from .reader import RECHECK_INTERVAL, InputReader

__all__ = [
    "DEBOUNCE_WINDOW",
    "DebounceCache",
    "DebounceEntry",
    "InputReader",
    "RECHECK_INTERVAL",
    "first_value",
    "parse_scalar",
]

"""
Line parser for watched input files.

Format: UTF-8 text, one scalar per line. Lines starting with ``#`` are
comments, blank lines are ignored, and the first line whose leading token
converts to the requested type wins.

Numbers are read the way a stream extraction reads them: ``int`` and
``float`` take the longest numeric prefix of the token, so ``"3.7"`` read as
an int is 3 and ``"5abc"`` is 5. A token with no numeric prefix is skipped.
Any other type converts the whole token.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")

COMMENT_MARKER = "#"

_NUMERIC_PREFIX = {
    int: re.compile(r"[+-]?\d+"),
    float: re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"),
}


def _leading_token(token: str, value_type: Any) -> str | None:
    pattern = _NUMERIC_PREFIX.get(value_type)
    if pattern is None:
        return token
    match = pattern.match(token)
    return match.group(0) if match else None


def parse_scalar(line: str, value_type: Callable[[str], T]) -> T | None:
    """Convert one raw line, or return None if it is blank, a comment or invalid."""
    text = line.strip()
    if not text or text.startswith(COMMENT_MARKER):
        return None
    token = _leading_token(text.split(None, 1)[0], value_type)
    if token is None:
        return None
    try:
        return value_type(token)
    except (TypeError, ValueError):
        return None


def first_value(lines: Iterable[str], value_type: Callable[[str], T]) -> T | None:
    """Return the first parseable value in ``lines``; later lines are not read."""
    for line in lines:
        value = parse_scalar(line, value_type)
        if value is not None:
            return value
    return None


def describe_type(value_type: Any) -> str:
    return getattr(value_type, "__name__", repr(value_type))

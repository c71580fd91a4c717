"""
File helpers shared by watchers and readers.
"""

from __future__ import annotations

import os
from pathlib import Path

PLACEHOLDER_LINE = "# Enter input values here (one per line)\n"

# (st_mtime_ns, st_size); None when the file cannot be stat'ed
Fingerprint = tuple[int, int]


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def file_fingerprint(path: Path) -> Fingerprint | None:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size)


def ensure_input_file(path: Path) -> bool:
    """Create ``path`` with a placeholder comment line if it does not exist.

    Returns True when the file was created by this call.
    """
    if path.exists():
        return False
    ensure_dir(path.parent)
    try:
        with open(path, "x", encoding="utf-8") as fh:
            fh.write(PLACEHOLDER_LINE)
    except FileExistsError:
        return False
    return True

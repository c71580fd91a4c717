"""
Core primitives for watchread.
"""

from .io import PLACEHOLDER_LINE, ensure_dir, ensure_input_file, file_fingerprint

__all__ = [
    "PLACEHOLDER_LINE",
    "ensure_dir",
    "ensure_input_file",
    "file_fingerprint",
]

"""
Append-only output with cached handles.
"""

from .cache import OutputCache

__all__ = ["OutputCache"]

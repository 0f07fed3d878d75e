"""Split summary module."""

from .summary import summarize_splits

__all__ = [
    "summarize_splits",
]

"""
Layout Selection History

Event-log backed memory of which layout each window class chose.
"""

from .events import LayoutSelectionEvent, hash_string, FALLBACK_HASH
from .memory import HistoryMemoryIndex, LayoutEntry
from .store import LayoutHistoryStore

__all__ = [
    "LayoutSelectionEvent",
    "hash_string",
    "FALLBACK_HASH",
    "HistoryMemoryIndex",
    "LayoutEntry",
    "LayoutHistoryStore",
]

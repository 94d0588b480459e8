"""
History Memory Index

In-memory lookup structures derived from the event log. The index is a
materialized view: replaying every event in timestamp order always rebuilds
it exactly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from ..config import MAX_LAYOUTS_PER_WM_CLASS
from .events import LayoutSelectionEvent, make_title_key


@dataclass(frozen=True)
class LayoutEntry:
    """A layout id and when it was last chosen (ms epoch)."""

    layout_id: str
    last_used: int


class HistoryMemoryIndex:
    """Lookup by window class hash and by exact class + title hash."""

    def __init__(self, max_layouts_per_class: int = MAX_LAYOUTS_PER_WM_CLASS):
        self.max_layouts_per_class = max_layouts_per_class
        # class hash -> entries, most recent first, unique by layout id
        self.by_window_class_hash: Dict[str, List[LayoutEntry]] = {}
        # "class_hash:title_hash" -> most recent entry
        self.by_title_hash: Dict[str, LayoutEntry] = {}

    def clear(self):
        self.by_window_class_hash = {}
        self.by_title_hash = {}

    def rebuild(self, events: Iterable[LayoutSelectionEvent]):
        """Reset and replay events (must already be in timestamp order)."""
        self.clear()
        for event in events:
            self.record(event)

    def record(self, event: LayoutSelectionEvent):
        """Apply one event on top of the current state."""
        entries = self.by_window_class_hash.setdefault(event.window_class_hash, [])

        for i, entry in enumerate(entries):
            if entry.layout_id == event.layout_id:
                del entries[i]
                break

        entries.insert(0, LayoutEntry(event.layout_id, event.ts))
        del entries[self.max_layouts_per_class :]

        self.by_title_hash[event.title_key] = LayoutEntry(event.layout_id, event.ts)

    def lookup_title(self, window_class_hash: str, title_hash: str) -> Optional[str]:
        entry = self.by_title_hash.get(make_title_key(window_class_hash, title_hash))
        return entry.layout_id if entry else None

    def lookup_class(self, window_class_hash: str) -> Optional[str]:
        entries = self.by_window_class_hash.get(window_class_hash)
        return entries[0].layout_id if entries else None

    def class_entries(self, window_class_hash: str) -> List[LayoutEntry]:
        """Ranked entries for a class (a copy, most recent first)."""
        return list(self.by_window_class_hash.get(window_class_hash, []))

    def retained_layout_ids(self, window_class_hash: str) -> Set[str]:
        return {e.layout_id for e in self.by_window_class_hash.get(window_class_hash, [])}

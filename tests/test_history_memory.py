"""
Unit tests for the history memory index.
"""

import pytest
from snapspace.history.events import LayoutSelectionEvent
from snapspace.history.memory import HistoryMemoryIndex, LayoutEntry


def event(ts, layout_id, class_hash="cls", title_hash="ttl"):
    return LayoutSelectionEvent(ts, class_hash, title_hash, layout_id)


@pytest.mark.unit
class TestHistoryMemoryIndex:
    """Test class ranking and title lookups."""

    def test_empty(self):
        index = HistoryMemoryIndex()

        assert index.lookup_class("cls") is None
        assert index.lookup_title("cls", "ttl") is None
        assert index.class_entries("cls") == []

    def test_record_single_event(self):
        index = HistoryMemoryIndex()
        index.record(event(10, "A"))

        assert index.lookup_class("cls") == "A"
        assert index.lookup_title("cls", "ttl") == "A"
        assert index.by_title_hash["cls:ttl"] == LayoutEntry("A", 10)

    def test_most_recent_first(self):
        index = HistoryMemoryIndex()
        index.rebuild([event(1, "A"), event(2, "B"), event(3, "C")])

        assert [e.layout_id for e in index.class_entries("cls")] == ["C", "B", "A"]

    def test_reinsert_moves_to_front(self):
        index = HistoryMemoryIndex()
        index.rebuild([event(1, "A"), event(2, "B"), event(3, "A")])

        entries = index.class_entries("cls")
        assert [e.layout_id for e in entries] == ["A", "B"]
        assert entries[0].last_used == 3

    def test_cap_keeps_five_most_recent(self):
        index = HistoryMemoryIndex()
        index.rebuild([event(i, f"L{i}") for i in range(1, 9)])

        assert [e.layout_id for e in index.class_entries("cls")] == [
            "L8",
            "L7",
            "L6",
            "L5",
            "L4",
        ]

    def test_custom_cap(self):
        index = HistoryMemoryIndex(max_layouts_per_class=2)
        index.rebuild([event(1, "A"), event(2, "B"), event(3, "C")])

        assert index.retained_layout_ids("cls") == {"B", "C"}

    def test_title_overwritten_by_latest(self):
        index = HistoryMemoryIndex()
        index.rebuild([event(1, "A"), event(2, "B", title_hash="other"), event(3, "C")])

        assert index.lookup_title("cls", "ttl") == "C"
        assert index.lookup_title("cls", "other") == "B"

    def test_classes_are_independent(self):
        index = HistoryMemoryIndex()
        index.rebuild([event(1, "A", class_hash="one"), event(2, "B", class_hash="two")])

        assert index.lookup_class("one") == "A"
        assert index.lookup_class("two") == "B"

    def test_rebuild_discards_previous_state(self):
        index = HistoryMemoryIndex()
        index.record(event(1, "A"))
        index.rebuild([event(2, "B", class_hash="other")])

        assert index.lookup_class("cls") is None
        assert index.lookup_class("other") == "B"

    def test_class_entries_is_a_copy(self):
        index = HistoryMemoryIndex()
        index.record(event(1, "A"))
        index.class_entries("cls").clear()

        assert index.lookup_class("cls") == "A"

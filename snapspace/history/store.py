"""
Layout History Store

Remembers which layout a window chose, using an append-only JSON Lines event
log. In-memory lookup structures are rebuilt from the log on load and
updated on every append. The log is compacted when it grows past a threshold.

One store instance owns one log file. Construct it once at startup and pass
it to every consumer.
"""

from __future__ import annotations
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .. import topics
from ..config import COMPACTION_THRESHOLD, MAX_LAYOUTS_PER_WM_CLASS, SnapConfig
from ..telemetry import get_logger
from .events import LayoutSelectionEvent, hash_string
from .memory import HistoryMemoryIndex

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class LayoutHistoryStore:
    """
    Event-log backed layout selection history.

    Lookup order for a window: this session's selection for the window id,
    then the last layout chosen for the exact class + title, then the most
    recent layout chosen for the class.

    I/O failures are logged and absorbed; history is an enhancement and never
    blocks layout application.
    """

    def __init__(
        self,
        path: Path | str,
        valid_layout_ids_fn: Optional[Callable[[], Iterable[str]]] = None,
        compaction_threshold: int = COMPACTION_THRESHOLD,
        max_layouts_per_class: int = MAX_LAYOUTS_PER_WM_CLASS,
        clock_fn: Callable[[], int] = _now_ms,
        bus=None,
    ):
        """Initialize history store.

        Args:
            path: Event log location
            valid_layout_ids_fn: Returns the currently known layout ids; events
                for other ids are dropped on load. None disables pruning.
            compaction_threshold: Compact after load when more events than this
            max_layouts_per_class: Ranked layouts remembered per window class
            clock_fn: Current time in ms since the epoch
            bus: Event bus instance (Pypubsub), optional
        """
        self.path = Path(path)
        self.compaction_threshold = compaction_threshold
        self.bus = bus
        self._valid_layout_ids_fn = valid_layout_ids_fn
        self._clock = clock_fn

        self._events: List[LayoutSelectionEvent] = []
        self.memory = HistoryMemoryIndex(max_layouts_per_class)

        # Volatile: window ids are not stable across sessions, never persisted
        self._by_window_id: Dict[int, str] = {}

    @classmethod
    def from_config(
        cls,
        config: SnapConfig,
        valid_layout_ids_fn: Optional[Callable[[], Iterable[str]]] = None,
        bus=None,
    ) -> "LayoutHistoryStore":
        return cls(
            config.history_path,
            valid_layout_ids_fn=valid_layout_ids_fn,
            compaction_threshold=config.compaction_threshold,
            max_layouts_per_class=config.max_layouts_per_class,
            bus=bus,
        )

    @property
    def events(self) -> Tuple[LayoutSelectionEvent, ...]:
        """Committed events in timestamp order."""
        return tuple(self._events)

    # -- Loading -----------------------------------------------------------

    def load(self):
        """
        Load the event log and rebuild the lookup structures.

        Starts a new session: selections made by window id are forgotten.
        """
        self._reset()

        if not self.path.exists():
            logger.info(f"[LayoutHistory] {self.path} does not exist, using empty history")
            self._publish(topics.HISTORY_LOADED, event_count=0)
            return

        try:
            raw_events = self._read_events()
            valid_ids = self._valid_layout_ids()
        except Exception as e:
            logger.error(f"[LayoutHistory] Error loading history: {e}")
            self._reset()
            self._publish(topics.HISTORY_LOADED, event_count=0)
            return

        if valid_ids is None:
            events = raw_events
        else:
            events = [e for e in raw_events if e.layout_id in valid_ids]
            filtered = len(raw_events) - len(events)
            if filtered:
                logger.info(
                    f"[LayoutHistory] Filtered {filtered} events with unknown layoutId"
                )

        # Stable: file order breaks timestamp ties
        events.sort(key=lambda e: e.ts)
        self._events = events
        self.memory.rebuild(self._events)

        logger.info(f"[LayoutHistory] Loaded {len(self._events)} events")
        self._publish(topics.HISTORY_LOADED, event_count=len(self._events))

        if len(self._events) > self.compaction_threshold:
            self.compact()

    def _reset(self):
        self._events = []
        self.memory.clear()
        self._by_window_id = {}

    def _read_events(self) -> List[LayoutSelectionEvent]:
        events = []
        # Each line is decoded on its own so one bad byte only costs its line
        with open(self.path, "rb") as f:
            for line_no, raw in enumerate(f, start=1):
                raw = raw.strip()
                if not raw:
                    continue
                try:
                    event = LayoutSelectionEvent.from_json_line(raw.decode("utf-8"))
                except (UnicodeDecodeError, json.JSONDecodeError):
                    event = None
                if event is None:
                    logger.warning(
                        f"[LayoutHistory] Skipping invalid line {line_no}: {raw[:80]!r}"
                    )
                    continue
                events.append(event)
        return events

    def _valid_layout_ids(self) -> Optional[set]:
        if self._valid_layout_ids_fn is None:
            return None
        return set(self._valid_layout_ids_fn())

    # -- Recording ---------------------------------------------------------

    def set_selected_layout(
        self, window_id: int, window_class: str, title: str, layout_id: str
    ):
        """
        Record that a window chose a layout.

        The selection is remembered for the window id even when the log
        cannot be written, so the current session stays consistent.
        """
        if not window_class:
            logger.warning("[LayoutHistory] Window class is empty, skipping history update")
            return

        self._by_window_id[window_id] = layout_id

        event = LayoutSelectionEvent(
            ts=self._next_timestamp(),
            window_class_hash=hash_string(window_class),
            title_hash=hash_string(title or ""),
            layout_id=layout_id,
        )

        if not self._append_event(event):
            return

        self._events.append(event)
        self.memory.record(event)

        logger.info(
            f"[LayoutHistory] Recorded selection: windowId={window_id}, "
            f"wmClassHash={event.window_class_hash}, titleHash={event.title_hash} -> {layout_id}"
        )
        self._publish(
            topics.LAYOUT_RECORDED,
            layout_id=layout_id,
            window_class_hash=event.window_class_hash,
            title_hash=event.title_hash,
        )

    def _next_timestamp(self) -> int:
        # Never go behind the last committed event, so replaying the log
        # after a clock step back yields the same order as the live index
        now = self._clock()
        if self._events and now < self._events[-1].ts:
            return self._events[-1].ts
        return now

    def _append_event(self, event: LayoutSelectionEvent) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            prefix = "\n" if self._ends_mid_line() else ""
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(prefix + event.to_json_line())
        except OSError as e:
            logger.error(f"[LayoutHistory] Error appending event: {e}")
            return False
        return True

    def _ends_mid_line(self) -> bool:
        """True if the log ends in a partial line, e.g. after a crash mid-write."""
        if not self.path.exists():
            return False
        with open(self.path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return False
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"

    def forget_window(self, window_id: int):
        """Drop the session selection of a closed window."""
        self._by_window_id.pop(window_id, None)

    # -- Lookup ------------------------------------------------------------

    def get_selected_layout_id(
        self, window_id: int, window_class: str, title: str
    ) -> Optional[str]:
        """
        Get the layout previously chosen for a window.

        Returns:
            Layout id, or None when there is no history for the window
        """
        if not window_class:
            return None

        layout_id = self._by_window_id.get(window_id)
        if layout_id is not None:
            logger.debug(f"[LayoutHistory] Found by windowId: {window_id} -> {layout_id}")
            return layout_id

        class_hash = hash_string(window_class)
        title_hash = hash_string(title or "")

        layout_id = self.memory.lookup_title(class_hash, title_hash)
        if layout_id is not None:
            logger.debug(f"[LayoutHistory] Found by titleHash: {class_hash}:{title_hash} -> {layout_id}")
            return layout_id

        layout_id = self.memory.lookup_class(class_hash)
        if layout_id is not None:
            logger.debug(f"[LayoutHistory] Found by wmClassHash: {class_hash} -> {layout_id}")
            return layout_id

        logger.debug(f"[LayoutHistory] No history for wmClass: {window_class}")
        return None

    def recent_layout_ids(self, window_class: str) -> List[str]:
        """Layouts recently chosen for a window class, most recent first."""
        if not window_class:
            return []
        entries = self.memory.class_entries(hash_string(window_class))
        return [entry.layout_id for entry in entries]

    # -- Compaction --------------------------------------------------------

    def compact(self) -> bool:
        """
        Rewrite the log keeping only events that still affect lookups.

        Keeps the latest event per class + title, plus every event whose
        layout is still ranked for its class. The new log is written to a
        temporary file and renamed over the old one.

        Returns:
            True if the log was rewritten
        """
        before = len(self._events)
        logger.info(f"[LayoutHistory] Starting compaction ({before} events)")

        kept = self._select_events_to_keep()

        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.writelines(event.to_json_line() for event in kept)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.path)
        except Exception as e:
            logger.error(f"[LayoutHistory] Error during compaction: {e}")
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
            return False

        self._events = kept
        self.memory.rebuild(self._events)

        logger.info(f"[LayoutHistory] Compaction complete: {len(kept)} events kept")
        self._publish(topics.HISTORY_COMPACTED, before=before, after=len(kept))
        return True

    def _select_events_to_keep(self) -> List[LayoutSelectionEvent]:
        # Events are in timestamp order, so the last index per key is the latest
        latest_by_title: Dict[str, int] = {}
        for i, event in enumerate(self._events):
            latest_by_title[event.title_key] = i

        keep = set(latest_by_title.values())

        retained = {
            class_hash: self.memory.retained_layout_ids(class_hash)
            for class_hash in self.memory.by_window_class_hash
        }
        for i, event in enumerate(self._events):
            if event.layout_id in retained.get(event.window_class_hash, ()):
                keep.add(i)

        kept = [self._events[i] for i in sorted(keep)]
        kept.sort(key=lambda e: e.ts)
        return kept

    def _publish(self, topic: str, **data):
        if self.bus is not None:
            self.bus.sendMessage(topic, **data)

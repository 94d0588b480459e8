"""
Layout Applicator

Moves windows into layout slots and records the choice in the history store.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Optional

from . import topics
from .layout_expression import LayoutExpressionError
from .layouts import Layout, LayoutGeometry
from .protocol import ManagedWindow, Monitor, MonitorProvider, identify
from .telemetry import get_logger

if TYPE_CHECKING:
    from .history import LayoutHistoryStore

logger = get_logger(__name__)


class LayoutApplicator:
    """Applies layouts to windows.

    When given an event bus, it also handles layout commands:
    - CMD_APPLY_LAYOUT: Apply a layout to the given or the focused window
    - FOCUS_CHANGED: Track the focused window
    - WINDOW_CLOSED: Forget the window's session selection
    """

    def __init__(
        self,
        monitor_provider: MonitorProvider,
        history_store: "LayoutHistoryStore",
        bus=None,
    ):
        """Initialize layout applicator.

        Args:
            monitor_provider: Resolves monitors by key or by window
            history_store: Store receiving layout selections
            bus: Event bus instance (Pypubsub), optional
        """
        self.monitor_provider = monitor_provider
        self.history_store = history_store
        self.bus = bus

        self.focused_window: Optional[ManagedWindow] = None

        if self.bus is not None:
            self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to focus, window lifecycle and layout command events."""
        self.bus.subscribe(self._on_focus_changed, topics.FOCUS_CHANGED)
        self.bus.subscribe(self._on_window_closed, topics.WINDOW_CLOSED)
        self.bus.subscribe(self._on_apply_layout, topics.CMD_APPLY_LAYOUT)

    def apply(
        self,
        window: Optional[ManagedWindow],
        layout: Layout,
        monitor_key: Optional[str] = None,
    ) -> Optional[LayoutGeometry]:
        """
        Apply a layout to a window.

        Args:
            window: Window to move, None abandons the operation
            layout: Layout slot to apply
            monitor_key: Target monitor, defaults to the layout's own
                monitor_key and then to the window's current monitor

        Returns:
            The geometry the window was moved to, or None if abandoned

        Raises:
            LayoutExpressionError: If a layout field is malformed; the window
                is neither moved nor recorded
        """
        logger.info(f"[LayoutApplicator] Apply layout: {layout.label} (ID: {layout.id})")

        if window is None:
            logger.info("[LayoutApplicator] No window to apply layout to")
            return None

        if monitor_key is None:
            monitor_key = layout.monitor_key

        monitor = self._resolve_monitor(window, monitor_key)
        if monitor is None:
            return None
        if monitor_key is None:
            monitor_key = monitor.key

        work_area = monitor.work_area
        geometry = layout.calculate(work_area)

        target = identify(window)
        if target.window_class:
            self.history_store.set_selected_layout(
                target.window_id, target.window_class, target.title, layout.id
            )
        else:
            logger.info("[LayoutApplicator] Window has no class, skipping history update")

        logger.info(
            f"[LayoutApplicator] Moving window to x={geometry.x}, y={geometry.y}, "
            f"w={geometry.width}, h={geometry.height} (work area: {work_area.x},"
            f"{work_area.y} {work_area.width}x{work_area.height})"
        )

        if window.maximized:
            logger.info("[LayoutApplicator] Unmaximizing window")
            window.unmaximize()

        window.move_resize(geometry.x, geometry.y, geometry.width, geometry.height)

        if self.bus is not None:
            self.bus.sendMessage(
                topics.LAYOUT_APPLIED,
                window=window,
                layout=layout,
                monitor_key=monitor_key,
                geometry=geometry,
            )
        return geometry

    def suggest_layout(
        self, window: Optional[ManagedWindow], layouts: Iterable[Layout]
    ) -> Optional[Layout]:
        """Pick the layout the history remembers for a window, if offered."""
        if window is None:
            return None

        target = identify(window)
        layout_id = self.history_store.get_selected_layout_id(
            target.window_id, target.window_class, target.title
        )
        if layout_id is None:
            return None

        for layout in layouts:
            if layout.id == layout_id:
                return layout
        return None

    def _resolve_monitor(
        self, window: ManagedWindow, monitor_key: Optional[str]
    ) -> Optional[Monitor]:
        if monitor_key is not None:
            monitor = self.monitor_provider.get_monitor_by_key(monitor_key)
            if monitor is None:
                logger.info(f"[LayoutApplicator] Could not find monitor with key: {monitor_key}")
            return monitor

        monitor = self.monitor_provider.get_monitor_for_window(window)
        if monitor is None:
            logger.info("[LayoutApplicator] Could not determine monitor for window")
        return monitor

    def _on_focus_changed(self, window):
        """Track focused window from the host window manager."""
        self.focused_window = window

    def _on_window_closed(self, window):
        """Handle WINDOW_CLOSED notification."""
        if window is self.focused_window:
            self.focused_window = None
        self.history_store.forget_window(window.object_id)

    def _on_apply_layout(self, layout, window=None, monitor_key=None):
        """Handle CMD_APPLY_LAYOUT command."""
        try:
            if window is None:
                window = self.focused_window
            self.apply(window, layout, monitor_key)
        except LayoutExpressionError as e:
            logger.error(f"[LayoutApplicator] Invalid layout {layout.id}: {e}")

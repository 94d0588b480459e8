"""
Host Window Manager Protocol

Geometry types shared with the host window manager and the interfaces
snapspace expects from it (windows and monitors).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable


@dataclass
class Area:
    """Area with position and dimensions."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class Monitor:
    """A physical monitor and the part of it usable by windows."""

    index: int
    geometry: Area = field(default_factory=Area)
    work_area: Area = field(default_factory=Area)
    is_primary: bool = False

    @property
    def key(self) -> str:
        """Monitor key used by layouts and history ("0", "1", ...)."""
        return str(self.index)


@dataclass(frozen=True)
class WindowIdentifier:
    """Identifies a window for layout history lookup and recording."""

    window_id: int
    window_class: str
    title: str


@runtime_checkable
class ManagedWindow(Protocol):
    """A live window handle provided by the host window manager."""

    object_id: int
    app_id: Optional[str]
    title: Optional[str]
    maximized: bool

    def unmaximize(self) -> None:
        ...

    def move_resize(self, x: int, y: int, width: int, height: int) -> None:
        ...


@runtime_checkable
class MonitorProvider(Protocol):
    """Resolves monitors by key or by the window they contain."""

    def get_monitor_by_key(self, key: str) -> Optional[Monitor]:
        ...

    def get_monitor_for_window(self, window: ManagedWindow) -> Optional[Monitor]:
        ...


def identify(window: ManagedWindow) -> WindowIdentifier:
    """Build the history identity of a window."""
    return WindowIdentifier(
        window_id=window.object_id,
        window_class=window.app_id or "",
        title=window.title or "",
    )

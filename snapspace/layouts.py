"""
Layout Slots

A layout is a named slot whose position and size are layout expressions,
resolved against a monitor's work area when applied.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .layout_expression import LayoutExpressionError, parse, resolve
from .protocol import Area


@dataclass
class LayoutGeometry:
    """Calculated geometry for a window in a layout slot."""

    x: int
    y: int
    width: int
    height: int


@dataclass
class Layout:
    """A layout slot, e.g. ``Layout("left", "Left half", "0", "0", "50%", "100%")``."""

    id: str
    label: str
    x: str
    y: str
    width: str
    height: str
    monitor_key: Optional[str] = None

    def validate(self):
        """
        Parse all four fields.

        Raises:
            LayoutExpressionError: On the first malformed field
        """
        for value in (self.x, self.y, self.width, self.height):
            parse(value)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except LayoutExpressionError:
            return False
        return True

    def calculate(self, work_area: Area) -> LayoutGeometry:
        """
        Resolve the slot against a work area.

        x/width are evaluated against the work area width, y/height against
        its height; x/y are offset by the work area origin.

        Raises:
            LayoutExpressionError: If any field is malformed
        """
        return LayoutGeometry(
            x=work_area.x + resolve(self.x, work_area.width),
            y=work_area.y + resolve(self.y, work_area.height),
            width=resolve(self.width, work_area.width),
            height=resolve(self.height, work_area.height),
        )


@dataclass
class LayoutGroup:
    """A named set of layouts shown together."""

    name: str
    layouts: List[Layout] = field(default_factory=list)


def collect_layout_ids(groups: Iterable[LayoutGroup]) -> Set[str]:
    """All layout ids in the given groups."""
    return {layout.id for group in groups for layout in group.layouts}


class LayoutCatalog:
    """
    The currently known layout groups, keyed by monitor key.

    Serves as the valid-layout-id source for the history store.
    """

    def __init__(self, groups_by_monitor: Optional[Dict[str, List[LayoutGroup]]] = None):
        self.groups_by_monitor: Dict[str, List[LayoutGroup]] = dict(groups_by_monitor or {})

    def set_groups(self, monitor_key: str, groups: List[LayoutGroup]):
        self.groups_by_monitor[monitor_key] = list(groups)

    def all_groups(self) -> List[LayoutGroup]:
        return [g for groups in self.groups_by_monitor.values() for g in groups]

    def layout_ids(self) -> Set[str]:
        return collect_layout_ids(self.all_groups())

    def find(self, layout_id: str) -> Optional[Layout]:
        for group in self.all_groups():
            for layout in group.layouts:
                if layout.id == layout_id:
                    return layout
        return None

"""
snapspace

Layout slots for windows, written as short expressions, with a history of
which slot each application used last.

This package provides:
- A layout expression language ("1/3 + 10px", "100% - 20px")
- An append-only layout selection history with compaction
- A layout applicator that moves windows into slots and records the choice

Example usage:
    from pubsub import pub
    from snapspace import (
        Layout, LayoutApplicator, LayoutCatalog, LayoutHistoryStore, SnapConfig,
    )

    config = SnapConfig()
    catalog = LayoutCatalog()
    history = LayoutHistoryStore.from_config(
        config, valid_layout_ids_fn=catalog.layout_ids, bus=pub
    )
    history.load()
    applicator = LayoutApplicator(monitors, history, bus=pub)
    applicator.apply(window, Layout("left", "Left half", "0", "0", "50%", "100%"))

Or evaluate expressions directly:
    python -m snapspace eval "1/3 + 10px" 1920
"""

__version__ = "0.1.0"

from .layout_expression import (
    LayoutExpression,
    LayoutExpressionError,
    ErrorCategory,
    parse,
    evaluate,
    resolve,
    is_valid_expression,
)

from .protocol import (
    Area,
    Monitor,
    WindowIdentifier,
    ManagedWindow,
    MonitorProvider,
)

from .layouts import (
    Layout,
    LayoutGeometry,
    LayoutGroup,
    LayoutCatalog,
    collect_layout_ids,
)

from .history import (
    LayoutHistoryStore,
    LayoutSelectionEvent,
    HistoryMemoryIndex,
    hash_string,
)

from .layout_applicator import LayoutApplicator
from .config import SnapConfig

from . import topics

__all__ = [
    # Version
    "__version__",
    # Expressions
    "LayoutExpression",
    "LayoutExpressionError",
    "ErrorCategory",
    "parse",
    "evaluate",
    "resolve",
    "is_valid_expression",
    # Host protocol
    "Area",
    "Monitor",
    "WindowIdentifier",
    "ManagedWindow",
    "MonitorProvider",
    # Layouts
    "Layout",
    "LayoutGeometry",
    "LayoutGroup",
    "LayoutCatalog",
    "collect_layout_ids",
    # History
    "LayoutHistoryStore",
    "LayoutSelectionEvent",
    "HistoryMemoryIndex",
    "hash_string",
    # Applicator
    "LayoutApplicator",
    # Config
    "SnapConfig",
    # Event topics
    "topics",
]

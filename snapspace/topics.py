"""
Event Topics for snapspace

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# Window lifecycle events (published by the host window manager)
WINDOW_CLOSED = "window.closed"
"""Published when a window is closed/destroyed. Params: window"""

# Focus state notifications (published by the host window manager)
FOCUS_CHANGED = "focus.changed"
"""Published when window focus changes. Params: window (or None)"""

# Layout events
LAYOUT_APPLIED = "layout.applied"
"""Published after a window was moved into a layout slot.
Params: window, layout, monitor_key, geometry"""

LAYOUT_RECORDED = "layout.recorded"
"""Published when a layout selection was appended to the history log.
Params: layout_id, window_class_hash, title_hash"""

# History store events
HISTORY_LOADED = "history.loaded"
"""Published after the history log was (re)loaded. Params: event_count"""

HISTORY_COMPACTED = "history.compacted"
"""Published after a successful compaction. Params: before, after"""

# Command events (imperative - tell components to do something)
CMD_APPLY_LAYOUT = "cmd.apply_layout"
"""Command: Apply a layout. Requires layout; optional window (defaults to the
focused window) and monitor_key (defaults to the window's monitor)."""

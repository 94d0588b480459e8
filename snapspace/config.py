"""
snapspace Configuration

Defaults can be overridden through the environment:
- SNAPSPACE_HISTORY_FILE: history log location
- SNAPSPACE_LOG_LEVEL: logging level name
- SNAPSPACE_DEBUG: log every bus message when set
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

HISTORY_FILE_NAME = "layout-history.jsonl"
COMPACTION_THRESHOLD = 5000
MAX_LAYOUTS_PER_WM_CLASS = 5


def default_data_dir() -> Path:
    """``$XDG_DATA_HOME/snapspace``, falling back to ``~/.local/share``."""
    base = os.getenv("XDG_DATA_HOME") or os.path.join("~", ".local", "share")
    return Path(base).expanduser() / "snapspace"


def default_history_path() -> Path:
    override = os.getenv("SNAPSPACE_HISTORY_FILE")
    if override:
        return Path(override).expanduser()
    return default_data_dir() / HISTORY_FILE_NAME


@dataclass
class SnapConfig:
    """snapspace configuration."""

    # History log
    history_path: Path | str = field(default_factory=default_history_path)
    compaction_threshold: int = COMPACTION_THRESHOLD
    max_layouts_per_class: int = MAX_LAYOUTS_PER_WM_CLASS

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("SNAPSPACE_LOG_LEVEL", "INFO")
    )
    debug: bool = field(default_factory=lambda: bool(os.getenv("SNAPSPACE_DEBUG")))

    def __post_init__(self):
        """Normalize the history path and validate limits."""
        self.history_path = Path(self.history_path).expanduser()
        if self.compaction_threshold <= 0:
            raise ValueError(
                f"compaction_threshold must be positive, got {self.compaction_threshold}"
            )
        if self.max_layouts_per_class <= 0:
            raise ValueError(
                f"max_layouts_per_class must be positive, got {self.max_layouts_per_class}"
            )

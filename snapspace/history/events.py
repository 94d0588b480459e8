"""
Layout Selection Events

One event is one durable fact: "a window of this class and title chose this
layout at this time". Events are stored one JSON object per line.
"""

from __future__ import annotations
import hashlib
import json
import math
from dataclasses import dataclass
from typing import Optional

from ..telemetry import get_logger

logger = get_logger(__name__)

HASH_LENGTH = 16
FALLBACK_HASH = "0" * HASH_LENGTH


def hash_string(value: str) -> str:
    """
    Hash a window class or title to 16 hex characters (truncated SHA-256).

    Falls back to an all-zero hash when the value cannot be hashed, which
    merges such windows into a single history bucket.
    """
    try:
        digest = hashlib.sha256((value or "").encode("utf-8")).hexdigest()
    except (ValueError, UnicodeEncodeError) as e:
        logger.warning(f"[LayoutHistory] Hashing failed, using fallback: {e}")
        return FALLBACK_HASH
    return digest[:HASH_LENGTH]


@dataclass(frozen=True)
class LayoutSelectionEvent:
    """A recorded layout selection."""

    ts: int
    window_class_hash: str
    title_hash: str
    layout_id: str

    @property
    def title_key(self) -> str:
        """Key for the exact class + title lookup."""
        return make_title_key(self.window_class_hash, self.title_hash)

    def to_dict(self) -> dict:
        return {
            "ts": self.ts,
            "wmClassHash": self.window_class_hash,
            "titleHash": self.title_hash,
            "layoutId": self.layout_id,
        }

    def to_json_line(self) -> str:
        """Encode as a single JSON line including the trailing newline."""
        return json.dumps(self.to_dict()) + "\n"

    @classmethod
    def from_dict(cls, data: dict) -> Optional["LayoutSelectionEvent"]:
        """Build an event from decoded JSON, or None if the shape is wrong."""
        if not isinstance(data, dict):
            return None

        ts = data.get("ts")
        class_hash = data.get("wmClassHash")
        title_hash = data.get("titleHash")
        layout_id = data.get("layoutId")

        # bool is an int subclass
        if not isinstance(ts, (int, float)) or isinstance(ts, bool):
            return None
        if not math.isfinite(ts):
            return None
        if not all(isinstance(v, str) for v in (class_hash, title_hash, layout_id)):
            return None

        return cls(int(ts), class_hash, title_hash, layout_id)

    @classmethod
    def from_json_line(cls, line: str) -> Optional["LayoutSelectionEvent"]:
        """
        Decode one log line.

        Raises:
            json.JSONDecodeError: If the line is not valid JSON
        """
        return cls.from_dict(json.loads(line))


def make_title_key(window_class_hash: str, title_hash: str) -> str:
    return f"{window_class_hash}:{title_hash}"

"""
Telemetry

Logger factory and logging setup. Components log with a bracketed prefix:
``[LayoutHistory] Loaded 12 events``.
"""

from __future__ import annotations
import logging

from pubsub import pub

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (pass ``__name__``)."""
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler at the given level name."""
    level = (level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=_LOG_FORMAT,
    )


def debug_event_logger(topic=pub.AUTO_TOPIC, **kwargs):
    """Log every message published on the event bus (pub.ALL_TOPICS listener)."""
    topic_name = topic.getName()
    data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
    get_logger("snapspace.bus").debug(f"EVENT: {topic_name} | {data_str}")

"""Observability — a bounded, thread-safe record of builds, rebuilds and reloads.

Quick Start:
    >>> from tabby.observability import EventLog, RebuildAttempted
    >>> log = EventLog()
    >>> # pass ``log`` to DevWatcher / build entry points
    >>> log.query(event_type=RebuildAttempted)

"""

from tabby.observability.events import (
    BuildCompleted,
    RebuildAttempted,
    ReloadBroadcast,
    TabbyEvent,
    now_ns,
)
from tabby.observability.log import EventLog, SessionSummary

__all__ = [
    "BuildCompleted",
    "EventLog",
    "RebuildAttempted",
    "ReloadBroadcast",
    "SessionSummary",
    "TabbyEvent",
    "now_ns",
]

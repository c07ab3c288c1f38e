"""Event log for one tabby process.

A bounded, lock-protected ring of build and dev-loop events.  The watcher
thread appends, the server thread (and tests) read.  On shutdown the dev
session prints :meth:`EventLog.summary` as a one-line recap.
"""

import threading
from collections import deque
from dataclasses import dataclass

from tabby.observability.events import (
    BuildCompleted,
    RebuildAttempted,
    ReloadBroadcast,
    TabbyEvent,
)


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Counts over the events currently held by an EventLog."""

    builds: int = 0
    rebuilds: int = 0
    failed_rebuilds: int = 0
    reloads: int = 0
    clients_notified: int = 0
    last_error: str | None = None

    def describe(self) -> str:
        text = f"{self.rebuilds} rebuilds ({self.failed_rebuilds} failed), {self.reloads} reloads"
        if self.last_error:
            text += f"; last error: {self.last_error}"
        return text


class EventLog:
    """Bounded event store, newest events kept.

    Args:
        max_events: Capacity of the ring; the oldest event is dropped when
            a new one arrives at capacity.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 1_000) -> None:
        self._max_events = max_events
        self._events: deque[TabbyEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        return self._max_events

    def append(self, event: TabbyEvent) -> None:
        with self._lock:
            self._events.append(event)

    def snapshot(self) -> tuple[TabbyEvent, ...]:
        """All held events, oldest first."""
        with self._lock:
            return tuple(self._events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[TabbyEvent]:
        """Matching events, newest first.

        ``path`` matches rebuild events whose trigger paths contain it as a
        substring; other event kinds never match a path filter.
        """
        results: list[TabbyEvent] = []
        for event in reversed(self.snapshot()):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and not (
                isinstance(event, RebuildAttempted)
                and any(path in trigger for trigger in event.trigger_paths)
            ):
                continue
            results.append(event)
        return results

    def last(self, event_type: type) -> TabbyEvent | None:
        """The newest event of *event_type*, if any."""
        found = self.query(event_type=event_type, limit=1)
        return found[0] if found else None

    def summary(self) -> SessionSummary:
        builds = rebuilds = failed = reloads = notified = 0
        last_error: str | None = None
        for event in self.snapshot():
            match event:
                case BuildCompleted():
                    builds += 1
                case RebuildAttempted(error=error):
                    if error is not None:
                        failed += 1
                        last_error = error
                    elif event.rebuilt:
                        rebuilds += 1
                case ReloadBroadcast(clients_notified=count):
                    reloads += 1
                    notified += count
        return SessionSummary(
            builds=builds,
            rebuilds=rebuilds + failed,
            failed_rebuilds=failed,
            reloads=reloads,
            clients_notified=notified,
            last_error=last_error,
        )

    def clear(self) -> int:
        """Drop every event; returns how many were held."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

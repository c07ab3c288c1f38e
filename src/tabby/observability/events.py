"""Build and dev-loop events.

All events are frozen dataclasses with a ``timestamp_ns`` taken from the
monotonic clock, so they can be produced on the watcher thread and read
from the server thread without copying.
"""

import time
from dataclasses import dataclass

from tabby._types import BuildMode


@dataclass(frozen=True, slots=True)
class BuildCompleted:
    """A pipeline run finished and its output is on disk.

    Attributes:
        mode: Which entry point ran.
        pages: Number of pages written.
        files: Total number of files written (pages, assets, exports).
        duration_ms: Wall-clock time of the run.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    mode: BuildMode
    pages: int
    files: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RebuildAttempted:
    """The watcher handled one debounced batch of changes.

    Attributes:
        trigger_paths: Project-relative paths in the batch.
        rebuilt: True if a rebuild ran and succeeded.
        error: Error message if the rebuild failed, else None.
        duration_ms: Time spent handling the batch.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger_paths: tuple[str, ...]
    rebuilt: bool
    error: str | None
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ReloadBroadcast:
    """A reload signal was fanned out to connected sessions."""

    clients_notified: int
    timestamp_ns: int


type TabbyEvent = BuildCompleted | RebuildAttempted | ReloadBroadcast


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()

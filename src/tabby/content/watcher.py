"""File watcher — triggers incremental rebuilds on source changes.

Watches the project root for changes to content, static assets, the
project theme, and the config file.  The output and cache directories are
excluded so that writing a build never triggers another one.

The watcher runs ``watchfiles.watch`` on its own thread.  Each debounced
batch is handled synchronously on that thread, so rebuilds never overlap:

- a batch with no relevant paths is dropped
- content-only batches rebuild when the content manifest changed
- config / static / theme edits force a rebuild
- a successful rebuild is followed by exactly one reload broadcast
- a failed rebuild is reported and the previous output stays in place
"""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change, DefaultFilter

from tabby._errors import WatcherError
from tabby.config import CONFIG_FILENAMES
from tabby.observability.events import RebuildAttempted, ReloadBroadcast, now_ns

if TYPE_CHECKING:
    from tabby.build.pipeline import BuildResult
    from tabby.config import TabbyConfig
    from tabby.observability.log import EventLog
    from tabby.server.broadcaster import ReloadBroadcaster

type ChangeCategory = Literal["content", "static", "theme", "config"]

# Directories under the root that never trigger a rebuild
_IGNORED_DIRS = frozenset({"target", "node_modules"})

DEBOUNCE_MS = 100
STEP_MS = 100


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A relevant file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: Which part of the project changed.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]
    category: ChangeCategory


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, config: TabbyConfig) -> ChangeCategory | None:
    """Determine the category of a changed file based on its location.

    Returns None for paths that must not trigger a rebuild: anything
    outside the root, inside the output or cache directory, or in a
    hidden or ignored directory.
    """
    for excluded in (config.output_path, config.cache_path):
        if path == excluded or path.is_relative_to(excluded):
            return None

    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    parts = rel.parts
    if not parts:
        return None

    if len(parts) == 1 and parts[0] in CONFIG_FILENAMES:
        return "config"

    if any(part.startswith(".") for part in parts) or parts[0] in _IGNORED_DIRS:
        return None

    first_dir = parts[0]
    if first_dir == config.build.content_dir:
        return "content"
    if first_dir == config.build.static_dir:
        return "static"
    if first_dir == config.themes_path.name:
        return "theme"
    return None


def collect_events(
    raw_changes: Iterable[tuple[Change, str]],
    config: TabbyConfig,
) -> list[ChangeEvent]:
    """Turn one watchfiles batch into relevant ChangeEvents, sorted by path."""
    events: list[ChangeEvent] = []
    for change_type, path_str in raw_changes:
        path = Path(path_str)
        category = categorize_change(path, config)
        if category is None:
            continue
        kind = _CHANGE_KIND_MAP.get(change_type, "modified")
        events.append(ChangeEvent(path=path, kind=kind, category=category))
    events.sort(key=lambda e: str(e.path))
    return events


class DevWatcher:
    """Watches the project and rebuilds, then broadcasts a reload.

    The shutdown flag is owned by the caller: setting it stops the watch
    loop within one polling step.

    Args:
        config: Project configuration (root and directory layout).
        rebuild: Runs one incremental rebuild; called with ``force=True``
            when non-content files changed.
        broadcaster: Receives one ``publish()`` per successful rebuild.
        shutdown: Shared shutdown flag.
        event_log: Optional EventLog for rebuild and reload events.

    """

    def __init__(
        self,
        config: TabbyConfig,
        rebuild: Callable[..., BuildResult],
        broadcaster: ReloadBroadcaster,
        shutdown: threading.Event,
        *,
        event_log: EventLog | None = None,
        debounce_ms: int = DEBOUNCE_MS,
        step_ms: int = STEP_MS,
    ) -> None:
        self._config = config
        self._rebuild = rebuild
        self._broadcaster = broadcaster
        self._shutdown = shutdown
        self._event_log = event_log
        self._debounce_ms = debounce_ms
        self._step_ms = step_ms
        self._default_filter = DefaultFilter()
        self._thread: threading.Thread | None = None
        self.error: WatcherError | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread.

        Raises:
            WatcherError: If the project root does not exist.

        """
        if self.is_running:
            return
        if not self._config.root.is_dir():
            msg = f"Cannot watch {self._config.root}: not a directory"
            raise WatcherError(msg)

        self._thread = threading.Thread(
            target=self._watch_loop,
            name="tabby-watcher",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread to exit.  Returns True if it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def accepts(self, change: Change, path: str) -> bool:
        """watchfiles filter: drop editor junk and paths outside the watched set."""
        if not self._default_filter(change, path):
            return False
        return categorize_change(Path(path), self._config) is not None

    def handle_batch(self, raw_changes: Iterable[tuple[Change, str]]) -> bool:
        """Handle one debounced batch.  Returns True if a reload was broadcast.

        Rebuild failures of any kind are reported on stderr and swallowed:
        one broken file must not end the dev session.
        """
        events = collect_events(raw_changes, self._config)
        if not events:
            return False

        force = any(e.category != "content" for e in events)
        triggers = tuple(self._relative(e.path) for e in events)
        t0 = time.perf_counter()
        try:
            result = self._rebuild(force=force)
        except Exception as exc:
            print(f"  Rebuild failed: {exc}", file=sys.stderr)
            self._record_rebuild(triggers, rebuilt=False, error=str(exc), t0=t0)
            return False

        self._record_rebuild(triggers, rebuilt=result.rebuilt, error=None, t0=t0)
        if not result.rebuilt:
            return False

        print(f"  Rebuilt in {result.duration_ms:.0f}ms", file=sys.stderr)
        notified = self._broadcaster.publish()
        if self._event_log is not None:
            self._event_log.append(ReloadBroadcast(clients_notified=notified, timestamp_ns=now_ns()))
        return True

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles until the shutdown flag is set."""
        from watchfiles import watch

        try:
            for raw_changes in watch(
                self._config.root,
                watch_filter=self.accepts,
                stop_event=self._shutdown,
                debounce=self._debounce_ms,
                step=self._step_ms,
                raise_interrupt=False,
            ):
                if self._shutdown.is_set():
                    break
                self.handle_batch(raw_changes)
        except Exception as exc:
            self.error = WatcherError(f"File watcher stopped: {exc}")
            print(f"  {self.error}", file=sys.stderr)

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self._config.root).as_posix()
        except ValueError:
            return path.as_posix()

    def _record_rebuild(
        self,
        triggers: tuple[str, ...],
        *,
        rebuilt: bool,
        error: str | None,
        t0: float,
    ) -> None:
        if self._event_log is None:
            return
        self._event_log.append(RebuildAttempted(
            trigger_paths=triggers,
            rebuilt=rebuilt,
            error=error,
            duration_ms=(time.perf_counter() - t0) * 1000,
            timestamp_ns=now_ns(),
        ))

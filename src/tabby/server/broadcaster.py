"""Reload broadcaster — fans one "reload" signal out to every open session.

The watcher thread publishes; WebSocket sessions live on the server's event
loop.  Each session owns an ``asyncio.Queue`` bound to the loop it was
created on, and :meth:`ReloadBroadcaster.publish` hands the message to that
loop with ``call_soon_threadsafe``, so publishing is safe from any thread.
"""

from __future__ import annotations

import asyncio
import itertools
import threading
from dataclasses import dataclass, field

RELOAD_MESSAGE = "reload"

_ids = itertools.count(1)


@dataclass(frozen=True, slots=True)
class ReloadSession:
    """A connected browser session.

    Attributes:
        client_id: Unique identifier for this connection.
        loop: The event loop the session's handler runs on.
        queue: Messages waiting to be sent to the browser.

    """

    client_id: int
    loop: asyncio.AbstractEventLoop = field(compare=False, hash=False)
    queue: asyncio.Queue[str] = field(default_factory=asyncio.Queue, compare=False, hash=False)


class ReloadBroadcaster:
    """Tracks live sessions and pushes reload signals to all of them.

    Thread-safe: the session set is protected by a lock.  Slow clients may
    accumulate several queued reloads; reload is idempotent, so the extra
    ones are harmless.

    """

    def __init__(self) -> None:
        self._sessions: set[ReloadSession] = set()
        self._lock = threading.Lock()

    @property
    def session_count(self) -> int:
        """Number of currently connected sessions."""
        with self._lock:
            return len(self._sessions)

    def connect(self) -> ReloadSession:
        """Register a session for the calling coroutine's event loop."""
        session = ReloadSession(client_id=next(_ids), loop=asyncio.get_running_loop())
        with self._lock:
            self._sessions.add(session)
        return session

    def disconnect(self, session: ReloadSession) -> None:
        """Remove a session (no-op if already gone)."""
        with self._lock:
            self._sessions.discard(session)

    def publish(self, message: str = RELOAD_MESSAGE) -> int:
        """Queue *message* for every session.  Callable from any thread.

        Returns:
            Number of sessions the message was handed to.

        """
        with self._lock:
            sessions = tuple(self._sessions)

        count = 0
        for session in sessions:
            try:
                session.loop.call_soon_threadsafe(session.queue.put_nowait, message)
                count += 1
            except RuntimeError:
                # Loop already closed; the session is dead.
                self.disconnect(session)
        return count

"""Dev session — watcher thread plus Pounce server, with ordered shutdown.

Two execution contexts:

- the watcher thread blocks on filesystem notifications and runs rebuilds
- Pounce's event loop serves static files and WebSocket sessions

Shutdown order: Pounce handles SIGINT/SIGTERM and stops the HTTP layer
first (no new connections, in-flight ones finish).  When ``run()`` returns
the shared shutdown flag is set and the watcher gets a bounded grace
period to notice it.
"""

from __future__ import annotations

import functools
import sys
import threading
import webbrowser
from typing import TYPE_CHECKING

from tabby._errors import ServerError
from tabby.build.pipeline import build_dev_incremental
from tabby.content.watcher import DevWatcher
from tabby.server.app import create_app
from tabby.server.broadcaster import ReloadBroadcaster

if TYPE_CHECKING:
    from tabby.config import TabbyConfig
    from tabby.observability.log import EventLog

# Seconds the watcher gets to exit after the server stopped
SHUTDOWN_GRACE_S = 0.5


def run_dev_server(
    config: TabbyConfig,
    *,
    build_overrides: dict[str, object] | None = None,
    open_browser: bool = False,
    event_log: EventLog | None = None,
) -> None:
    """Serve ``config.output_path`` with live reload until interrupted.

    The initial dev build must already have run.

    Args:
        config: Project configuration (root, host, port, output dir).
        build_overrides: Config overrides re-applied on every rebuild
            (``output_dir``, ``base_url``).
        open_browser: Open the site in the default browser once serving.
        event_log: Optional EventLog shared with the watcher.

    Raises:
        ServerError: If the server cannot bind its port.

    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    broadcaster = ReloadBroadcaster()
    shutdown = threading.Event()

    rebuild = functools.partial(
        build_dev_incremental,
        config.root,
        config.port,
        event_log=event_log,
        **(build_overrides or {}),
    )
    watcher = DevWatcher(config, rebuild, broadcaster, shutdown, event_log=event_log)

    app = create_app(config.output_path, broadcaster)
    server = Server(
        ServerConfig(host=config.host, port=config.port, workers=1),
        app,
    )

    watcher.start()
    if open_browser:
        url = f"http://{config.host}:{config.port}/"
        threading.Timer(0.5, webbrowser.open, args=(url,)).start()

    try:
        server.run()
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        msg = f"Cannot serve on {config.host}:{config.port}: {exc}"
        raise ServerError(msg) from exc
    finally:
        shutdown.set()
        if not watcher.join(timeout=SHUTDOWN_GRACE_S):
            print("  Watcher did not stop in time; exiting anyway", file=sys.stderr)
        if event_log is not None:
            print(f"  Session: {event_log.summary().describe()}", file=sys.stderr)

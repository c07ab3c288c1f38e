"""Dev server ASGI app — live-reload WebSocket plus the built output.

Routes:
    ``/__tabby/ws``  WebSocket; the server sends the literal text ``reload``
                     after each successful rebuild, client messages are read
                     and ignored.
    ``/``            The output directory, served with ``html=True`` so
                     ``/guide/`` serves ``guide/index.html``.
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path

from starlette.applications import Starlette
from starlette.routing import Mount, WebSocketRoute
from starlette.staticfiles import StaticFiles
from starlette.websockets import WebSocket, WebSocketDisconnect

from tabby.render.template import RELOAD_PATH
from tabby.server.broadcaster import ReloadBroadcaster


async def reload_session(websocket: WebSocket, broadcaster: ReloadBroadcaster) -> None:
    """Serve one browser session until it disconnects.

    Waits on the next broadcast message and the next inbound frame at the
    same time; a broadcast is forwarded, inbound text is dropped, and a
    disconnect ends the session.  A send that fails because the socket is
    already half closed ends the session the same way.
    """
    await websocket.accept()
    session = broadcaster.connect()
    outgoing: asyncio.Task[str] | None = None
    incoming: asyncio.Task[dict] | None = None
    try:
        while True:
            if outgoing is None:
                outgoing = asyncio.ensure_future(session.queue.get())
            if incoming is None:
                incoming = asyncio.ensure_future(websocket.receive())

            done, _ = await asyncio.wait(
                {outgoing, incoming}, return_when=asyncio.FIRST_COMPLETED,
            )

            if incoming in done:
                message = incoming.result()
                incoming = None
                if message["type"] == "websocket.disconnect":
                    break

            if outgoing in done:
                text = outgoing.result()
                outgoing = None
                await websocket.send_text(text)
    except (WebSocketDisconnect, RuntimeError, OSError):
        pass
    finally:
        broadcaster.disconnect(session)
        for task in (outgoing, incoming):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task


def create_app(output_dir: Path, broadcaster: ReloadBroadcaster) -> Starlette:
    """Build the dev server app serving *output_dir*.

    The output directory must exist (the initial dev build creates it).
    """

    async def reload_endpoint(websocket: WebSocket) -> None:
        await reload_session(websocket, broadcaster)

    return Starlette(
        routes=[
            WebSocketRoute(RELOAD_PATH, reload_endpoint),
            Mount("/", app=StaticFiles(directory=output_dir, html=True, check_dir=False), name="site"),
        ],
    )

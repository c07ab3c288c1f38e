"""Dev server: reload broadcaster, ASGI app, and the dev session runner."""

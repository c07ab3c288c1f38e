"""Tabby — a static documentation site builder with a live-reload dev loop.

Turns a tree of Markdown files into a routed, templated HTML site. In
development it watches the source tree, rebuilds when content actually
changed, and tells every open browser tab to reload.

Quick start::

    import tabby

    tabby.init("my-docs/")         # Scaffold content/, tabby.toml, .gitignore
    tabby.build("my-docs/")        # Production build into dist/
    tabby.dev("my-docs/")          # Dev server with watcher and live reload

Built on:

    patitas     Markdown parser    (content to HTML)
    rosettes    Syntax highlighter (code blocks)
    kida        Template engine    (HTML documents)
    pounce      ASGI server        (dev server)
    watchfiles  File watcher       (rebuild trigger)

"""

__version__ = "0.1.0-dev"

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__all__ = [
    "TabbyConfig",
    "__version__",
    "build",
    "dev",
    "init",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import tabby`` fast; the build and server stacks load on first use.
    """
    if name == "TabbyConfig":
        from tabby.config import TabbyConfig

        return TabbyConfig

    if name == "build":
        from tabby.app import build

        return build

    if name == "dev":
        from tabby.app import dev

        return dev

    if name == "init":
        from tabby.app import init

        return init

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

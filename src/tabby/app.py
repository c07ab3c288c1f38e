"""Tabby application — the public entry points.

``build`` produces a deployable static site, ``dev`` builds once and then
serves the output with file watching and live reload, ``init`` scaffolds a
new project.
"""

from __future__ import annotations

from pathlib import Path

from tabby.build.pipeline import BuildResult
from tabby.config_loader import load_config


def _build_overrides(kwargs: dict[str, object]) -> dict[str, object]:
    """Keep only the overrides the build pipeline accepts on every rebuild."""
    return {
        key: value
        for key, value in kwargs.items()
        if key in ("output_dir", "base_url") and value is not None
    }


def build(root: str | Path = ".", **kwargs: object) -> BuildResult:
    """Build the site for deployment.

    Renders every page into ``output_dir`` (cleaned first), copies the theme
    and static assets, and writes the sitemap, feed and search index when
    enabled.  Nothing is written if any page fails to render.

    Args:
        root: Path to the site root directory.
        **kwargs: Config overrides (``output_dir``, ``base_url``).

    """
    from tabby.banner import print_build_summary
    from tabby.build.pipeline import build as run_build

    result = run_build(root, **_build_overrides(kwargs))
    print_build_summary(result)
    return result


def dev(root: str | Path = ".", *, open_browser: bool = False, **kwargs: object) -> None:
    """Start the development server.

    Runs an initial dev build (fatal on failure), then serves the output
    with a watcher thread that rebuilds on change and pushes ``reload`` to
    every connected browser.  Rebuild failures after startup are reported
    and the session keeps running.

    Args:
        root: Path to the site root directory.
        open_browser: Open the site in the default browser once serving.
        **kwargs: Config overrides (``host``, ``port``, ``output_dir``,
            ``base_url``).

    """
    from tabby.banner import print_banner
    from tabby.build.pipeline import build_dev
    from tabby.observability.log import EventLog
    from tabby.server.dev import run_dev_server

    overrides = {key: value for key, value in kwargs.items() if value is not None}
    config = load_config(Path(root), **overrides)
    build_overrides = _build_overrides(overrides)
    event_log = EventLog()

    result = build_dev(config.root, config.port, event_log=event_log, **build_overrides)
    print_banner(config, result, mode="dev")

    run_dev_server(
        config,
        build_overrides=build_overrides,
        open_browser=open_browser,
        event_log=event_log,
    )


def init(root: str | Path = ".") -> list[Path]:
    """Scaffold a new project under *root* without overwriting anything."""
    import sys

    from tabby.scaffold import scaffold

    written = scaffold(Path(root))
    for path in written:
        print(f"  Created {path}", file=sys.stderr)
    if not written:
        print("  Nothing to do; project files already exist", file=sys.stderr)
    return written

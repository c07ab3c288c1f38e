"""Tabby theme loader — fallback chain for templates and embedded assets.

A project theme at ``themes/<name>/templates/`` takes priority.  When a
template is not found there, Kida falls through to the bundled default
theme.  The two embedded asset blobs always come from the bundled theme.

Thread Safety:
    All returned values are read-only paths.  Safe for free-threading.

"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tabby.config import TabbyConfig

# Embedded blobs written to <output>/assets/ on every build
ASSET_NAMES: tuple[str, ...] = ("app.min.js", "theme.css")


def _bundled_theme_path() -> Path:
    """Return the absolute path to the bundled default theme."""
    return Path(__file__).parent / "default"


def get_template_dirs(config: TabbyConfig) -> list[Path]:
    """Return template directories in priority order.

    Returns:
        ``[project_theme_templates, bundled_default_templates]``

    The project directory is included even if it does not exist yet (the
    user may create it after the dev server started).

    """
    bundled = _bundled_theme_path() / "templates"
    user_dir = config.themes_path / config.theme.name / "templates"

    dirs: list[Path] = []
    if user_dir != bundled:
        dirs.append(user_dir)
    dirs.append(bundled)
    return dirs


def read_embedded_assets() -> dict[str, bytes]:
    """Return the bundled asset blobs keyed by file name."""
    assets_dir = _bundled_theme_path() / "assets"
    return {name: (assets_dir / name).read_bytes() for name in ASSET_NAMES}

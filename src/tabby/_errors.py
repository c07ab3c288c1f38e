"""Tabby error hierarchy.

All tabby-specific errors inherit from TabbyError for easy catching.
"""

from __future__ import annotations

from pathlib import Path


class TabbyError(Exception):
    """Base error for all tabby operations."""


class ConfigError(TabbyError):
    """Unreadable or unparseable project configuration."""


class ContentError(TabbyError):
    """Error in content processing (discovery, frontmatter, routing).

    Attributes:
        path: The content file (or directory) the error refers to, if any.

    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class RenderError(TabbyError):
    """Template, layout, or data-serialization failure."""


class OutputError(TabbyError):
    """Filesystem failure while writing build output or the manifest."""


class WatcherError(TabbyError):
    """The file watcher could not be set up."""


class ServerError(TabbyError):
    """The dev server could not bind or lost its socket."""

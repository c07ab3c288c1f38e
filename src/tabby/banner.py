"""Console output — startup banner and build summary.

Everything goes to stderr.  Colour is used only on a TTY and never when
``NO_COLOR`` is set or ``TERM=dumb``.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tabby.build.pipeline import BuildResult
    from tabby.config import TabbyConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------


def _supports_color() -> bool:
    """Return True if stderr is a colour-capable terminal."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""

_MODE_COLORS: dict[str, str] = {
    "dev": _GREEN,
    "build": _YELLOW,
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_banner(config: TabbyConfig, result: BuildResult, mode: str) -> str:
    """Return the banner text for a finished initial build."""
    from tabby import __version__

    color = _MODE_COLORS.get(mode, _DIM)
    lines = [
        "",
        f"  {_BOLD}tabby{_RESET} {_DIM}v{__version__}{_RESET}  {color}[{mode}]{_RESET}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} {_plural(result.pages, 'page')} built "
        f"{_DIM}in {result.duration_ms:.0f}ms{_RESET}",
        f"  {_DIM}├─{_RESET} content: {_DIM}{config.content_path}{_RESET}",
    ]

    if mode == "dev":
        lines.append(f"  {_DIM}├─{_RESET} output: {_DIM}{config.output_path}{_RESET}")
        lines.append(f"  {_DIM}└─{_RESET} {_GREEN}live reload{_RESET} on {_DIM}/__tabby/ws{_RESET}")
        lines.append("")
        lines.append(f"  {_BOLD}{_CYAN}http://{config.host}:{config.port}/{_RESET}")
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")
    else:
        lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    lines.append("")
    return "\n".join(lines)


def print_banner(config: TabbyConfig, result: BuildResult, mode: str) -> None:
    """Print the startup banner to stderr."""
    print(format_banner(config, result, mode), file=sys.stderr)


def print_build_summary(result: BuildResult) -> None:
    """Print the file counts of a finished production build to stderr."""
    assets = sum(1 for f in result.files if f.kind in ("asset", "static"))
    exports = [f.output_path.name for f in result.files if f.kind in ("sitemap", "feed", "search")]
    lines = [
        f"  Wrote {_plural(result.pages, 'page')}",
        f"  Copied {_plural(assets, 'asset')}",
    ]
    if exports:
        lines.append(f"  Generated {', '.join(exports)}")
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")
    print("\n".join(lines), file=sys.stderr)

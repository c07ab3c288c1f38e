"""Static asset copying — the project's ``static/`` tree into the output root.

``static/favicon.ico`` ends up at ``dist/favicon.ico`` and
``static/img/logo.png`` at ``dist/img/logo.png``.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from tabby._errors import OutputError
from tabby.build.output import OutputFile

# Files/directories skipped during asset copying
_HIDDEN_PREFIXES = (".",)
_SKIP_DIRS = frozenset({"__pycache__"})


def copy_static_assets(static_path: Path, output_dir: Path) -> tuple[OutputFile, ...]:
    """Recursively copy *static_path* into *output_dir*.

    Skips hidden files and ``__pycache__`` directories.  A missing static
    directory copies nothing.

    Raises:
        OutputError: If a file cannot be copied.

    """
    if not static_path.is_dir():
        return ()

    results: list[OutputFile] = []
    for src_file in sorted(static_path.rglob("*")):
        if not src_file.is_file():
            continue
        relative = src_file.relative_to(static_path)
        if any(part in _SKIP_DIRS for part in relative.parts):
            continue
        if any(part.startswith(_HIDDEN_PREFIXES) for part in relative.parts):
            continue

        t0 = time.perf_counter()
        dest_file = output_dir / relative
        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_file, dest_file)
            size = dest_file.stat().st_size
        except OSError as exc:
            msg = f"Cannot copy static asset {relative}: {exc}"
            raise OutputError(msg) from exc

        results.append(OutputFile(
            source_path=f"/{relative.as_posix()}",
            output_path=dest_file,
            kind="static",
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        ))

    return tuple(results)

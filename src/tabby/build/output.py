"""Output writing — rendered documents and embedded assets to the output tree.

A full build cleans the output directory first.  A dev incremental build
writes over the existing tree so the static file server keeps serving
while the rebuild runs; files for deleted pages linger until the next full
build.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tabby._errors import OutputError
from tabby.site.model import Route
from tabby.theme import read_embedded_assets


@dataclass(frozen=True, slots=True)
class OutputFile:
    """Record of a single file written during a build.

    Attributes:
        source_path: Logical source (URL path, or ``/assets/theme.css``).
        output_path: Absolute filesystem path to the written file.
        kind: Category of the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to write this file.

    """

    source_path: str
    output_path: Path
    kind: Literal["page", "asset", "static", "sitemap", "feed", "search"]
    size_bytes: int
    duration_ms: float


def clean_output(output_dir: Path) -> None:
    """Remove and recreate *output_dir*."""
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot clean output directory {output_dir}: {exc}"
        raise OutputError(msg) from exc


def write_output(
    documents: Sequence[tuple[Route, str]],
    output_dir: Path,
    *,
    clean: bool,
) -> tuple[OutputFile, ...]:
    """Write every rendered document at its route's output path, then the assets.

    Args:
        documents: ``(route, html)`` pairs from the render stage.
        output_dir: Root of the output tree.
        clean: Remove the output directory first (full builds only).

    Raises:
        OutputError: On any filesystem failure.

    """
    if clean:
        clean_output(output_dir)

    written: list[OutputFile] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for route, html in documents:
            if route.output is None:
                continue
            t0 = time.perf_counter()
            filepath = output_dir / route.output
            size = _write_bytes(filepath, html.encode("utf-8"))
            written.append(OutputFile(
                source_path=route.url_path,
                output_path=filepath,
                kind="page",
                size_bytes=size,
                duration_ms=(time.perf_counter() - t0) * 1000,
            ))
        written.extend(write_embedded_assets(output_dir))
    except OSError as exc:
        msg = f"Cannot write output to {output_dir}: {exc}"
        raise OutputError(msg) from exc
    return tuple(written)


def write_embedded_assets(output_dir: Path) -> tuple[OutputFile, ...]:
    """Write the bundled script and stylesheet to ``<output>/assets/`` verbatim."""
    written: list[OutputFile] = []
    for name, data in read_embedded_assets().items():
        t0 = time.perf_counter()
        filepath = output_dir / "assets" / name
        size = _write_bytes(filepath, data)
        written.append(OutputFile(
            source_path=f"/assets/{name}",
            output_path=filepath,
            kind="asset",
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        ))
    return tuple(written)


def _write_bytes(filepath: Path, data: bytes) -> int:
    """Write *data* to *filepath*, creating parent dirs.  Returns bytes written."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_bytes(data)
    return len(data)

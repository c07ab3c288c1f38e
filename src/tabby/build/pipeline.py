"""Build pipeline — the staged run from content files to a written site.

Stages (each a function over immutable values, I/O only at the ends):

    1. load config             (absent file => defaults)
    2. check the content root  (missing => ContentError, fatal)
    3. discover records
    4. parse frontmatter       (one bad record aborts the run)
    5. markdown -> HTML + headings
    6. syntax highlighting
    7. route uniqueness check, then the site graph
    8. render documents        (optionally with the live-reload client)
    9. write output            (clean first for full builds only)
   10. sitemap / feed / search index / static assets
   11. persist the manifest   (dev incremental only)

Everything up to stage 8 runs before the output directory is touched, so
a failing run never leaves a half-written site behind it.

Three entry points differ only in stage selection: :func:`build`
(production), :func:`build_dev` (initial dev build) and
:func:`build_dev_incremental` (watcher-triggered rebuild).
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from tabby._errors import ContentError, OutputError
from tabby.build.manifest import diff_manifest, load_manifest, save_manifest
from tabby.build.output import OutputFile, write_output
from tabby.config_loader import load_config
from tabby.content.discovery import discover
from tabby.content.frontmatter import parse_frontmatter
from tabby.export.assets import copy_static_assets
from tabby.export.feed import write_feed
from tabby.export.search import write_search_index
from tabby.export.sitemap import write_sitemap
from tabby.observability.events import BuildCompleted, now_ns
from tabby.render.highlight import highlight_record
from tabby.render.markdown import render_record
from tabby.render.template import DocumentRenderer
from tabby.site.graph import build_graph
from tabby.site.route import ensure_unique_routes, resolve_route

if TYPE_CHECKING:
    from tabby._types import BuildMode, Manifest
    from tabby.config import TabbyConfig
    from tabby.content.records import ParsedRecord, RawRecord, RenderedRecord
    from tabby.observability.log import EventLog
    from tabby.site.model import Route, SiteGraph


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of one pipeline invocation.

    Attributes:
        mode: Which entry point ran.
        rebuilt: False only for a dev incremental run that found no changes.
        pages: Number of pages written.
        files: Every file written, pages first.
        changed: Manifest keys that triggered the run (incremental only).
        duration_ms: Wall-clock time of the run.
        output_dir: Absolute path to the output directory.

    """

    mode: BuildMode
    rebuilt: bool
    pages: int = 0
    files: tuple[OutputFile, ...] = ()
    changed: frozenset[str] = field(default_factory=frozenset)
    duration_ms: float = 0.0
    output_dir: Path | None = None


# ---------------------------------------------------------------------------
# Pure stages
# ---------------------------------------------------------------------------


def parse_records(raws: Sequence[RawRecord]) -> tuple[ParsedRecord, ...]:
    """Stage 4: frontmatter for every record; the first invalid one raises."""
    return tuple(parse_frontmatter(raw) for raw in raws)


def render_records(parsed: Sequence[ParsedRecord]) -> tuple[RenderedRecord, ...]:
    """Stages 5 and 6: markdown conversion, then highlighting."""
    return tuple(highlight_record(render_record(record)) for record in parsed)


def check_routes(records: Sequence[RenderedRecord], content_root: Path) -> None:
    """Stage 7a: refuse to build when two sources claim one URL or output file."""
    ensure_unique_routes([resolve_route(content_root, r.source_path) for r in records])


def render_documents(
    graph: SiteGraph,
    config: TabbyConfig,
    reload_port: int | None = None,
) -> tuple[tuple[Route, str], ...]:
    """Stage 8: every page rendered to a complete HTML document."""
    renderer = DocumentRenderer(config, reload_port)
    return tuple((page.route, renderer.render(page, graph)) for page in graph.pages)


def prepare_site(
    records: Sequence[RawRecord],
    config: TabbyConfig,
    reload_port: int | None = None,
) -> tuple[SiteGraph, tuple[tuple[Route, str], ...]]:
    """Stages 4 to 8 over already discovered records; no filesystem writes."""
    rendered = render_records(parse_records(records))
    check_routes(rendered, config.content_path)
    graph = build_graph(rendered, config)
    return graph, render_documents(graph, config, reload_port)


# ---------------------------------------------------------------------------
# I/O boundaries
# ---------------------------------------------------------------------------


def require_content_root(config: TabbyConfig) -> Path:
    """Stage 2: the content root must exist."""
    content_path = config.content_path
    if not content_path.is_dir():
        msg = f"Content directory not found: {content_path}"
        raise ContentError(msg, path=content_path)
    return content_path


def write_site(
    graph: SiteGraph,
    documents: Sequence[tuple[Route, str]],
    config: TabbyConfig,
    *,
    clean: bool,
) -> tuple[OutputFile, ...]:
    """Stages 9 and 10: documents, embedded assets, exports, static files."""
    output_dir = config.output_path
    files = list(write_output(documents, output_dir, clean=clean))
    files.extend(copy_static_assets(config.static_path, output_dir))
    files.extend(_write_exports(graph, config, output_dir))
    return tuple(files)


def _write_exports(graph: SiteGraph, config: TabbyConfig, output_dir: Path) -> list[OutputFile]:
    exports: list[tuple[str, Path]] = []
    try:
        if config.seo.sitemap:
            exports.append(("sitemap", write_sitemap(graph.pages, config.base_url, output_dir)))
        if config.seo.rss:
            exports.append(("feed", write_feed(graph.pages, config, output_dir)))
        if config.search.enabled:
            exports.append((
                "search",
                write_search_index(graph.pages, output_dir, config.search.max_content_length),
            ))
    except OSError as exc:
        msg = f"Cannot write export files to {output_dir}: {exc}"
        raise OutputError(msg) from exc

    return [
        OutputFile(
            source_path=f"/{path.name}",
            output_path=path,
            kind=kind,  # type: ignore[arg-type]
            size_bytes=path.stat().st_size,
            duration_ms=0.0,
        )
        for kind, path in exports
    ]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def _run_full(
    root: Path,
    mode: BuildMode,
    reload_port: int | None,
    event_log: EventLog | None,
    overrides: dict[str, object],
    *,
    reset_manifest: bool = False,
) -> BuildResult:
    t0 = time.perf_counter()
    config = load_config(root, **overrides)
    require_content_root(config)
    if reset_manifest:
        _discard_manifest(config.manifest_path)
    records = discover(config.content_path)
    graph, documents = prepare_site(records, config, reload_port)
    files = write_site(graph, documents, config, clean=True)
    return _finish(mode, graph, files, frozenset(), config, t0, event_log)


def _finish(
    mode: BuildMode,
    graph: SiteGraph,
    files: tuple[OutputFile, ...],
    changed: frozenset[str],
    config: TabbyConfig,
    t0: float,
    event_log: EventLog | None,
) -> BuildResult:
    duration_ms = (time.perf_counter() - t0) * 1000
    result = BuildResult(
        mode=mode,
        rebuilt=True,
        pages=len(graph.pages),
        files=files,
        changed=changed,
        duration_ms=duration_ms,
        output_dir=config.output_path,
    )
    if event_log is not None:
        event_log.append(BuildCompleted(
            mode=mode,
            pages=result.pages,
            files=len(files),
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        ))
    return result


def build(
    root: str | Path = ".",
    *,
    event_log: EventLog | None = None,
    **overrides: object,
) -> BuildResult:
    """Production build: clean output, no live-reload client.

    Raises:
        TabbyError: Any configuration, content, render or output failure;
            nothing is written unless every page rendered.

    """
    return _run_full(Path(root), "production", None, event_log, overrides)


def build_dev(
    root: str | Path,
    port: int,
    *,
    event_log: EventLog | None = None,
    **overrides: object,
) -> BuildResult:
    """Initial dev build: clean output, live-reload client bound to *port*.

    Any manifest left by an earlier session is discarded: it describes
    content this build may not have rendered, so the first watcher batch
    must rebuild and seed a fresh one.
    """
    return _run_full(Path(root), "dev", port, event_log, overrides, reset_manifest=True)


def build_dev_incremental(
    root: str | Path,
    port: int,
    *,
    force: bool = False,
    event_log: EventLog | None = None,
    **overrides: object,
) -> BuildResult:
    """Watcher-triggered rebuild.

    Diffs the content against the persisted manifest.  With no changes (and
    *force* unset) returns ``rebuilt=False`` without touching the output.
    Otherwise rebuilds the whole site over the existing output (no clean)
    and persists the new manifest after the write succeeded.

    Args:
        root: Project root.
        port: Dev server port for the live-reload client.
        force: Rebuild even when no content hash changed (config, static or
            theme edits, which the content manifest does not cover).

    """
    t0 = time.perf_counter()
    config = load_config(Path(root), **overrides)
    content_root = require_content_root(config)
    records = discover(content_root)

    old: Manifest = load_manifest(config.manifest_path)
    changed, new = diff_manifest(records, old, content_root)
    if not changed and not force:
        return BuildResult(
            mode="dev-incremental",
            rebuilt=False,
            duration_ms=(time.perf_counter() - t0) * 1000,
            output_dir=config.output_path,
        )

    graph, documents = prepare_site(records, config, port)
    files = write_site(graph, documents, config, clean=False)
    save_manifest(config.manifest_path, new)
    return _finish("dev-incremental", graph, files, frozenset(changed), config, t0, event_log)


def _discard_manifest(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        msg = f"Cannot remove stale manifest {path}: {exc}"
        raise OutputError(msg) from exc

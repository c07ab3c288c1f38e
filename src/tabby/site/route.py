"""Route resolution — map a content file to its URL and output paths.

    content/index.md                  -> /                      index.html
    content/guide/index.md            -> /guide/                guide/index.html
    content/guide/getting-started.md  -> /guide/getting-started guide/getting-started/index.html
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from tabby._errors import ContentError
from tabby.site.model import Route


def resolve_route(content_root: Path, source_path: Path) -> Route:
    """Resolve *source_path* (absolute or content-relative) to a Route."""
    try:
        relative = source_path.relative_to(content_root)
    except ValueError:
        relative = source_path

    posix = PurePosixPath(relative.as_posix())
    parent = "" if str(posix.parent) == "." else str(posix.parent)
    stem = posix.stem

    if stem == "index":
        url_path = f"/{parent}/" if parent else "/"
        output = Path(parent) / "index.html"
    else:
        url_path = f"/{parent}/{stem}" if parent else f"/{stem}"
        output = Path(parent) / stem / "index.html"

    return Route(url_path=url_path, source=relative, output=output)


def ensure_unique_routes(routes: list[Route] | tuple[Route, ...]) -> None:
    """Fail if two source files would claim the same URL or output file.

    ``guide.md`` and ``guide/index.md`` get different URLs (``/guide`` and
    ``/guide/``) but both write ``guide/index.html``; the second would
    silently overwrite the first.

    Raises:
        ContentError: Naming both colliding source files.

    """
    seen: dict[str, Route] = {}
    for route in routes:
        first = seen.get(route.url_path)
        if first is not None:
            msg = (
                f"Route collision: {first.source} and {route.source} "
                f"both resolve to {route.url_path}"
            )
            raise ContentError(msg, path=route.source)
        seen[route.url_path] = route

    outputs: dict[Path, Route] = {}
    for route in routes:
        if route.output is None:
            continue
        first = outputs.get(route.output)
        if first is not None:
            msg = (
                f"Route collision: {first.source} and {route.source} "
                f"both write {route.output}"
            )
            raise ContentError(msg, path=route.source)
        outputs[route.output] = route

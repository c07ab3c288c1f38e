"""Tests for tabby.site.route — URL and output path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabby._errors import ContentError
from tabby.site.model import Route
from tabby.site.route import ensure_unique_routes, resolve_route

ROOT = Path("/site/content")


class TestResolveRoute:
    """Each content file maps to one pretty URL and one index.html."""

    @pytest.mark.parametrize(
        ("source", "url_path", "output"),
        [
            ("index.md", "/", "index.html"),
            ("guide/index.md", "/guide/", "guide/index.html"),
            ("guide/getting-started.md", "/guide/getting-started", "guide/getting-started/index.html"),
            ("about.md", "/about", "about/index.html"),
            ("a/b/c.md", "/a/b/c", "a/b/c/index.html"),
        ],
    )
    def test_paths(self, source: str, url_path: str, output: str) -> None:
        route = resolve_route(ROOT, ROOT / source)
        assert route.url_path == url_path
        assert route.output == Path(output)
        assert route.source == Path(source)

    def test_relative_source(self) -> None:
        route = resolve_route(ROOT, Path("guide/install.md"))
        assert route.url_path == "/guide/install"

    def test_parent_dir(self) -> None:
        assert resolve_route(ROOT, ROOT / "index.md").parent_dir == ""
        assert resolve_route(ROOT, ROOT / "guide/deep/x.md").parent_dir == "guide/deep"


class TestStubRoute:
    def test_stub_has_no_source(self) -> None:
        stub = Route.stub("/elsewhere")
        assert stub.is_stub
        assert stub.output is None
        assert stub.parent_dir == ""


class TestUniqueRoutes:
    """Two files claiming the same output are rejected."""

    def test_distinct_routes_pass(self) -> None:
        ensure_unique_routes([
            resolve_route(ROOT, ROOT / "index.md"),
            resolve_route(ROOT, ROOT / "guide/index.md"),
            resolve_route(ROOT, ROOT / "guide/install.md"),
        ])

    def test_file_and_directory_index_collide(self) -> None:
        routes = [
            resolve_route(ROOT, ROOT / "guide.md"),
            resolve_route(ROOT, ROOT / "guide/index.md"),
        ]
        with pytest.raises(ContentError, match="guide/index.html"):
            ensure_unique_routes(routes)

    def test_duplicate_url(self) -> None:
        route = resolve_route(ROOT, ROOT / "about.md")
        with pytest.raises(ContentError, match="Route collision"):
            ensure_unique_routes([route, route])

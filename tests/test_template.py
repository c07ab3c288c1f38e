"""Tests for tabby.render.template and tabby.theme — document rendering and theme lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tabby._errors import RenderError
from tabby.config import SiteSettings, TabbyConfig, ThemeSettings
from tabby.render.template import (
    DocumentRenderer,
    build_page_data,
    live_reload_script,
    page_title,
    serialize_data,
)
from tabby.site.graph import assign_prev_next
from tabby.site.model import SidebarGroup, SidebarLink, SiteGraph
from tabby.theme import _bundled_theme_path, get_template_dirs, read_embedded_assets

from .conftest import make_page


# ---------------------------------------------------------------------------
# Theme lookup
# ---------------------------------------------------------------------------


class TestTheme:
    def test_bundled_templates(self) -> None:
        assert (_bundled_theme_path() / "templates" / "document.html").is_file()

    def test_embedded_assets(self) -> None:
        assets = read_embedded_assets()
        assert set(assets) == {"app.min.js", "theme.css"}
        assert all(assets.values())

    def test_project_theme_first(self, tmp_path: Path) -> None:
        dirs = get_template_dirs(TabbyConfig(root=tmp_path))
        assert dirs[0] == tmp_path / "themes" / "default" / "templates"
        assert dirs[-1] == _bundled_theme_path() / "templates"

    def test_project_override_used(self, tmp_path: Path) -> None:
        templates = tmp_path / "themes" / "custom" / "templates"
        templates.mkdir(parents=True)
        (templates / "document.html").write_text("<main>{{ body }}</main>")
        config = TabbyConfig(root=tmp_path, theme=ThemeSettings(name="custom"))

        page = make_page("/a", "A", source="a.md", html="<p>hi</p>")
        html = DocumentRenderer(config).render(page, SiteGraph(pages=(page,)))
        assert html.startswith("<main>")
        assert "<p>hi</p>" in html


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_page_title(self) -> None:
        assert page_title("Intro", "Docs") == "Intro | Docs"
        assert page_title("", "Docs") == "Docs"
        assert page_title("Intro", "") == "Intro"

    def test_live_reload_script(self) -> None:
        script = live_reload_script(4000)
        assert ":4000/__tabby/ws" in script
        assert "location.reload()" in script
        assert "10000" in script

    def test_serialize_escapes_script_close(self) -> None:
        text = serialize_data({"content": "</script><script>alert(1)</script>"})
        assert "</script>" not in text
        assert json.loads(text)["content"].startswith("</script>")

    def test_serialize_failure(self) -> None:
        with pytest.raises(RenderError):
            serialize_data({"bad": object()})


# ---------------------------------------------------------------------------
# Page data and rendering
# ---------------------------------------------------------------------------


class TestRender:
    def _graph(self) -> SiteGraph:
        a = make_page("/a", "A", source="a.md", next="/b")
        b = make_page("/b", "B", source="b.md", prev="/gone")
        sidebar = (SidebarGroup(text="Docs", items=(SidebarLink(text="Page B", link="/b"),)),)
        return SiteGraph(pages=(a, b), sidebar=sidebar)

    def test_stub_title_from_sidebar(self, tmp_path: Path) -> None:
        graph = self._graph()
        linked = SiteGraph(pages=tuple(assign_prev_next(graph.pages, ())), sidebar=graph.sidebar)
        data = build_page_data(linked.pages[0], linked, TabbyConfig(root=tmp_path))
        assert data["next"] == {"title": "Page B", "link": "/b"}
        assert "prev" not in data

    def test_unresolvable_stub_omitted(self, tmp_path: Path) -> None:
        graph = self._graph()
        linked = SiteGraph(pages=tuple(assign_prev_next(graph.pages, ())), sidebar=graph.sidebar)
        data = build_page_data(linked.pages[1], linked, TabbyConfig(root=tmp_path))
        assert "prev" not in data

    def test_sidebar_active_flag(self, tmp_path: Path) -> None:
        graph = self._graph()
        data = build_page_data(graph.pages[1], graph, TabbyConfig(root=tmp_path))
        assert data["site"]["sidebar"][0]["items"][0]["active"] is True

    def test_document(self, tmp_path: Path) -> None:
        config = TabbyConfig(root=tmp_path, site=SiteSettings(title="Docs", language="de"))
        page = make_page("/a", "A <b>", source="a.md", html="<p>Body</p>")
        html = DocumentRenderer(config).render(page, SiteGraph(pages=(page,)))

        assert '<html lang="de">' in html
        assert "<title>A &lt;b&gt; | Docs</title>" in html
        assert "<p>Body</p>" in html
        assert "tabby-layout-doc" in html
        assert "WebSocket" not in html

    def test_dev_document_has_reload_client(self, tmp_path: Path) -> None:
        page = make_page("/a", "A", source="a.md")
        html = DocumentRenderer(TabbyConfig(root=tmp_path), reload_port=3000).render(
            page, SiteGraph(pages=(page,)),
        )
        assert ":3000/__tabby/ws" in html

    def test_template_failure(self, tmp_path: Path) -> None:
        templates = tmp_path / "themes" / "broken" / "templates"
        templates.mkdir(parents=True)
        (templates / "document.html").write_text('{% include "does-not-exist.html" %}')
        config = TabbyConfig(root=tmp_path, theme=ThemeSettings(name="broken"))
        page = make_page("/a", "A", source="a.md")
        with pytest.raises(RenderError, match="/a"):
            DocumentRenderer(config).render(page, SiteGraph(pages=(page,)))

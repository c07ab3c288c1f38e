"""Tests for tabby.site.graph — sidebar grouping, nav and prev/next linking."""

from __future__ import annotations

from pathlib import Path

from .conftest import make_page

from tabby.config import SidebarSettings, TabbyConfig
from tabby.content.records import Frontmatter, RenderedRecord
from tabby.site.graph import (
    assign_prev_next,
    auto_sidebar,
    build_graph,
    collect_sidebar_links,
    dir_display_name,
)
from tabby.site.model import NavItem, SidebarGroup, SidebarLink

ROOT = Path("/site/content")


def _record(relative: str, title: str, **fields: object) -> RenderedRecord:
    return RenderedRecord(
        source_path=ROOT / relative,
        raw_text="",
        frontmatter=Frontmatter(title=title, **fields),  # type: ignore[arg-type]
        body="",
        html=f"<p>{title}</p>",
    )


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------


class TestAutoSidebar:
    """Doc pages grouped by directory and sorted by order, then title."""

    def test_sorted_by_order(self) -> None:
        pages = [
            make_page("/g/c", "C", source="g/c.md", order=3),
            make_page("/g/a", "A", source="g/a.md", order=1),
            make_page("/g/b", "B", source="g/b.md", order=2),
        ]
        (group,) = auto_sidebar(pages)
        assert [item.text for item in group.items] == ["A", "B", "C"]

    def test_unordered_pages_last_then_by_title(self) -> None:
        pages = [
            make_page("/g/zeta", "Zeta", source="g/zeta.md"),
            make_page("/g/alpha", "Alpha", source="g/alpha.md"),
            make_page("/g/first", "First", source="g/first.md", order=5),
        ]
        (group,) = auto_sidebar(pages)
        assert [item.text for item in group.items] == ["First", "Alpha", "Zeta"]

    def test_groups_sorted_by_directory(self) -> None:
        pages = [
            make_page("/reference/api", "API", source="reference/api.md"),
            make_page("/about", "About", source="about.md"),
            make_page("/guide/install", "Install", source="guide/install.md"),
        ]
        groups = auto_sidebar(pages)
        assert [g.text for g in groups] == ["Root", "Guide", "Reference"]

    def test_only_doc_layout_pages(self) -> None:
        pages = [
            make_page("/", "Home", source="index.md", layout="home"),
            make_page("/plain", "Plain", source="plain.md", layout="page"),
            make_page("/doc", "Doc", source="doc.md"),
        ]
        (group,) = auto_sidebar(pages)
        assert [item.link for item in group.items] == ["/doc"]

    def test_empty(self) -> None:
        assert auto_sidebar([]) == ()


class TestDirDisplayName:
    def test_root(self) -> None:
        assert dir_display_name("") == "Root"

    def test_hyphenated(self) -> None:
        assert dir_display_name("getting-started") == "Getting Started"

    def test_last_segment_only(self) -> None:
        assert dir_display_name("guide/advanced-topics") == "Advanced Topics"


# ---------------------------------------------------------------------------
# Prev / next
# ---------------------------------------------------------------------------


class TestPrevNext:
    """Neighbours follow the flattened sidebar order."""

    def test_neighbours(self) -> None:
        pages = [
            make_page("/a", "A", source="a.md"),
            make_page("/b", "B", source="b.md"),
            make_page("/c", "C", source="c.md"),
        ]
        linked = {p.url_path: p for p in assign_prev_next(pages, ["/a", "/b", "/c"])}
        assert linked["/a"].prev is None
        assert linked["/a"].next is not None and linked["/a"].next.url_path == "/b"
        assert linked["/b"].prev.url_path == "/a"  # type: ignore[union-attr]
        assert linked["/c"].next is None

    def test_page_not_in_sidebar(self) -> None:
        pages = [make_page("/orphan", "Orphan", source="orphan.md")]
        (page,) = assign_prev_next(pages, ["/a"])
        assert page.prev is None
        assert page.next is None

    def test_dangling_link_gives_no_neighbour(self) -> None:
        pages = [make_page("/a", "A", source="a.md")]
        (page,) = assign_prev_next(pages, ["/missing", "/a"])
        assert page.prev is None

    def test_frontmatter_overrides_both_sides(self) -> None:
        pages = [
            make_page("/a", "A", source="a.md"),
            make_page("/b", "B", source="b.md", next="/elsewhere"),
            make_page("/c", "C", source="c.md"),
        ]
        linked = {p.url_path: p for p in assign_prev_next(pages, ["/a", "/b", "/c"])}
        b = linked["/b"]
        assert b.next is not None and b.next.is_stub
        assert b.next.url_path == "/elsewhere"
        assert b.prev is None

    def test_inputs_not_mutated(self) -> None:
        pages = [make_page("/a", "A", source="a.md"), make_page("/b", "B", source="b.md")]
        assign_prev_next(pages, ["/a", "/b"])
        assert pages[0].next is None


# ---------------------------------------------------------------------------
# Whole graph
# ---------------------------------------------------------------------------


class TestBuildGraph:
    def test_auto_mode(self) -> None:
        config = TabbyConfig(root=Path("/site"), nav=(NavItem(text="Docs", link="/guide/"),))
        graph = build_graph(
            [
                _record("index.md", "Home"),
                _record("guide/b.md", "B", order=2),
                _record("guide/a.md", "A", order=1),
            ],
            config,
            ROOT,
        )
        assert len(graph.pages) == 3
        assert collect_sidebar_links(graph.sidebar) == ("/", "/guide/a", "/guide/b")
        assert [g.text for g in graph.sidebar] == ["Root", "Guide"]
        assert graph.nav == (NavItem(text="Docs", link="/guide/"),)
        a = graph.find_page("/guide/a")
        assert a is not None and a.next is not None
        assert a.next.url_path == "/guide/b"

    def test_manual_sidebar_verbatim(self) -> None:
        groups = (
            SidebarGroup(text="Start", items=(
                SidebarLink(text="Custom B", link="/b"),
                SidebarLink(text="Nowhere", link="/nowhere"),
                SidebarLink(text="Custom A", link="/a"),
            )),
        )
        config = TabbyConfig(root=Path("/site"), sidebar=SidebarSettings(auto=False, groups=groups))
        graph = build_graph([_record("a.md", "A"), _record("b.md", "B")], config, ROOT)

        assert graph.sidebar == groups
        b = graph.find_page("/b")
        a = graph.find_page("/a")
        assert b is not None and a is not None
        assert b.prev is None
        assert b.next is None
        assert a.prev is None

    def test_find_page_title_prefers_sidebar_text(self) -> None:
        groups = (SidebarGroup(text="G", items=(SidebarLink(text="Sidebar A", link="/a"),)),)
        config = TabbyConfig(root=Path("/site"), sidebar=SidebarSettings(auto=False, groups=groups))
        graph = build_graph([_record("a.md", "A"), _record("b.md", "B")], config, ROOT)

        assert graph.find_page_title("/a") == "Sidebar A"
        assert graph.find_page_title("/b") == "B"
        assert graph.find_page_title("/missing") is None

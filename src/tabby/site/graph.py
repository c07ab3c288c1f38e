"""Site graph construction — routing, sidebar, nav, and prev/next linking.

Every function here is pure and total: given the rendered records and the
config, it always produces a graph.  A broken manual sidebar is reproduced
as given; links that point nowhere simply resolve to no neighbour.
"""

from __future__ import annotations

import dataclasses
import sys
from collections import defaultdict
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from tabby.site.model import NavItem, Page, Route, SidebarGroup, SidebarLink, SiteGraph
from tabby.site.route import resolve_route

if TYPE_CHECKING:
    from tabby.config import TabbyConfig
    from tabby.content.records import RenderedRecord

# Sort key for pages without an explicit order: after everything
_UNORDERED = sys.maxsize


def build_graph(
    records: Sequence[RenderedRecord],
    config: TabbyConfig,
    content_root: Path | None = None,
) -> SiteGraph:
    """Build the complete SiteGraph for one build.

    Args:
        records: Rendered (and highlighted) content records.
        config: Project configuration (sidebar mode, nav entries).
        content_root: Directory routes are resolved against; defaults to
            ``config.content_path``.

    """
    root = content_root if content_root is not None else config.content_path
    pages = [
        Page(
            route=resolve_route(root, record.source_path),
            frontmatter=record.frontmatter,
            html=record.html,
            headings=record.headings,
        )
        for record in records
    ]

    sidebar = build_sidebar(pages, config)
    nav = build_nav(config)
    linked = assign_prev_next(pages, collect_sidebar_links(sidebar))
    return SiteGraph(pages=tuple(linked), sidebar=sidebar, nav=nav)


def build_sidebar(pages: Sequence[Page], config: TabbyConfig) -> tuple[SidebarGroup, ...]:
    """Return the configured groups in manual mode, else group doc pages by directory."""
    if not config.sidebar.auto:
        return config.sidebar.groups
    return auto_sidebar(pages)


def auto_sidebar(pages: Sequence[Page]) -> tuple[SidebarGroup, ...]:
    """Group ``doc``-layout pages by parent directory, directories sorted by name.

    Within a group pages sort by ``order`` (missing order last), then title.
    """
    by_dir: dict[str, list[Page]] = defaultdict(list)
    for page in pages:
        if page.frontmatter.layout.kind != "doc":
            continue
        by_dir[page.route.parent_dir].append(page)

    groups: list[SidebarGroup] = []
    for directory in sorted(by_dir):
        members = sorted(by_dir[directory], key=_sidebar_sort_key)
        groups.append(SidebarGroup(
            text=dir_display_name(directory),
            items=tuple(SidebarLink(text=p.title, link=p.url_path) for p in members),
        ))
    return tuple(groups)


def _sidebar_sort_key(page: Page) -> tuple[int, str]:
    order = page.frontmatter.order
    return (order if order is not None else _UNORDERED, page.title)


def dir_display_name(directory: str) -> str:
    """``"guide/getting-started"`` -> ``"Getting Started"``; ``""`` -> ``"Root"``."""
    if not directory:
        return "Root"
    last = PurePosixPath(directory).name or directory
    return " ".join(word[:1].upper() + word[1:] for word in last.split("-"))


def build_nav(config: TabbyConfig) -> tuple[NavItem, ...]:
    """Top navigation is a pass-through copy of the configured entries."""
    return tuple(config.nav)


def collect_sidebar_links(sidebar: Sequence[SidebarGroup]) -> tuple[str, ...]:
    """Flatten the sidebar into one ordered list of link paths."""
    return tuple(item.link for group in sidebar for item in group.items)


def assign_prev_next(pages: Sequence[Page], ordered_links: Sequence[str]) -> list[Page]:
    """Return new pages with ``prev`` / ``next`` set.

    A page whose frontmatter names ``prev`` or ``next`` takes both sides
    from frontmatter as stub routes.  Otherwise its neighbours in
    *ordered_links* are looked up among *pages*; a neighbour link with no
    matching page gives no route on that side.
    """
    routes = {page.url_path: page.route for page in pages}
    positions: dict[str, int] = {}
    for index, link in enumerate(ordered_links):
        positions.setdefault(link, index)

    linked: list[Page] = []
    for page in pages:
        fm = page.frontmatter
        if fm.prev is not None or fm.next is not None:
            prev = Route.stub(fm.prev) if fm.prev is not None else None
            next_ = Route.stub(fm.next) if fm.next is not None else None
        else:
            prev = next_ = None
            pos = positions.get(page.url_path)
            if pos is not None:
                if pos > 0:
                    prev = routes.get(ordered_links[pos - 1])
                if pos + 1 < len(ordered_links):
                    next_ = routes.get(ordered_links[pos + 1])
        linked.append(dataclasses.replace(page, prev=prev, next=next_))
    return linked

"""Site graph value types — routes, pages, navigation.

A SiteGraph is the complete per-build snapshot of the site.  It is built
whole by :func:`tabby.site.graph.build_graph` and never updated in place;
every rebuild produces a fresh one.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tabby.content.records import Frontmatter, Heading


@dataclass(frozen=True, slots=True)
class Route:
    """Where a content file lives on the site and on disk.

    Attributes:
        url_path: Pretty URL path (``/``, ``/guide/``, ``/guide/install``).
        source: Source path relative to the content root.  ``None`` for a
            stub route taken from frontmatter ``prev`` / ``next``.
        output: Output file path relative to the output root.  ``None`` for
            a stub route.

    """

    url_path: str
    source: Path | None = None
    output: Path | None = None

    @classmethod
    def stub(cls, url_path: str) -> Route:
        """A link-only route; its title is resolved at render time."""
        return cls(url_path=url_path)

    @property
    def is_stub(self) -> bool:
        return self.source is None

    @property
    def parent_dir(self) -> str:
        """Parent directory of the source, POSIX style (``""`` at the root)."""
        if self.source is None:
            return ""
        parent = self.source.parent.as_posix()
        return "" if parent == "." else parent


@dataclass(frozen=True, slots=True)
class Page:
    """A routed page ready for rendering."""

    route: Route
    frontmatter: Frontmatter
    html: str
    headings: tuple[Heading, ...] = ()
    prev: Route | None = None
    next: Route | None = None

    @property
    def url_path(self) -> str:
        return self.route.url_path

    @property
    def title(self) -> str:
        return self.frontmatter.title


@dataclass(frozen=True, slots=True)
class NavItem:
    """A top navigation entry."""

    text: str
    link: str


@dataclass(frozen=True, slots=True)
class SidebarLink:
    """One link inside a sidebar group."""

    text: str
    link: str


@dataclass(frozen=True, slots=True)
class SidebarGroup:
    """A named, ordered list of sidebar links."""

    text: str
    items: tuple[SidebarLink, ...] = ()


@dataclass(frozen=True, slots=True)
class SiteGraph:
    """All pages plus the navigation derived from them, for one build."""

    pages: tuple[Page, ...]
    sidebar: tuple[SidebarGroup, ...] = ()
    nav: tuple[NavItem, ...] = ()

    def find_page(self, url_path: str) -> Page | None:
        for page in self.pages:
            if page.url_path == url_path:
                return page
        return None

    def find_page_title(self, url_path: str) -> str | None:
        """Resolve a link's title: sidebar text first, then the page list."""
        for group in self.sidebar:
            for item in group.items:
                if item.link == url_path:
                    return item.text
        page = self.find_page(url_path)
        return page.title if page is not None else None

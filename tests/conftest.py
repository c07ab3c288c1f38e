"""Shared test fixtures for tabby."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabby.config import TabbyConfig
from tabby.content.records import Frontmatter, Layout
from tabby.site.model import Page, Route


def write_page(content: Path, relative: str, title: str, body: str = "", **fields: object) -> Path:
    """Write a Markdown file with frontmatter under *content*."""
    lines = ["---", f"title: {title}"]
    lines.extend(f"{key}: {value}" for key, value in fields.items())
    lines.extend(["---", "", body or f"# {title}", ""])
    path = content / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def make_page(
    url_path: str,
    title: str,
    *,
    source: str | None = None,
    order: int | None = None,
    layout: str | None = None,
    prev: str | None = None,
    next: str | None = None,
    html: str = "",
    date: str | None = None,
) -> Page:
    """Build a Page without going through the pipeline."""
    src = Path(source) if source is not None else None
    return Page(
        route=Route(url_path=url_path, source=src, output=Path("index.html")),
        frontmatter=Frontmatter(
            title=title,
            layout=Layout.from_name(layout),
            order=order,
            prev=prev,
            next=next,
            date=date,
        ),
        html=html,
    )


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal site: a home page, two guide pages, a static file."""
    content = tmp_path / "content"
    write_page(content, "index.md", "Home", "# Welcome\n\nThis is the home page.", layout="home")
    write_page(
        content, "guide/getting-started.md", "Getting Started",
        "# Getting Started\n\nHello world.\n\n```python\nprint('hi')\n```", order=1,
    )
    write_page(content, "guide/install.md", "Install", "# Install\n\nRun the installer.", order=2)

    static = tmp_path / "static"
    static.mkdir()
    (static / "logo.txt").write_text("logo\n")
    return tmp_path


@pytest.fixture
def config(tmp_site: Path) -> TabbyConfig:
    return TabbyConfig(root=tmp_site)

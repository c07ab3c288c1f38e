"""Tests for tabby.export — sitemap, feed, search index and static assets."""

from __future__ import annotations

import json
from pathlib import Path

from tabby.config import SiteSettings, TabbyConfig
from tabby.export.assets import copy_static_assets
from tabby.export.feed import MAX_ENTRIES, feed_entries, generate_feed
from tabby.export.search import (
    build_search_index,
    strip_html,
    truncate_content,
    write_search_index,
)
from tabby.export.sitemap import generate_sitemap

from .conftest import make_page


# ---------------------------------------------------------------------------
# Sitemap
# ---------------------------------------------------------------------------


class TestSitemap:
    def test_entries(self) -> None:
        pages = [make_page("/", "Home"), make_page("/guide/", "Guide")]
        xml = generate_sitemap(pages, "https://example.com/")
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<loc>https://example.com/</loc>" in xml
        assert "<loc>https://example.com/guide/</loc>" in xml

    def test_namespace(self) -> None:
        xml = generate_sitemap([], "/")
        assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml

    def test_escaping(self) -> None:
        xml = generate_sitemap([make_page("/a&b", "A")], "https://x.io")
        assert "<loc>https://x.io/a&amp;b</loc>" in xml


# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------


class TestFeed:
    def _config(self) -> TabbyConfig:
        return TabbyConfig(
            root=Path("/site"),
            site=SiteSettings(title="Docs", base_url="https://example.com"),
        )

    def test_only_dated_pages_newest_first(self) -> None:
        pages = [
            make_page("/old", "Old", date="2023-01-01"),
            make_page("/undated", "Undated"),
            make_page("/new", "New", date="2024-06-01"),
        ]
        assert [p.url_path for p in feed_entries(pages)] == ["/new", "/old"]

    def test_capped(self) -> None:
        pages = [make_page(f"/p{i}", f"P{i}", date=f"2024-01-{i + 1:02d}") for i in range(25)]
        assert len(feed_entries(pages)) == MAX_ENTRIES

    def test_xml(self) -> None:
        xml = generate_feed([make_page("/new", "New", date="2024-06-01")], self._config())
        assert "<title>Docs</title>" in xml
        assert 'href="https://example.com/feed.xml"' in xml
        assert "<id>https://example.com/new</id>" in xml
        assert "<updated>2024-06-01T00:00:00Z</updated>" in xml

    def test_non_iso_dates_skipped(self) -> None:
        pages = [
            make_page("/loose", "Loose", date="Jan 5 2024"),
            make_page("/iso", "Iso", date="2024-01-05"),
        ]
        assert [p.url_path for p in feed_entries(pages)] == ["/iso"]
        xml = generate_feed(pages, self._config())
        assert "Jan 5" not in xml
        assert "<updated>2024-01-05T00:00:00Z</updated>" in xml


# ---------------------------------------------------------------------------
# Search index
# ---------------------------------------------------------------------------


class TestSearchIndex:
    def test_strip_html(self) -> None:
        assert strip_html("<p>A &amp; <b>B</b></p>\n\n<p>C</p>") == "A & B C"

    def test_truncate_on_word_boundary(self) -> None:
        assert truncate_content("alpha beta gamma", 12) == "alpha beta..."

    def test_short_text_untouched(self) -> None:
        assert truncate_content("short", 100) == "short"

    def test_entries(self) -> None:
        pages = [make_page("/a", "A", html="<p>Hello <em>there</em></p>")]
        (entry,) = build_search_index(pages)
        assert entry["url"] == "/a"
        assert entry["title"] == "A"
        assert entry["content"] == "Hello there"

    def test_written_as_json_array(self, tmp_path: Path) -> None:
        path = write_search_index([make_page("/a", "A")], tmp_path)
        assert json.loads(path.read_text())[0]["id"] == "/a"


# ---------------------------------------------------------------------------
# Static assets
# ---------------------------------------------------------------------------


class TestStaticAssets:
    def test_copied_with_structure(self, tmp_path: Path) -> None:
        static = tmp_path / "static"
        (static / "img").mkdir(parents=True)
        (static / "img" / "logo.svg").write_text("<svg/>")
        (static / ".hidden").write_text("x")
        out = tmp_path / "dist"

        files = copy_static_assets(static, out)
        assert (out / "img" / "logo.svg").read_text() == "<svg/>"
        assert not (out / ".hidden").exists()
        assert [f.kind for f in files] == ["static"]

    def test_missing_static_dir(self, tmp_path: Path) -> None:
        assert copy_static_assets(tmp_path / "static", tmp_path / "dist") == ()

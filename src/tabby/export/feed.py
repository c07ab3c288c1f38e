"""Atom 1.0 feed — the most recent dated, non-draft pages.

Entries are sorted by frontmatter ``date`` descending (ISO dates sort
lexically) and capped at :data:`MAX_ENTRIES`.  Pages whose date does not
start with an ISO ``YYYY-MM-DD`` day are left out, since Atom requires
RFC 3339 timestamps.  The feed's ``updated`` is the
newest entry's date, or the Unix epoch for a feed with no entries.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date as Date
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

if TYPE_CHECKING:
    from tabby.config import TabbyConfig
    from tabby.site.model import Page

_ATOM_NS = "http://www.w3.org/2005/Atom"

MAX_ENTRIES = 20

_EPOCH = "1970-01-01"


def feed_entries(pages: Sequence[Page]) -> list[Page]:
    """Dated, non-draft pages, newest first, at most MAX_ENTRIES."""
    dated = [
        p for p in pages
        if not p.frontmatter.draft and _is_iso_day(p.frontmatter.date)
    ]
    dated.sort(key=lambda p: p.frontmatter.date or "", reverse=True)
    return dated[:MAX_ENTRIES]


def _is_iso_day(date: str | None) -> bool:
    if not date:
        return False
    try:
        Date.fromisoformat(date[:10])
    except ValueError:
        return False
    return True


def _timestamp(date: str) -> str:
    return f"{date[:10]}T00:00:00Z"


def generate_feed(pages: Sequence[Page], config: TabbyConfig) -> str:
    """Generate the Atom feed XML for *pages*."""
    base = config.base_url
    site_root = base.rstrip("/")
    entries = feed_entries(pages)
    updated = entries[0].frontmatter.date if entries else _EPOCH

    feed = Element("feed")
    feed.set("xmlns", _ATOM_NS)
    SubElement(feed, "title").text = config.site.title
    SubElement(feed, "subtitle").text = config.site.description
    SubElement(feed, "link", {"href": base, "rel": "alternate"})
    SubElement(feed, "link", {"href": f"{base}feed.xml", "rel": "self"})
    SubElement(feed, "id").text = base
    SubElement(feed, "updated").text = _timestamp(updated or _EPOCH)

    for page in entries:
        url = site_root + page.url_path
        entry = SubElement(feed, "entry")
        SubElement(entry, "title").text = page.title
        SubElement(entry, "link", {"href": url, "rel": "alternate"})
        SubElement(entry, "id").text = url
        SubElement(entry, "updated").text = _timestamp(page.frontmatter.date or _EPOCH)
        SubElement(entry, "summary").text = page.frontmatter.description or ""

    xml = tostring(feed, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_feed(pages: Sequence[Page], config: TabbyConfig, output_dir: Path) -> Path:
    """Write ``feed.xml`` into *output_dir* and return its path."""
    feed_path = output_dir / "feed.xml"
    feed_path.write_text(generate_feed(pages, config), encoding="utf-8")
    return feed_path

"""Sitemap generation — produce sitemap.xml from the built pages.

One ``<url><loc>`` entry per page.  The configured base URL has its
trailing slash stripped so ``https://example.com/`` plus ``/guide/``
becomes ``https://example.com/guide/``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

if TYPE_CHECKING:
    from tabby.site.model import Page

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def generate_sitemap(pages: Sequence[Page], base_url: str) -> str:
    """Generate a sitemap.xml string for *pages*.

    Args:
        pages: Pages of the current site graph, in graph order.
        base_url: Site base URL (e.g., ``"https://example.com/"``).

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    base = base_url.rstrip("/")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for page in pages:
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = base + page.url_path

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(pages: Sequence[Page], base_url: str, output_dir: Path) -> Path:
    """Write ``sitemap.xml`` into *output_dir* and return its path."""
    sitemap_path = output_dir / "sitemap.xml"
    sitemap_path.write_text(generate_sitemap(pages, base_url), encoding="utf-8")
    return sitemap_path

"""Markdown conversion — body text to HTML plus an ordered heading outline.

Uses Patitas with the GitHub-flavoured plugins enabled.  Heading ids follow
tabby's slug rule so anchors stay stable across parser upgrades: lowercase,
every run of non-alphanumeric characters collapsed to one hyphen, hyphens
trimmed from both ends.  Raw HTML blocks pass through untouched.
"""

from __future__ import annotations

import re

from patitas import HtmlRenderer, Markdown, create_default_registry
from patitas.roles import create_default_registry as create_default_role_registry

from tabby.content.records import Heading, ParsedRecord, RenderedRecord

_PLUGINS = ["table", "strikethrough", "task_lists", "footnotes", "autolinks"]

_HYPHEN_RUN = re.compile(r"-+")

_md = Markdown(plugins=_PLUGINS)
_directives = create_default_registry()
_roles = create_default_role_registry()


def slugify(text: str) -> str:
    """Turn heading text into an anchor id (``"Getting Started!"`` -> ``getting-started``)."""
    mapped = "".join(ch if ch.isalnum() else "-" for ch in text.lower())
    return _HYPHEN_RUN.sub("-", mapped).strip("-")


def markdown_to_html(body: str) -> tuple[str, tuple[Heading, ...]]:
    """Render *body* to HTML and return it with its heading outline.

    Duplicate slugs get ``-1``, ``-2`` ... suffixes.  Headings whose text is
    empty are left out of the outline.
    """
    renderer = HtmlRenderer(
        source=body,
        directive_registry=_directives,
        role_registry=_roles,
        slugify=slugify,
    )
    html = renderer.render(_md.parse(body))
    headings = tuple(
        Heading(id=info.slug, text=info.text.strip(), level=info.level)
        for info in renderer.get_headings()
        if info.text.strip()
    )
    return html, headings


def render_record(record: ParsedRecord) -> RenderedRecord:
    """Pipeline stage: ParsedRecord -> RenderedRecord."""
    html, headings = markdown_to_html(record.body)
    return RenderedRecord(
        source_path=record.source_path,
        raw_text=record.raw_text,
        frontmatter=record.frontmatter,
        body=record.body,
        html=html,
        headings=headings,
    )

"""Search index — plain-text page content for client-side search.

Each non-draft page becomes one entry.  HTML is stripped to text (tags
removed, entities decoded, whitespace collapsed) and truncated on a word
boundary with a trailing ``...``.
"""

from __future__ import annotations

import html
import json
import re
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tabby._errors import RenderError

if TYPE_CHECKING:
    from tabby.site.model import Page

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

ELLIPSIS = "..."


def strip_html(markup: str) -> str:
    """Remove tags, decode entities, collapse whitespace."""
    text = html.unescape(_TAG.sub(" ", markup))
    return _WHITESPACE.sub(" ", text).strip()


def truncate_content(text: str, max_chars: int) -> str:
    """Cut *text* to at most *max_chars* at the last space, adding ``...``."""
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    return cut + ELLIPSIS


def build_search_index(pages: Sequence[Page], max_content_length: int = 5000) -> list[dict[str, Any]]:
    """Search entries for every non-draft page, in graph order."""
    entries: list[dict[str, Any]] = []
    for page in pages:
        fm = page.frontmatter
        if fm.draft:
            continue
        entries.append({
            "id": page.url_path,
            "url": page.url_path,
            "title": fm.title,
            "description": fm.description or "",
            "content": truncate_content(strip_html(page.html), max_content_length),
            "tags": list(fm.tags),
            "date": fm.date,
        })
    return entries


def write_search_index(
    pages: Sequence[Page],
    output_dir: Path,
    max_content_length: int = 5000,
) -> Path:
    """Write ``search-index.json`` into *output_dir* and return its path."""
    try:
        data = json.dumps(build_search_index(pages, max_content_length), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        msg = f"Cannot serialize search index: {exc}"
        raise RenderError(msg) from exc
    index_path = output_dir / "search-index.json"
    index_path.write_text(data, encoding="utf-8")
    return index_path

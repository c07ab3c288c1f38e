"""Layout dispatch — wrap page HTML in the structure for its layout kind.

``doc`` gets a sidebar, content column and table of contents; ``home`` is
full width; ``page`` is a centred column.  Custom layouts render like
``doc`` unless a theme overrides the document template.
"""

from __future__ import annotations

from html import escape

from tabby.content.records import Layout


def wrap_layout(layout: Layout, content: str) -> str:
    """Return *content* wrapped in the markup for *layout*."""
    match layout.kind:
        case "home":
            return _home(content)
        case "page":
            return _page(content)
        case "doc" | "custom":
            return _doc(content, layout.name)


def _doc(content: str, name: str) -> str:
    return (
        f'<div class="tabby-layout-doc" data-layout="{escape(name)}">\n'
        '  <aside class="tabby-sidebar" id="sidebar"></aside>\n'
        '  <main class="tabby-content">\n'
        f'    <article class="tabby-prose" id="content">{content}</article>\n'
        "  </main>\n"
        '  <aside class="tabby-toc" id="toc"></aside>\n'
        "</div>"
    )


def _home(content: str) -> str:
    return (
        '<div class="tabby-layout-home">\n'
        '  <main class="tabby-content">\n'
        f'    <article class="tabby-prose" id="content">{content}</article>\n'
        "  </main>\n"
        "</div>"
    )


def _page(content: str) -> str:
    return (
        '<div class="tabby-layout-page">\n'
        '  <main class="tabby-content tabby-narrow">\n'
        f'    <article class="tabby-prose" id="content">{content}</article>\n'
        "  </main>\n"
        "</div>"
    )

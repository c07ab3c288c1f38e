"""Document rendering — a Page plus its SiteGraph to a complete HTML document.

The document embeds ``window.__TABBY_DATA__``, a JSON description of the
page and the site graph (nav, sidebar with the active link marked, prev and
next with resolved titles) for the client-side theme script.  When a
live-reload port is given, a small WebSocket client is embedded as well.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from kida import Environment, FileSystemLoader, Markup, TemplateError

from tabby._errors import RenderError
from tabby.render.layout import wrap_layout
from tabby.theme import get_template_dirs

if TYPE_CHECKING:
    from tabby.config import TabbyConfig
    from tabby.site.model import Page, Route, SiteGraph

DOCUMENT_TEMPLATE = "document.html"
RELOAD_PATH = "/__tabby/ws"

_LIVE_RELOAD_JS = """\
(function () {
  var delay = 1000;
  function connect() {
    var ws = new WebSocket('ws://' + location.hostname + ':%(port)d%(path)s');
    ws.onopen = function () { delay = 1000; };
    ws.onmessage = function (e) { if (e.data === 'reload') { location.reload(); } };
    ws.onclose = function () {
      setTimeout(connect, delay);
      delay = Math.min(delay * 2, 10000);
    };
  }
  connect();
})();"""


def live_reload_script(port: int) -> str:
    """The reload client, bound to the dev server's *port*."""
    return _LIVE_RELOAD_JS % {"port": port, "path": RELOAD_PATH}


def page_title(title: str, site_title: str) -> str:
    """``"Page | Site"``, or whichever half is non-empty."""
    if not title:
        return site_title
    if not site_title:
        return title
    return f"{title} | {site_title}"


def create_environment(config: TabbyConfig) -> Environment:
    """Kida environment searching the project theme, then the bundled theme."""
    return Environment(
        loader=FileSystemLoader(get_template_dirs(config)),
        autoescape=True,
    )


def build_page_data(page: Page, graph: SiteGraph, config: TabbyConfig) -> dict[str, Any]:
    """The JSON-ready data blob for one page."""
    data: dict[str, Any] = {
        "page": {
            "title": page.title,
            "description": page.frontmatter.description or "",
            "url": page.url_path,
            "content": page.html,
            "toc": [
                {"id": h.id, "text": h.text, "level": h.level} for h in page.headings
            ],
            "layout": page.frontmatter.layout.name,
            "frontmatter": page.frontmatter.as_dict(),
        },
        "site": {
            "title": config.site.title,
            "description": config.site.description,
            "base": config.site.base_url,
            "language": config.site.language,
            "nav": [
                {"text": item.text, "link": item.link, "active": item.link == page.url_path}
                for item in graph.nav
            ],
            "sidebar": [
                {
                    "text": group.text,
                    "items": [
                        {
                            "text": item.text,
                            "link": item.link,
                            "active": item.link == page.url_path,
                        }
                        for item in group.items
                    ],
                }
                for group in graph.sidebar
            ],
        },
        "theme": {
            "name": config.theme.name,
            "highlightTheme": config.theme.highlight_theme,
        },
    }
    for side, route in (("prev", page.prev), ("next", page.next)):
        link = _resolve_link(route, graph)
        if link is not None:
            data[side] = link
    return data


def _resolve_link(route: Route | None, graph: SiteGraph) -> dict[str, str] | None:
    if route is None:
        return None
    title = graph.find_page_title(route.url_path)
    if title is None:
        return None
    return {"title": title, "link": route.url_path}


def serialize_data(data: dict[str, Any]) -> str:
    """JSON for an inline ``<script>``; ``</`` is escaped so content cannot close the tag."""
    try:
        text = json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        msg = f"Cannot serialize page data: {exc}"
        raise RenderError(msg) from exc
    return text.replace("</", "<\\/").replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


class DocumentRenderer:
    """Renders pages with one Kida environment for the whole build.

    Args:
        config: Project configuration.
        reload_port: Dev server port to embed the live-reload client for, or
            ``None`` for production output.

    """

    def __init__(self, config: TabbyConfig, reload_port: int | None = None) -> None:
        self._config = config
        self._reload_port = reload_port
        self._env = create_environment(config)

    def render(self, page: Page, graph: SiteGraph) -> str:
        """Render *page* to a complete HTML document.

        Raises:
            RenderError: If the template is missing or fails, or the data
                blob cannot be serialized.

        """
        config = self._config
        context = {
            "lang": config.site.language,
            "title": page_title(page.title, config.site.title),
            "description": page.frontmatter.description or config.site.description,
            "base": config.base_url,
            "custom_css": config.theme.custom_css,
            "og_image": config.seo.og_image,
            "layout": page.frontmatter.layout.name,
            "body": Markup(wrap_layout(page.frontmatter.layout, page.html)),
            "data_json": Markup(serialize_data(build_page_data(page, graph, config))),
            "live_reload": (
                Markup(live_reload_script(self._reload_port))
                if self._reload_port is not None
                else None
            ),
        }
        try:
            template = self._env.get_template(DOCUMENT_TEMPLATE)
            return template.render(**context)
        except TemplateError as exc:
            msg = f"Template error rendering {page.url_path}: {exc}"
            raise RenderError(msg) from exc

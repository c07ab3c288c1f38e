"""Syntax highlighting for fenced code blocks in rendered HTML.

Finds ``<pre><code class="language-X">...</code></pre>`` blocks, decodes the
escaped source, and replaces the block with Rosettes output.  Languages
Rosettes does not know are tokenized as plain text.  Everything outside a
matched block passes through byte-identical.
"""

from __future__ import annotations

import dataclasses
import html
import re

from rosettes import highlight as rosettes_highlight
from rosettes import supports_language

from tabby.content.records import RenderedRecord

_CODE_BLOCK = re.compile(
    r'<pre><code class="language-([^"\s]+)">(.*?)</code></pre>',
    re.DOTALL,
)

_FALLBACK_LANGUAGE = "plaintext"


def highlight_code(code: str, language: str) -> str:
    """Highlight *code* and return the inner token markup (no container)."""
    lexer = language if supports_language(language) else _FALLBACK_LANGUAGE
    output = rosettes_highlight(code, lexer)
    start = output.find("<code>")
    end = output.rfind("</code>")
    if start == -1 or end == -1:
        return html.escape(code, quote=False)
    return output[start + len("<code>"):end]


def highlight_html(content: str) -> str:
    """Replace every language-tagged code block in *content* with highlighted markup."""

    def _replace(match: re.Match[str]) -> str:
        language = match.group(1)
        code = html.unescape(match.group(2))
        inner = highlight_code(code, language.lower())
        return (
            f'<pre class="highlight"><code class="language-{language}">'
            f"{inner}</code></pre>"
        )

    return _CODE_BLOCK.sub(_replace, content)


def highlight_record(record: RenderedRecord) -> RenderedRecord:
    """Pipeline stage: highlight the code blocks of one rendered record."""
    return dataclasses.replace(record, html=highlight_html(record.html))

"""Tests for tabby.render.markdown and tabby.render.highlight."""

from __future__ import annotations

from tabby.content.records import Layout
from tabby.render.highlight import highlight_code, highlight_html
from tabby.render.layout import wrap_layout
from tabby.render.markdown import markdown_to_html, slugify


class TestSlugify:
    def test_basic(self) -> None:
        assert slugify("Getting Started") == "getting-started"

    def test_punctuation_collapsed(self) -> None:
        assert slugify("What's new?  (v2)") == "what-s-new-v2"

    def test_trimmed(self) -> None:
        assert slugify("--Hello--") == "hello"

    def test_empty(self) -> None:
        assert slugify("!!!") == ""


class TestMarkdownToHtml:
    """Headings get stable ids and are collected in document order."""

    def test_paragraph(self) -> None:
        html, headings = markdown_to_html("Hello **world**\n")
        assert "<strong>world</strong>" in html
        assert headings == ()

    def test_heading_outline(self) -> None:
        html, headings = markdown_to_html("# Intro\n\n## Getting Started\n\ntext\n")
        assert [(h.id, h.text, h.level) for h in headings] == [
            ("intro", "Intro", 1),
            ("getting-started", "Getting Started", 2),
        ]
        assert 'id="getting-started"' in html

    def test_duplicate_headings_suffixed(self) -> None:
        html, headings = markdown_to_html("## Usage\n\n## Usage\n\n## Usage\n")
        assert [h.id for h in headings] == ["usage", "usage-1", "usage-2"]
        assert 'id="usage-2"' in html

    def test_raw_html_heading_left_alone(self) -> None:
        html, headings = markdown_to_html('<h2 id="custom">Raw</h2>\n\n## Real Title\n')
        assert '<h2 id="custom">Raw</h2>' in html
        assert 'id="real-title"' in html
        assert [h.id for h in headings] == ["real-title"]

    def test_table_plugin(self) -> None:
        html, _ = markdown_to_html("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table" in html


class TestHighlight:
    def test_non_code_passes_through(self) -> None:
        content = "<p>Plain <em>text</em></p>"
        assert highlight_html(content) == content

    def test_code_block_wrapped(self) -> None:
        html, _ = markdown_to_html("```python\nprint('hi')\n```\n")
        out = highlight_html(html)
        assert '<pre class="highlight"><code class="language-python">' in out
        assert "print" in out

    def test_unknown_language_falls_back(self) -> None:
        out = highlight_code("just some words", "no-such-language")
        assert "just" in out
        assert "words" in out

    def test_untagged_block_untouched(self) -> None:
        content = "<pre><code>x = 1\n</code></pre>"
        assert highlight_html(content) == content


class TestWrapLayout:
    def test_doc_has_sidebar_and_toc(self) -> None:
        out = wrap_layout(Layout(), "<p>x</p>")
        assert "tabby-layout-doc" in out
        assert 'id="sidebar"' in out
        assert 'id="toc"' in out

    def test_home(self) -> None:
        out = wrap_layout(Layout.from_name("home"), "<p>x</p>")
        assert "tabby-layout-home" in out
        assert "sidebar" not in out

    def test_page(self) -> None:
        assert "tabby-layout-page" in wrap_layout(Layout.from_name("page"), "")

    def test_custom_renders_as_doc(self) -> None:
        out = wrap_layout(Layout.from_name('x"y'), "")
        assert "tabby-layout-doc" in out
        assert 'data-layout="x&quot;y"' in out

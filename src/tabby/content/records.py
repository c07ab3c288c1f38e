"""Content record types — one per Markdown file, per build stage.

Each stage of the pipeline produces a new frozen record from the previous
one; nothing is mutated in place.

    RawRecord -> ParsedRecord -> RenderedRecord

Thread Safety:
    All records are frozen dataclasses and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

type LayoutKind = Literal["doc", "home", "page", "custom"]

_BUILTIN_LAYOUTS: frozenset[str] = frozenset({"doc", "home", "page"})


@dataclass(frozen=True, slots=True)
class Layout:
    """Page layout, a closed set of kinds plus a named custom variant.

    Attributes:
        kind: Which family of layout this is.
        name: The name as written in frontmatter (equals ``kind`` for the
            built-in layouts).

    """

    kind: LayoutKind = "doc"
    name: str = "doc"

    @classmethod
    def from_name(cls, name: str | None) -> Layout:
        """Map a frontmatter ``layout`` value to a Layout (``None`` is doc)."""
        if name is None or name == "doc":
            return cls()
        if name in _BUILTIN_LAYOUTS:
            return cls(kind=name, name=name)  # type: ignore[arg-type]
        return cls(kind="custom", name=name)


@dataclass(frozen=True, slots=True)
class Frontmatter:
    """Validated frontmatter of a content file.

    ``title`` is required and never empty.  Keys tabby does not know about
    are kept in ``extra`` so themes can read them from the page data blob.
    """

    title: str
    description: str | None = None
    layout: Layout = field(default_factory=Layout)
    order: int | None = None
    tags: tuple[str, ...] = ()
    date: str | None = None
    draft: bool = False
    prev: str | None = None
    next: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready mapping for the client-side data blob."""
        data: dict[str, Any] = dict(self.extra)
        data.update({
            "title": self.title,
            "description": self.description,
            "layout": self.layout.name,
            "order": self.order,
            "tags": list(self.tags),
            "date": self.date,
            "draft": self.draft,
            "prev": self.prev,
            "next": self.next,
        })
        return data


@dataclass(frozen=True, slots=True)
class Heading:
    """A heading extracted from rendered Markdown (one table-of-contents entry)."""

    id: str
    text: str
    level: int


@dataclass(frozen=True, slots=True)
class RawRecord:
    """A discovered content file.

    Attributes:
        source_path: Absolute path to the ``.md`` file.
        raw_text: Full file contents, frontmatter included.

    """

    source_path: Path
    raw_text: str


@dataclass(frozen=True, slots=True)
class ParsedRecord:
    """A content file with its frontmatter split off and validated."""

    source_path: Path
    raw_text: str
    frontmatter: Frontmatter
    body: str


@dataclass(frozen=True, slots=True)
class RenderedRecord:
    """A content file converted to HTML, with its heading outline."""

    source_path: Path
    raw_text: str
    frontmatter: Frontmatter
    body: str
    html: str
    headings: tuple[Heading, ...] = ()

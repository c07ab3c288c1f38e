"""Frontmatter parsing — split the YAML header off a content file and validate it.

A content file must start with a ``---`` line, followed by YAML, followed by
a closing ``---`` line.  Everything after the closing line is the Markdown
body.  The only required key is a non-empty ``title``.
"""

from __future__ import annotations

import datetime
from typing import Any

import yaml

from tabby._errors import ContentError
from tabby.content.records import Frontmatter, Layout, ParsedRecord, RawRecord

_DELIMITER = "---"

_KNOWN_KEYS = frozenset({
    "title", "description", "layout", "order", "tags", "date", "draft", "prev", "next",
})


def split_frontmatter(source: str) -> tuple[str, str] | None:
    """Split *source* into ``(yaml_text, body)``.

    Returns None if the file has no delimited frontmatter block.
    """
    source = source.removeprefix("\ufeff")
    if not source.startswith(_DELIMITER):
        return None
    first_nl = source.find("\n")
    if first_nl == -1 or source[:first_nl].strip() != _DELIMITER:
        return None

    end = source.find("\n" + _DELIMITER, first_nl - 1)
    if end == -1:
        return None
    header = source[first_nl + 1:end + 1]

    # Skip past the rest of the closing delimiter line
    after = source.find("\n", end + 1 + len(_DELIMITER))
    body = "" if after == -1 else source[after + 1:]
    return header, body.lstrip("\n")


def parse_frontmatter(raw: RawRecord) -> ParsedRecord:
    """Parse and validate the frontmatter of one record.

    Raises:
        ContentError: If the file is empty, has no frontmatter block, the
            YAML is invalid or mistyped, or ``title`` is missing or empty.

    """
    path = raw.source_path
    if not raw.raw_text.strip():
        msg = f"Empty content file: {path}"
        raise ContentError(msg, path=path)

    parts = split_frontmatter(raw.raw_text)
    if parts is None:
        msg = f"Missing frontmatter in {path} (expected a leading '---' block)"
        raise ContentError(msg, path=path)
    header, body = parts

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        msg = f"Invalid frontmatter in {path}: {exc}"
        raise ContentError(msg, path=path) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Invalid frontmatter in {path}: expected a mapping"
        raise ContentError(msg, path=path)

    frontmatter = _build_frontmatter(data, raw)
    return ParsedRecord(
        source_path=path,
        raw_text=raw.raw_text,
        frontmatter=frontmatter,
        body=body,
    )


def _build_frontmatter(data: dict[str, Any], raw: RawRecord) -> Frontmatter:
    path = raw.source_path

    def invalid(key: str, expected: str) -> ContentError:
        got = type(data[key]).__name__
        msg = f"Invalid frontmatter in {path}: '{key}' must be {expected}, got {got}"
        return ContentError(msg, path=path)

    title = data.get("title")
    if title is None or (isinstance(title, str) and not title.strip()):
        msg = f"Missing title in frontmatter of {path}"
        raise ContentError(msg, path=path)
    if not isinstance(title, str):
        raise invalid("title", "a string")

    for key in ("description", "layout", "prev", "next"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise invalid(key, "a string")

    order = data.get("order")
    if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
        raise invalid("order", "an integer")

    tags = data.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, list):
        raise invalid("tags", "a list")

    draft = data.get("draft", False)
    if not isinstance(draft, bool):
        raise invalid("draft", "true or false")

    return Frontmatter(
        title=title,
        description=data.get("description"),
        layout=Layout.from_name(data.get("layout")),
        order=order,
        tags=tuple(str(tag) for tag in tags),
        date=_normalize_date(data.get("date")),
        draft=draft,
        prev=data.get("prev"),
        next=data.get("next"),
        extra={k: _jsonable(v) for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def _normalize_date(value: object) -> str | None:
    """YAML turns ``2024-01-15`` into a date; keep dates as ISO strings."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


def _jsonable(value: object) -> object:
    match value:
        case datetime.date():
            return value.isoformat()
        case dict():
            return {str(k): _jsonable(v) for k, v in value.items()}
        case list() | tuple():
            return [_jsonable(v) for v in value]
        case _:
            return value

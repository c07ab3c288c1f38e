"""Content discovery — find every Markdown file under the content root."""

from __future__ import annotations

from pathlib import Path

from tabby._errors import ContentError
from tabby.content.records import RawRecord


def discover(content_path: Path) -> tuple[RawRecord, ...]:
    """Read all ``.md`` files below *content_path*, sorted by path.

    Sorting makes every later stage deterministic regardless of the order
    the filesystem lists directory entries in.  Returns an empty tuple when
    the directory does not exist; callers that require it check first.

    Raises:
        ContentError: If a file cannot be read or is not valid UTF-8.

    """
    if not content_path.is_dir():
        return ()

    records: list[RawRecord] = []
    for path in sorted(content_path.rglob("*.md")):
        if not path.is_file():
            continue
        # Skip hidden files and directories
        if any(part.startswith(".") for part in path.relative_to(content_path).parts):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read {path}: {exc}"
            raise ContentError(msg, path=path) from exc
        records.append(RawRecord(source_path=path, raw_text=text))
    return tuple(records)

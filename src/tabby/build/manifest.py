"""Change manifest — content-hash cache deciding whether a rebuild is needed.

The manifest maps each content file (path relative to the content root,
POSIX separators) to the SHA-256 of its text.  It only answers "did
anything change?": routing, sidebar grouping and prev/next all depend on
the complete page set, so any change means a full graph rebuild.

Stored as pretty-printed JSON at ``.tabby/manifest.json``.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from tabby._errors import OutputError
from tabby._types import Digest, Manifest
from tabby.content.records import RawRecord


def hash_content(text: str) -> Digest:
    """Lowercase hex SHA-256 of *text* (content addressing, not security)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def manifest_key(source_path: Path, content_root: Path) -> str:
    """Manifest key for a record: content-relative POSIX path."""
    try:
        return source_path.relative_to(content_root).as_posix()
    except ValueError:
        return source_path.as_posix()


def load_manifest(path: Path) -> Manifest:
    """Load a manifest; a missing or unreadable file is an empty manifest.

    Never raises: a corrupt manifest just means everything counts as changed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


def save_manifest(path: Path, manifest: Manifest) -> None:
    """Write *manifest* atomically (temp file in the same dir + ``os.replace``).

    Raises:
        OutputError: If the cache directory or file cannot be written.

    """
    data = json.dumps(manifest, indent=2, sort_keys=True) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        msg = f"Cannot write manifest {path}: {exc}"
        raise OutputError(msg) from exc


def diff_manifest(
    records: Iterable[RawRecord],
    old: Manifest,
    content_root: Path,
) -> tuple[set[str], Manifest]:
    """Compare the current records against *old*.

    Returns:
        ``(changed, new)``: ``changed`` holds every new or modified key plus
        every key of *old* with no current record (deletions); ``new`` maps
        only the current records.  Treat ``changed`` as a set: only its
        emptiness is meaningful to the pipeline.

    """
    new: Manifest = {}
    changed: set[str] = set()

    for record in records:
        key = manifest_key(record.source_path, content_root)
        digest = hash_content(record.raw_text)
        if old.get(key) != digest:
            changed.add(key)
        new[key] = digest

    changed.update(key for key in old if key not in new)
    return changed, new

"""Project scaffolding — ``tabby init``.

Creates a minimal project that builds out of the box.  Existing files are
never overwritten.
"""

from __future__ import annotations

from pathlib import Path

from tabby.config import CACHE_DIR

_INDEX_MD = """\
---
title: Welcome
description: Your new documentation site
layout: home
---

# Welcome

This site is built with tabby. Edit `content/index.md` to get started.
"""

_GETTING_STARTED_MD = """\
---
title: Getting Started
order: 1
---

# Getting Started

Add Markdown files under `content/`. Every directory becomes a sidebar group.

```python
print("hello")
```
"""

_CONFIG_TOML = """\
[site]
title = "{title}"
description = ""
base_url = "/"
language = "en"

[build]
content_dir = "content"
output_dir = "dist"
static_dir = "static"

[sidebar]
auto = true

[search]
enabled = true

[seo]
sitemap = true
rss = false
"""

_GITIGNORE = f"""\
dist/
{CACHE_DIR}/
"""


def scaffold(root: Path, *, title: str | None = None) -> list[Path]:
    """Create the starter files under *root* and return the ones written."""
    root = root.resolve()
    files: dict[Path, str] = {
        root / "content" / "index.md": _INDEX_MD,
        root / "content" / "guide" / "getting-started.md": _GETTING_STARTED_MD,
        root / "tabby.toml": _CONFIG_TOML.format(title=title or root.name.replace('"', "")),
        root / ".gitignore": _GITIGNORE,
    }
    written: list[Path] = []
    for path, text in files.items():
        if path.exists():
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(path)
    (root / "static").mkdir(exist_ok=True)
    return written

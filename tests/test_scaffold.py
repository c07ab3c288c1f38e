"""Tests for tabby.scaffold — project initialization."""

from __future__ import annotations

from pathlib import Path

from tabby.config_loader import load_config
from tabby.scaffold import scaffold


class TestScaffold:
    def test_creates_project(self, tmp_path: Path) -> None:
        written = scaffold(tmp_path, title="Cats")
        names = {p.relative_to(tmp_path).as_posix() for p in written}
        assert names == {
            "content/index.md",
            "content/guide/getting-started.md",
            "tabby.toml",
            ".gitignore",
        }
        assert (tmp_path / "static").is_dir()
        assert ".tabby/" in (tmp_path / ".gitignore").read_text()

    def test_config_loads(self, tmp_path: Path) -> None:
        scaffold(tmp_path, title="Cats")
        config = load_config(tmp_path)
        assert config.site.title == "Cats"
        assert config.sidebar.auto

    def test_never_overwrites(self, tmp_path: Path) -> None:
        (tmp_path / "content").mkdir()
        (tmp_path / "content" / "index.md").write_text("mine")

        written = scaffold(tmp_path)
        assert tmp_path / "content" / "index.md" not in written
        assert (tmp_path / "content" / "index.md").read_text() == "mine"
        assert scaffold(tmp_path) == []

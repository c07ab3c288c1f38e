"""Load TabbyConfig from tabby.toml (or tabby.yaml) if present.

Merges file config with CLI overrides. CLI overrides file.  A missing
config file means defaults; a config file that exists but cannot be read
or parsed is a :class:`ConfigError`, never a silent fallback.
"""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path
from typing import Any

import yaml

from tabby._errors import ConfigError
from tabby.config import (
    CONFIG_FILENAMES,
    BuildSettings,
    SearchSettings,
    SeoSettings,
    SidebarSettings,
    SiteSettings,
    TabbyConfig,
    ThemeSettings,
)
from tabby.site.model import NavItem, SidebarGroup, SidebarLink

# Sections that map one-to-one onto a settings dataclass
_SECTIONS: dict[str, type] = {
    "site": SiteSettings,
    "build": BuildSettings,
    "theme": ThemeSettings,
    "search": SearchSettings,
    "seo": SeoSettings,
}


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in *root*, or None."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def load_config(root: Path, **overrides: object) -> TabbyConfig:
    """Load TabbyConfig from root, optionally merging tabby.toml.

    Supported overrides: ``host``, ``port``, ``output_dir``, ``base_url``.
    ``None`` values are ignored so CLI flags can be passed straight through.

    Raises:
        ConfigError: If a config file exists but is unreadable, unparseable,
            or has a section of the wrong shape.

    """
    root = Path(root).resolve()
    path = find_config_file(root)
    data = _read_config_file(path) if path is not None else {}
    config = _from_mapping(root, data, source=path)

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return config

    top: dict[str, Any] = {}
    if "host" in overrides:
        top["host"] = str(overrides["host"])
    if "port" in overrides:
        top["port"] = int(overrides["port"])  # type: ignore[call-overload]
    if "output_dir" in overrides:
        top["build"] = dataclasses.replace(
            config.build, output_dir=str(overrides["output_dir"]),
        )
    if "base_url" in overrides:
        top["site"] = dataclasses.replace(config.site, base_url=str(overrides["base_url"]))
    unknown = set(overrides) - {"host", "port", "output_dir", "base_url"}
    if unknown:
        msg = f"Unknown config override(s): {', '.join(sorted(unknown))}"
        raise ConfigError(msg)
    return dataclasses.replace(config, **top)


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read and parse a TOML or YAML config file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc

    if path.suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path.name}: {exc}"
            raise ConfigError(msg) from exc
    else:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML in {path.name}: {exc}"
            raise ConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping at the top level"
        raise ConfigError(msg)
    return data


def _from_mapping(root: Path, data: dict[str, Any], *, source: Path | None) -> TabbyConfig:
    """Build a TabbyConfig from parsed file data."""
    where = source.name if source is not None else "config"
    kwargs: dict[str, Any] = {}

    for name, cls in _SECTIONS.items():
        if name in data:
            kwargs[name] = _section(cls, data[name], f"{where} [{name}]")

    if "sidebar" in data:
        kwargs["sidebar"] = _sidebar(data["sidebar"], f"{where} [sidebar]")
    if "nav" in data:
        kwargs["nav"] = tuple(
            NavItem(**_link(item, f"{where} [[nav]]")) for item in _list(data["nav"], where)
        )

    dev = data.get("dev", {})
    if not isinstance(dev, dict):
        msg = f"{where} [dev] must be a table"
        raise ConfigError(msg)
    if "host" in dev:
        kwargs["host"] = str(dev["host"])
    if "port" in dev:
        kwargs["port"] = _typed(dev["port"], int, f"{where} [dev] port")

    return TabbyConfig(root=root, **kwargs)


def _section(cls: type, value: object, where: str) -> object:
    """Instantiate a settings dataclass from a table, type-checking each key."""
    if not isinstance(value, dict):
        msg = f"{where} must be a table"
        raise ConfigError(msg)
    defaults = cls()
    known = {f.name for f in dataclasses.fields(cls)}
    values: dict[str, Any] = {}
    for key, item in value.items():
        if key not in known:
            continue
        expected = type(getattr(defaults, key))
        if getattr(defaults, key) is None:
            expected = str
        values[key] = _typed(item, expected, f"{where} {key}")
    return cls(**values)


def _sidebar(value: object, where: str) -> SidebarSettings:
    if not isinstance(value, dict):
        msg = f"{where} must be a table"
        raise ConfigError(msg)
    auto = _typed(value.get("auto", True), bool, f"{where} auto")
    groups: list[SidebarGroup] = []
    for group in _list(value.get("groups", []), where):
        if not isinstance(group, dict):
            msg = f"{where} groups entries must be tables"
            raise ConfigError(msg)
        items = tuple(
            SidebarLink(**_link(item, f"{where} items"))
            for item in _list(group.get("items", []), where)
        )
        groups.append(SidebarGroup(text=str(group.get("text", "")), items=items))
    return SidebarSettings(auto=auto, groups=tuple(groups))


def _link(value: object, where: str) -> dict[str, str]:
    if not isinstance(value, dict) or "text" not in value or "link" not in value:
        msg = f"{where} entries need 'text' and 'link'"
        raise ConfigError(msg)
    return {"text": str(value["text"]), "link": str(value["link"])}


def _list(value: object, where: str) -> list[Any]:
    if not isinstance(value, list):
        msg = f"{where}: expected an array"
        raise ConfigError(msg)
    return value


def _typed(value: object, expected: type, where: str) -> Any:
    # bool is an int subclass; keep them apart
    if expected is int and isinstance(value, bool):
        ok = False
    else:
        ok = isinstance(value, expected)
    if not ok:
        msg = f"{where}: expected {expected.__name__}, got {type(value).__name__}"
        raise ConfigError(msg)
    return value

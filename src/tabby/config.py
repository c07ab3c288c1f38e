"""Tabby configuration.

TabbyConfig is the central configuration object, frozen after creation.
Settings are grouped into sections that mirror the ``tabby.toml`` tables
(``[site]``, ``[build]``, ``[theme]``, ``[sidebar]``, ``[search]``,
``[seo]`` and the ``[[nav]]`` array).
"""

from dataclasses import dataclass, field
from pathlib import Path

from tabby.site.model import NavItem, SidebarGroup

CONFIG_FILENAMES: tuple[str, ...] = ("tabby.toml", "tabby.yaml", "tabby.yml")
CACHE_DIR = ".tabby"
MANIFEST_FILENAME = "manifest.json"


@dataclass(frozen=True, slots=True)
class SiteSettings:
    """Site identity, used in titles, feeds, and the sitemap."""

    title: str = "Documentation"
    description: str = ""
    base_url: str = "/"
    language: str = "en"


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Project-relative directory names."""

    content_dir: str = "content"
    output_dir: str = "dist"
    static_dir: str = "static"


@dataclass(frozen=True, slots=True)
class ThemeSettings:
    name: str = "default"
    highlight_theme: str = "one-dark"
    custom_css: str | None = None


@dataclass(frozen=True, slots=True)
class SidebarSettings:
    """Auto mode groups pages by directory; manual mode uses ``groups`` verbatim."""

    auto: bool = True
    groups: tuple[SidebarGroup, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchSettings:
    enabled: bool = True
    max_content_length: int = 5000


@dataclass(frozen=True, slots=True)
class SeoSettings:
    sitemap: bool = True
    rss: bool = False
    og_image: str | None = None


@dataclass(frozen=True, slots=True)
class TabbyConfig:
    """Configuration for a tabby project.

    Attributes:
        root: Project root (contains tabby.toml, content/, static/).
              Always resolved to an absolute path on construction.
        host: Bind address for the dev server.
        port: Bind port for the dev server (also baked into the live-reload
              client).
        site: Site identity settings.
        build: Directory layout settings.
        theme: Theme selection and highlighting style.
        nav: Top navigation entries, passed through unchanged.
        sidebar: Sidebar mode and manual groups.
        search: Search index settings.
        seo: Sitemap / feed toggles.

    """

    root: Path = field(default_factory=Path.cwd)
    host: str = "127.0.0.1"
    port: int = 3000
    site: SiteSettings = field(default_factory=SiteSettings)
    build: BuildSettings = field(default_factory=BuildSettings)
    theme: ThemeSettings = field(default_factory=ThemeSettings)
    nav: tuple[NavItem, ...] = ()
    sidebar: SidebarSettings = field(default_factory=SidebarSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    seo: SeoSettings = field(default_factory=SeoSettings)

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def content_path(self) -> Path:
        """Absolute path to the content directory."""
        return self.root / self.build.content_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to the static assets directory."""
        return self.root / self.build.static_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the output directory."""
        output = Path(self.build.output_dir)
        if output.is_absolute():
            return output
        return self.root / output

    @property
    def themes_path(self) -> Path:
        """Absolute path to the user themes directory."""
        return self.root / "themes"

    @property
    def cache_path(self) -> Path:
        """Absolute path to the hidden build cache directory."""
        return self.root / CACHE_DIR

    @property
    def manifest_path(self) -> Path:
        """Absolute path to the persisted content-hash manifest."""
        return self.cache_path / MANIFEST_FILENAME

    @property
    def base_url(self) -> str:
        """Site base URL, always ending in ``/``."""
        base = self.site.base_url or "/"
        return base if base.endswith("/") else base + "/"

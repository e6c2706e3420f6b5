"""Build configuration: YAML params turned into frozen dataclasses.

Every task receives the same `BuildConfig` instance; nothing mutates it after
the CLI has loaded it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

import yaml

from .logging import get_logger
from .utils import _get


log = get_logger("assetflow.config")

# Vendor prefixes added in front of unprefixed declarations.
DEFAULT_PREFIXES: Dict[str, Tuple[str, ...]] = {
    "appearance": ("webkit", "moz"),
    "backdrop-filter": ("webkit",),
    "box-decoration-break": ("webkit",),
    "clip-path": ("webkit",),
    "hyphens": ("webkit", "ms"),
    "mask-image": ("webkit",),
    "tab-size": ("moz",),
    "text-size-adjust": ("webkit", "moz", "ms"),
    "user-select": ("webkit", "moz", "ms"),
}


class ConfigError(ValueError):
    """Raised when a config file has the wrong shape."""


@dataclass(frozen=True)
class Flags:
    """Per-invocation switches; only the substitution step reads them."""

    inline_css: bool = False
    inline_js: bool = False


@dataclass(frozen=True)
class ScriptPaths:
    dest: str
    root: str
    internal: Tuple[str, ...]
    external: Tuple[str, ...] = ()
    bundle: str = "script.js"
    minified: str = "scripts.min.js"
    preset: str = "es2015"

    @property
    def sources(self) -> Tuple[str, ...]:
        return self.external + self.internal


@dataclass(frozen=True)
class StylePaths:
    dest: str
    root: str
    internal: Tuple[str, ...]
    external: Tuple[str, ...] = ()
    bundle: str = "style.css"
    prefixes: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_PREFIXES)
    )

    @property
    def sources(self) -> Tuple[str, ...]:
        return self.external + self.internal


@dataclass(frozen=True)
class ViewPaths:
    dest: str
    origin: Tuple[str, ...]


@dataclass(frozen=True)
class ImagePaths:
    dest: str
    origin: Tuple[str, ...]


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    open_url_delay: float | None = None


@dataclass(frozen=True)
class ReplaceConfig:
    pages: Tuple[str, ...]
    css: str = "style.css"
    js: str = "script.js"


@dataclass(frozen=True)
class BuildConfig:
    src_root: str
    dist_root: str
    scripts: ScriptPaths
    styles: StylePaths
    views: ViewPaths
    images: ImagePaths
    html_replace: ReplaceConfig
    server: ServerConfig
    clean: Tuple[str, ...]
    watch_interval: float = 1.0
    runs_dir: str | None = None
    log_file: str | None = None


def _str_tuple(value, key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigError(f"`{key}` must be a string or a list of strings, got {value!r}")


def _str(value, key: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string, got {value!r}")
    return value


def _number(value, key: str, default):
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"`{key}` must be a number, got {value!r}")
    return value


def _prefixes(value) -> Dict[str, Tuple[str, ...]]:
    if value is None:
        return dict(DEFAULT_PREFIXES)
    if not isinstance(value, dict):
        raise ConfigError(f"`styles.prefixes` must be a mapping, got {value!r}")
    return {
        str(prop): _str_tuple(vendors, f"styles.prefixes.{prop}", ())
        for prop, vendors in value.items()
    }


def build_config(params: dict) -> BuildConfig:
    """Build a `BuildConfig` from parsed YAML params, filling defaults.

    Defaults reproduce the stock layout: sources under `build/`, artifacts
    flat in `dist/`.
    """
    if not isinstance(params, dict):
        raise ConfigError("Config root must be a mapping")
    p = params
    src = _str(_get(p, "project", "src"), "project.src", "build")
    dist = _str(_get(p, "project", "dist"), "project.dist", "dist")

    scripts_root = _str(_get(p, "scripts", "root"), "scripts.root", f"{src}/scripts")
    scripts = ScriptPaths(
        dest=_str(_get(p, "scripts", "dest"), "scripts.dest", dist),
        root=scripts_root,
        internal=_str_tuple(
            _get(p, "scripts", "internal"),
            "scripts.internal",
            (f"{scripts_root}/script.js",),
        ),
        external=_str_tuple(_get(p, "scripts", "external"), "scripts.external", ()),
        bundle=_str(_get(p, "scripts", "bundle"), "scripts.bundle", "script.js"),
        minified=_str(
            _get(p, "scripts", "minified"), "scripts.minified", "scripts.min.js"
        ),
        preset=_str(_get(p, "scripts", "preset"), "scripts.preset", "es2015"),
    )

    styles_root = _str(_get(p, "styles", "root"), "styles.root", f"{src}/styles")
    styles = StylePaths(
        dest=_str(_get(p, "styles", "dest"), "styles.dest", dist),
        root=styles_root,
        internal=_str_tuple(
            _get(p, "styles", "internal"),
            "styles.internal",
            (f"{styles_root}/style.{{scss,sass}}",),
        ),
        external=_str_tuple(_get(p, "styles", "external"), "styles.external", ()),
        bundle=_str(_get(p, "styles", "bundle"), "styles.bundle", "style.css"),
        prefixes=_prefixes(_get(p, "styles", "prefixes")),
    )

    views = ViewPaths(
        dest=_str(_get(p, "views", "dest"), "views.dest", dist),
        origin=_str_tuple(
            _get(p, "views", "origin"), "views.origin", (f"{src}/**/*.{{html,php}}",)
        ),
    )
    images = ImagePaths(
        dest=_str(_get(p, "images", "dest"), "images.dest", f"{dist}/images"),
        origin=_str_tuple(
            _get(p, "images", "origin"), "images.origin", (f"{src}/images/**/*",)
        ),
    )
    html_replace = ReplaceConfig(
        pages=_str_tuple(
            _get(p, "html_replace", "pages"),
            "html_replace.pages",
            (f"{dist}/index.{{html,php}}",),
        ),
        css=_str(_get(p, "html_replace", "css"), "html_replace.css", styles.bundle),
        js=_str(_get(p, "html_replace", "js"), "html_replace.js", scripts.bundle),
    )
    server = ServerConfig(
        host=_str(_get(p, "server", "host"), "server.host", "127.0.0.1"),
        port=int(_number(_get(p, "server", "port"), "server.port", 3000)),
        open_url_delay=_number(
            _get(p, "server", "open_url_delay"), "server.open_url_delay", None
        ),
    )
    runs_dir = _get(p, "project", "runs_dir")
    log_file = _get(p, "project", "log_file")
    return BuildConfig(
        src_root=src,
        dist_root=dist,
        scripts=scripts,
        styles=styles,
        views=views,
        images=images,
        html_replace=html_replace,
        server=server,
        clean=_str_tuple(_get(p, "clean"), "clean", (dist, "node_modules")),
        watch_interval=float(
            _number(_get(p, "project", "watch_interval"), "project.watch_interval", 1.0)
        ),
        runs_dir=_str(runs_dir, "project.runs_dir", "") or None,
        log_file=_str(log_file, "project.log_file", "") or None,
    )


def load_params(path: str | Path) -> dict:
    p = Path(path)
    if not p.exists():
        log.info("Config %s not found, using defaults", p)
        return {}
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | Path) -> BuildConfig:
    return build_config(load_params(path))

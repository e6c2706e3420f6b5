"""Stylesheet stages: Sass compilation, vendor prefixing, minification."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Dict, List, Mapping, Tuple

import rcssmin
import sass

from ..orchestrator.logging import get_logger
from ..orchestrator.stream import Asset


log = get_logger("assetflow.transforms.css")

SASS_SUFFIXES = {".scss", ".sass"}

# A declaration directly after `{` or `;`: `{user-select:none` / `; color: red`.
_DECL_RE = re.compile(
    r"(?P<lead>[{;]\s*)(?P<prop>[a-zA-Z-]+)\s*:(?P<value>[^;{}]*)"
)


def compile_sass(assets: List[Asset], output_style: str = "compressed") -> List[Asset]:
    """Compile `.scss`/`.sass` assets; plain CSS passes through untouched.

    A source that fails to compile is logged and dropped, the rest of the
    stream carries on.
    """
    out: List[Asset] = []
    for a in assets:
        if a.path.suffix not in SASS_SUFFIXES:
            out.append(a)
            continue
        include_paths = [str(s.parent) for s in a.sources]
        try:
            css = sass.compile(
                string=a.text,
                output_style=output_style,
                include_paths=include_paths,
                indented=a.path.suffix == ".sass",
            )
        except sass.CompileError as e:
            log.error("Sass compilation failed for %s:\n%s", a.path, e)
            continue
        out.append(replace(a, path=a.path.with_suffix(".css"), text=css))
    return out


def prefix_css(css: str, prefixes: Mapping[str, Tuple[str, ...]]) -> str:
    """Insert vendor-prefixed copies before matching declarations."""

    def repl(m: re.Match) -> str:
        prop = m.group("prop")
        vendors = prefixes.get(prop.lower())
        if not vendors:
            return m.group(0)
        value = m.group("value")
        decls = [f"-{v}-{prop}:{value}" for v in vendors]
        decls.append(f"{prop}:{value}")
        return m.group("lead") + ";".join(decls)

    return _DECL_RE.sub(repl, css)


def autoprefix(prefixes: Dict[str, Tuple[str, ...]]):
    def stage(assets: List[Asset]) -> List[Asset]:
        return [replace(a, text=prefix_css(a.text, prefixes)) for a in assets]

    return stage


def minify_css(css: str) -> str:
    return rcssmin.cssmin(css, keep_bang_comments=True)


def sources_map(asset: Asset) -> dict:
    """Source map listing the original files with their contents.

    Line mappings do not survive minification into a single line, so the map
    only carries `sources`/`sourcesContent`.
    """
    return {
        "version": 3,
        "file": asset.path.name,
        "sources": [s.as_posix() for s in asset.sources],
        "sourcesContent": [s.read_text(encoding="utf-8") for s in asset.sources],
        "names": [],
        "mappings": "",
    }

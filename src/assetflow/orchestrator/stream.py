"""In-memory asset streams.

A task reads files into `Asset` values, passes the list through an ordered
series of stages (plain functions `list[Asset] -> list[Asset]`) and writes
whatever comes out.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .utils import expand_braces, expand_globs, glob_base


@dataclass
class Asset:
    path: Path  # output path, relative to the destination directory
    text: str
    sources: List[Path] = field(default_factory=list)
    sourcemap: Optional[dict] = None


Stage = Callable[[List[Asset]], List[Asset]]


def src(patterns: Iterable[str]) -> list[Asset]:
    """Read every file matched by `patterns`, in pattern order.

    Each asset keeps its path relative to the static part of the pattern
    that matched it.
    """
    assets: list[Asset] = []
    seen: set[Path] = set()
    for pattern in patterns:
        for alt in expand_braces(pattern):
            base = glob_base(alt)
            for f in expand_globs([alt]):
                if f.resolve() in seen:
                    continue
                seen.add(f.resolve())
                try:
                    rel = f.relative_to(base)
                except ValueError:
                    rel = Path(f.name)
                assets.append(
                    Asset(path=rel, text=f.read_text(encoding="utf-8"), sources=[f])
                )
    return assets


def run_stages(assets: list[Asset], stages: Iterable[Stage]) -> list[Asset]:
    for stage in stages:
        assets = stage(assets)
    return assets


def concat(name: str, separator: str = "\n") -> Stage:
    def stage(assets: list[Asset]) -> list[Asset]:
        if not assets:
            return []
        sources = [s for a in assets for s in a.sources]
        text = separator.join(a.text.rstrip("\n") for a in assets) + "\n"
        return [Asset(path=Path(name), text=text, sources=sources)]

    return stage


def rename(name: str) -> Stage:
    def stage(assets: list[Asset]) -> list[Asset]:
        return [replace(a, path=a.path.with_name(name)) for a in assets]

    return stage


def transform(fn: Callable[[str], str]) -> Stage:
    """Apply a text-to-text function to every asset."""

    def stage(assets: list[Asset]) -> list[Asset]:
        return [replace(a, text=fn(a.text)) for a in assets]

    return stage


def write_maps(comment: str) -> Stage:
    """Emit `<name>.map` next to each asset carrying a source map.

    `comment` is a format string for the trailing reference, e.g.
    `"//# sourceMappingURL={}"`.
    """

    def stage(assets: list[Asset]) -> list[Asset]:
        out: list[Asset] = []
        for a in assets:
            if a.sourcemap is None:
                out.append(a)
                continue
            map_path = a.path.with_name(a.path.name + ".map")
            text = a.text.rstrip("\n") + "\n" + comment.format(map_path.name) + "\n"
            out.append(replace(a, text=text, sourcemap=None))
            out.append(
                Asset(
                    path=map_path,
                    text=json.dumps(a.sourcemap, separators=(",", ":")),
                    sources=list(a.sources),
                )
            )
        return out

    return stage


def dest(assets: list[Asset], out_dir: str | Path) -> list[Path]:
    out_dir = Path(out_dir)
    written: list[Path] = []
    for a in assets:
        target = out_dir / a.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(a.text, encoding="utf-8")
        written.append(target)
    return written

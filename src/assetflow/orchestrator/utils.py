"""Small helpers for reading config params and resolving path patterns."""

from __future__ import annotations

import glob
import os
import re
from pathlib import Path
from typing import Dict, Iterable, List


_BRACE_RE = re.compile(r"\{([^{}]*)\}")
_GLOB_CHARS = "*?["


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def expand_braces(pattern: str) -> List[str]:
    """Expand `{a,b}` alternatives: `style.{scss,sass}` -> two patterns."""
    m = _BRACE_RE.search(pattern)
    if not m:
        return [pattern]
    head, tail = pattern[: m.start()], pattern[m.end() :]
    out: List[str] = []
    for alt in m.group(1).split(","):
        out.extend(expand_braces(head + alt + tail))
    return out


def has_magic(pattern: str) -> bool:
    return any(ch in pattern for ch in _GLOB_CHARS) or "{" in pattern


def glob_base(pattern: str) -> Path:
    """Directory part of a pattern before the first glob segment.

    For a literal file path this is its parent, so outputs are named after
    the file alone.
    """
    parts = Path(pattern).parts
    base: list[str] = []
    for part in parts:
        if has_magic(part):
            return Path(*base) if base else Path(".")
        base.append(part)
    return Path(pattern).parent


def expand_globs(patterns: Iterable[str]) -> list[Path]:
    """Resolve patterns to existing files, keeping pattern order.

    Unmatched patterns contribute nothing. Files matched by several patterns
    are returned once, at their first position.
    """
    paths: list[Path] = []
    seen: set[str] = set()
    for pat in patterns:
        for alt in expand_braces(str(pat)):
            if has_magic(alt):
                matches = sorted(glob.glob(alt, recursive=True))
            else:
                matches = [alt] if os.path.exists(alt) else []
            for m in matches:
                p = Path(m)
                key = os.path.normpath(m)
                if key in seen or not p.is_file():
                    continue
                seen.add(key)
                paths.append(p)
    return paths


def relative_url(target: Path, start_dir: Path) -> str:
    """URL from a page in `start_dir` to `target`, with forward slashes."""
    return Path(os.path.relpath(target, start_dir)).as_posix()

"""Script stages: Babel transpilation and minification."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import List

import dukpy
import rjsmin

from ..orchestrator.stream import Asset


# Block comments that count as license text besides `/*! ... */`.
_LICENSE_TAG_RE = re.compile(r"@(?:license|preserve|cc_on)\b")
_BLOCK_COMMENT_RE = re.compile(r"/\*(?!!)(.*?)\*/", re.S)


def transpile(preset: str = "es2015"):
    """Transpile each asset with Babel and keep the produced source map.

    The asset is the concatenated bundle, so the map's `sources` name the
    bundle itself; positions map back to the bundle before transpilation.
    """

    def stage(assets: List[Asset]) -> List[Asset]:
        out: List[Asset] = []
        for a in assets:
            result = dukpy.babel_compile(
                a.text,
                presets=[preset],
                filename=a.path.name,
                sourceMaps=True,
            )
            sourcemap = result.get("map") or None
            if sourcemap is not None:
                sourcemap = dict(sourcemap, file=a.path.name)
            out.append(replace(a, text=result["code"], sourcemap=sourcemap))
        return out

    return stage


def mark_license_comments(script: str) -> str:
    """Turn `@license`/`@preserve`/`@cc_on` block comments into `/*!` ones."""

    def repl(m: re.Match) -> str:
        body = m.group(1)
        if _LICENSE_TAG_RE.search(body):
            return f"/*!{body}*/"
        return m.group(0)

    return _BLOCK_COMMENT_RE.sub(repl, script)


def minify_js(script: str) -> str:
    """Minify keeping license blocks."""
    return rjsmin.jsmin(mark_license_comments(script), keep_bang_comments=True)

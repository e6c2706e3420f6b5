"""Markup stages: minification and build-block substitution."""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Pattern

import htmlmin


# Comments matching any of these survive minification verbatim.
BUILD_MARKERS = (re.compile(r"build:[a-zA-Z]+"), re.compile(r"endbuild"))

_COMMENT_RE = re.compile(r"<!--(.*?)-->", re.S)
_BLOCK_RE = re.compile(
    r"(?P<indent>[ \t]*)<!--\s*build:(?P<name>[a-zA-Z]+)\s*-->.*?<!--\s*endbuild\s*-->",
    re.S,
)


def _protect_markers(markup: str, markers: Iterable[Pattern]) -> str:
    # htmlmin keeps `<!--! ... -->` comments and drops the leading "!".
    markers = tuple(markers)

    def repl(m: re.Match) -> str:
        body = m.group(1)
        if any(p.search(body) for p in markers):
            return f"<!--!{body}-->"
        return m.group(0)

    return _COMMENT_RE.sub(repl, markup)


def minify_markup(markup: str, markers: Iterable[Pattern] = BUILD_MARKERS) -> str:
    return htmlmin.minify(
        _protect_markers(markup, markers),
        remove_comments=True,
        remove_empty_space=True,
        remove_optional_attribute_quotes=False,
    )


def stylesheet_tag(href: str) -> str:
    return f'<link rel="stylesheet" href="{href}">'


def script_tag(src: str) -> str:
    return f'<script src="{src}"></script>'


def replace_blocks(markup: str, replacements: Mapping[str, str]) -> str:
    """Swap `<!-- build:name --> ... <!-- endbuild -->` blocks.

    Blocks whose name has no replacement are removed with their content.
    """

    def repl(m: re.Match) -> str:
        name = m.group("name")
        if name not in replacements:
            return ""
        # Plain function: the replacement text may contain backslashes.
        return m.group("indent") + replacements[name]

    return _BLOCK_RE.sub(repl, markup)

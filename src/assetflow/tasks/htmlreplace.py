"""Reference substitution in the built pages.

Default: `build:css` / `build:js` blocks become `<link>` / `<script src>` tags
pointing at the built bundles. `--xcss` and `--xjs` inline the bundle text
instead. The bundles must already exist; a missing one raises
`FileNotFoundError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import expand_globs, relative_url
from ..transforms.html import replace_blocks, script_tag, stylesheet_tag


def _inline_blocks(css_path: Path, js_path: Path, flags: Flags, logger) -> Dict[str, str]:
    inline: Dict[str, str] = {}
    if flags.inline_css:
        # Strip "../" so url() references resolve from the page directory.
        css = css_path.read_text(encoding="utf-8").replace("../", "")
        inline["css"] = f"<style>{css}</style>"
        logger.info("Exchanged the CSS reference for the stylesheet content")
    if flags.inline_js:
        js = js_path.read_text(encoding="utf-8")
        inline["js"] = f"<script>{js}</script>"
        logger.info("Exchanged the JS reference for the script content")
    return inline


@task(
    name=TaskName.HTML_REPLACE,
    inputs=lambda c: list(c.html_replace.pages),
    outputs=[],
)
def htmlreplace(config: BuildConfig, flags: Flags):
    logger = get_logger("assetflow.tasks.htmlreplace")
    css_path = Path(config.styles.dest) / config.html_replace.css
    js_path = Path(config.scripts.dest) / config.html_replace.js
    inline = _inline_blocks(css_path, js_path, flags, logger)

    pages = expand_globs(config.html_replace.pages)
    if not pages:
        logger.warning("No pages matched %s", ", ".join(config.html_replace.pages))
    for page in pages:
        blocks = {
            "css": inline.get("css") or stylesheet_tag(relative_url(css_path, page.parent)),
            "js": inline.get("js") or script_tag(relative_url(js_path, page.parent)),
        }
        markup = page.read_text(encoding="utf-8")
        page.write_text(replace_blocks(markup, blocks), encoding="utf-8")
        logger.info("Replaced build blocks in %s", page)

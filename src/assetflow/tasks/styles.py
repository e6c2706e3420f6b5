"""Style task: external CSS + compiled Sass merged into one minified bundle."""

from __future__ import annotations

from dataclasses import replace

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.stream import concat, dest, run_stages, src, transform, write_maps
from ..transforms.css import autoprefix, compile_sass, minify_css, sources_map


@task(
    name=TaskName.CSS,
    inputs=lambda c: list(c.styles.sources),
    outputs=lambda c: [f"{c.styles.dest}/{c.styles.bundle}"],
)
def css(config: BuildConfig, flags: Flags):
    """Build `style.css` (plus `style.css.map`) from external then internal sources."""
    logger = get_logger("assetflow.tasks.styles")
    paths = config.styles

    # External sheets first, in declared order, then the Sass entry points.
    assets = src(paths.external) + src(paths.internal)
    logger.info("Styles: %d source file(s)", len(assets))

    assets = run_stages(
        assets,
        [
            compile_sass,
            autoprefix(paths.prefixes),
            concat(paths.bundle),
            transform(minify_css),
            lambda xs: [replace(a, sourcemap=sources_map(a)) for a in xs],
            write_maps("/*# sourceMappingURL={} */"),
        ],
    )
    written = dest(assets, paths.dest)
    for p in written:
        logger.info("Wrote %s", p)

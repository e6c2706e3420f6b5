"""Script tasks: concatenate + transpile, then compress the bundle."""

from __future__ import annotations

from pathlib import Path

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.stream import concat, dest, rename, run_stages, src, transform, write_maps
from ..transforms.js import minify_js, transpile


@task(
    name=TaskName.SCRIPTS,
    inputs=lambda c: list(c.scripts.sources),
    outputs=lambda c: [
        f"{c.scripts.dest}/{c.scripts.bundle}",
        f"{c.scripts.dest}/{c.scripts.bundle}.map",
    ],
)
def scripts(config: BuildConfig, flags: Flags):
    """Concatenate external then internal scripts and transpile to ES5."""
    logger = get_logger("assetflow.tasks.scripts")
    paths = config.scripts

    assets = src(paths.sources)
    logger.info("Scripts: %d source file(s)", len(assets))
    assets = run_stages(
        assets,
        [
            concat(paths.bundle),
            transpile(paths.preset),
            write_maps("//# sourceMappingURL={}"),
        ],
    )
    for p in dest(assets, paths.dest):
        logger.info("Wrote %s", p)


@task(
    name=TaskName.COMPRESS,
    inputs=lambda c: [f"{c.scripts.dest}/{c.scripts.bundle}"],
    outputs=lambda c: [f"{c.scripts.dest}/{c.scripts.minified}"],
)
def compress(config: BuildConfig, flags: Flags):
    """Minify the concatenated bundle into `scripts.min.js`.

    Errors propagate so the runner marks only this step as failed.
    """
    logger = get_logger("assetflow.tasks.scripts")
    paths = config.scripts

    bundle = Path(paths.dest) / paths.bundle
    assets = src([str(bundle)])
    if not assets:
        logger.warning("Nothing to compress: %s does not exist", bundle)
        return
    assets = run_stages(assets, [transform(minify_js), rename(paths.minified)])
    for p in dest(assets, paths.dest):
        logger.info("Wrote %s", p)

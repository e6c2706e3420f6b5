from __future__ import annotations

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.stream import dest, run_stages, src, transform
from ..transforms.html import minify_markup


@task(
    name=TaskName.VIEWS,
    inputs=lambda c: list(c.views.origin),
    outputs=lambda c: [c.views.dest],
)
def views(config: BuildConfig, flags: Flags):
    """Minify markup, keeping `build:*` / `endbuild` comments."""
    logger = get_logger("assetflow.tasks.views")
    assets = run_stages(src(config.views.origin), [transform(minify_markup)])
    written = dest(assets, config.views.dest)
    logger.info("Minified %d view(s) into %s", len(written), config.views.dest)

from __future__ import annotations

import shutil
from pathlib import Path

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger


@task(name=TaskName.CLEAN, inputs=lambda c: list(c.clean), outputs=[])
def clean(config: BuildConfig, flags: Flags):
    """Remove the configured output and dependency directories. No undo."""
    logger = get_logger("assetflow.tasks.clean")
    for target in config.clean:
        p = Path(target)
        if p.is_dir() and not p.is_symlink():
            shutil.rmtree(p)
        elif p.exists() or p.is_symlink():
            p.unlink()
        else:
            logger.debug("Nothing to remove at %s", p)
            continue
        logger.info("Removed %s", p)

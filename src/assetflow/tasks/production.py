from __future__ import annotations

from ..orchestrator import Pipeline, TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.registry import discover_tasks


# Each step reads what the previous ones wrote.
PRODUCTION_SEQUENCE = [
    TaskName.VIEWS,
    TaskName.SCRIPTS,
    TaskName.COMPRESS,
    TaskName.CSS,
    TaskName.HTML_REPLACE,
]


@task(name=TaskName.PRODUCTION, inputs=[], outputs=[])
def production(config: BuildConfig, flags: Flags):
    """Run the full release build, strictly one step after another."""
    logger = get_logger("assetflow.tasks.production")
    pipe = Pipeline.sequence(discover_tasks(), PRODUCTION_SEQUENCE, name="production")
    pipe.run(config=config, flags=flags)
    logger.info("The production task has finished.")

"""Long-running tasks: `watch` (rebuild on change) and `server` (plus live reload)."""

from __future__ import annotations

import functools
from typing import Dict

from livereload import Server

from ..orchestrator import Pipeline, TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.core import TaskFailed, TaskSpec
from ..orchestrator.logging import get_logger
from ..orchestrator.registry import discover_tasks
from ..orchestrator.watch import Binding, PollingWatcher, bindings


log = get_logger("assetflow.tasks.watch")


def rerun(
    specs: Dict[TaskName, TaskSpec], config: BuildConfig, flags: Flags, binding: Binding
) -> None:
    """Run the task bound to a change; a failure is logged and watching goes on."""
    pipe = Pipeline(
        tasks={binding.task: specs[binding.task]},
        edges=[],
        name=f"watch.{binding.task.value}",
    )
    try:
        pipe.run(config=config, flags=flags)
    except TaskFailed as e:
        log.warning("Rebuild failed, still watching: %s", e)


def make_server(config: BuildConfig, on_change) -> Server:
    server = Server()
    for binding in bindings(config):
        callback = functools.partial(on_change, binding)
        for pattern in binding.expanded():
            server.watch(pattern, callback)
    return server


@task(name=TaskName.WATCH, inputs=[], outputs=[])
def watch(config: BuildConfig, flags: Flags):
    specs = discover_tasks()
    watcher = PollingWatcher(
        bindings(config),
        functools.partial(rerun, specs, config, flags),
        interval=config.watch_interval,
    )
    try:
        watcher.run_forever()
    except KeyboardInterrupt:
        log.info("Stopped.")


@task(name=TaskName.SERVER, inputs=[], outputs=lambda c: [c.dist_root])
def server(config: BuildConfig, flags: Flags):
    """Serve the output directory and reload browsers after each rebuild."""
    specs = discover_tasks()
    srv = make_server(config, functools.partial(rerun, specs, config, flags))
    log.info(
        "Serving %s at http://%s:%d", config.dist_root, config.server.host, config.server.port
    )
    try:
        srv.serve(
            root=config.dist_root,
            host=config.server.host,
            port=config.server.port,
            open_url_delay=config.server.open_url_delay,
        )
    except KeyboardInterrupt:
        log.info("Stopped.")

"""File-change bindings and a polling watcher.

Changes are detected by comparing mtime snapshots of every file matched by a
binding's patterns; a new or deleted file counts as a change too.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .config import BuildConfig
from .core import TaskName
from .logging import get_logger
from .utils import expand_braces, expand_globs


log = get_logger("assetflow.watch")


@dataclass(frozen=True)
class Binding:
    patterns: Tuple[str, ...]
    task: TaskName

    def expanded(self) -> List[str]:
        return [alt for pat in self.patterns for alt in expand_braces(pat)]


def bindings(config: BuildConfig) -> List[Binding]:
    return [
        Binding((f"{config.scripts.root}/**/*.js",), TaskName.SCRIPTS),
        Binding((f"{config.styles.root}/**/*.{{sass,scss}}",), TaskName.CSS),
        Binding(tuple(config.views.origin), TaskName.VIEWS),
    ]


def snapshot(patterns: Tuple[str, ...]) -> Dict[str, float]:
    """Return a mapping of file path -> mtime for the matched files."""
    mtimes: Dict[str, float] = {}
    for path in expand_globs(patterns):
        try:
            mtimes[str(path)] = os.path.getmtime(path)
        except FileNotFoundError:
            # File vanished between glob and stat; skip it.
            continue
    return mtimes


class PollingWatcher:
    def __init__(
        self,
        watched: List[Binding],
        on_change: Callable[[Binding], None],
        interval: float = 1.0,
    ):
        self.bindings = watched
        self.on_change = on_change
        self.interval = interval
        self._mtimes = {b: snapshot(b.patterns) for b in watched}

    def poll(self) -> List[Binding]:
        """Check every binding once and fire `on_change` for those that changed."""
        changed: List[Binding] = []
        for b in self.bindings:
            current = snapshot(b.patterns)
            if current != self._mtimes[b]:
                self._mtimes[b] = current
                changed.append(b)
        for b in changed:
            log.info("Change detected, running %s", b.task.value)
            self.on_change(b)
        return changed

    def run_forever(self) -> None:
        log.info(
            "Watching %s for changes. Ctrl+C to stop.",
            ", ".join(p for b in self.bindings for p in b.patterns),
        )
        while True:
            time.sleep(self.interval)
            self.poll()

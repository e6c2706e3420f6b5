from __future__ import annotations

import enum
import json
import os
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Union

from .config import BuildConfig, Flags
from .logging import get_logger


class TaskName(str, enum.Enum):
    """Every task the CLI knows about; values double as command names."""

    CSS = "css"
    SCRIPTS = "scripts"
    COMPRESS = "compress"
    VIEWS = "views"
    IMAGES = "images"
    HTML_REPLACE = "htmlreplace"
    WATCH = "watch"
    SERVER = "server"
    PRODUCTION = "production"
    CLEAN = "clean"


# Allow static lists or callables that build paths from the config
PathSpec = Union[List[str], Callable[[BuildConfig], List[str]]]


@dataclass
class TaskSpec:
    name: TaskName
    inputs: PathSpec
    outputs: PathSpec
    fn: Callable[..., None]


@dataclass
class StepResult:
    name: str
    status: str  # "ok" | "error" | "skipped"
    seconds: float = 0.0
    error: str | None = None


class TaskFailed(RuntimeError):
    """A pipeline step raised; the original exception is `__cause__`."""

    def __init__(self, step: TaskName, error: BaseException):
        super().__init__(f"{step.value}: {error}")
        self.step = step
        self.error = error


def task(name: TaskName, inputs: PathSpec, outputs: PathSpec):
    """Decorator to declare a task on a function.

    The wrapped function is called as `fn(config=..., flags=...)` with the
    frozen `BuildConfig` and the invocation `Flags`.
    """

    def deco(fn: Callable[..., None]):
        spec = TaskSpec(name=TaskName(name), inputs=inputs, outputs=outputs, fn=fn)
        setattr(fn, "_task_spec", spec)
        return fn

    return deco


def topo_sort(nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> list[str]:
    nodes = list(nodes)
    incoming = {n: set() for n in nodes}
    outgoing = {n: set() for n in nodes}
    for u, v in edges:
        if u not in incoming or v not in incoming:
            raise ValueError(f"Edge references unknown node: {(u, v)}")
        outgoing[u].add(v)
        incoming[v].add(u)
    ordered: list[str] = []
    roots = [n for n in nodes if not incoming[n]]
    while roots:
        n = roots.pop()
        ordered.append(n)
        for m in list(outgoing[n]):
            incoming[m].discard(n)
            outgoing[n].discard(m)
            if not incoming[m]:
                roots.append(m)
    if any(incoming[n] for n in nodes):
        raise ValueError("Cycle detected in DAG")
    return ordered


class Pipeline:
    def __init__(
        self,
        tasks: dict[TaskName, TaskSpec],
        edges: list[tuple[TaskName, TaskName]],
        name: str = "pipeline",
    ):
        self.name = name
        self.tasks = tasks
        self.order = topo_sort(tasks.keys(), edges)
        self.logger = get_logger(f"assetflow.{self.name}")

    @classmethod
    def sequence(
        cls,
        registry: dict[TaskName, TaskSpec],
        steps: list[TaskName],
        name: str = "sequence",
    ) -> "Pipeline":
        """Chain `steps` so each one starts only after the previous finished."""
        missing = [s for s in steps if s not in registry]
        if missing:
            raise ValueError(
                "Sequence references unregistered tasks: "
                + ", ".join(str(getattr(m, "value", m)) for m in missing)
            )
        edges = list(zip(steps, steps[1:]))
        return cls(tasks={s: registry[s] for s in steps}, edges=edges, name=name)

    def _select_subset(self, only_step: TaskName | None) -> list[TaskName]:
        if only_step:
            if only_step not in self.tasks:
                raise KeyError(f"Unknown step: {only_step}")
            return [only_step]
        return self.order

    def run(
        self,
        config: BuildConfig,
        flags: Flags | None = None,
        only_step: TaskName | None = None,
    ) -> list[StepResult]:
        """Run the selected steps in order.

        Stops at the first failing step: the remaining steps are recorded as
        skipped and `TaskFailed` is raised.
        """
        flags = flags or Flags()
        run_id = time.strftime("%Y%m%d-%H%M%S")
        run_dir = None
        if config.runs_dir:
            run_dir = Path(config.runs_dir) / self.name / run_id
            os.makedirs(run_dir, exist_ok=True)

        selected = self._select_subset(only_step)
        self.logger.info(
            "Selected steps: %s", " → ".join(TaskName(s).value for s in selected)
        )

        results: list[StepResult] = []
        state = {
            "pipeline": self.name,
            "run_id": run_id,
            "steps": results,
            "python": sys.version,
        }

        for idx, step_name in enumerate(selected):
            spec = self.tasks[step_name]
            step_logger = get_logger(f"assetflow.{self.name}.{spec.name.value}")
            _prepare_outputs(_resolve_paths(spec.outputs, config))

            started = time.monotonic()
            try:
                step_logger.info("Run: %s", spec.name.value)
                spec.fn(config=config, flags=flags)
            except Exception as e:  # noqa: BLE001
                # A nested pipeline already logged and wrapped its own failure.
                if not isinstance(e, TaskFailed):
                    step_logger.exception("Step failed (%s)", spec.name.value)
                results.append(
                    StepResult(
                        name=spec.name.value,
                        status="error",
                        seconds=round(time.monotonic() - started, 3),
                        error=str(e),
                    )
                )
                for rest in selected[idx + 1 :]:
                    results.append(StepResult(name=TaskName(rest).value, status="skipped"))
                _write_state(run_dir, state)
                if isinstance(e, TaskFailed):
                    raise
                raise TaskFailed(spec.name, e) from e
            results.append(
                StepResult(
                    name=spec.name.value,
                    status="ok",
                    seconds=round(time.monotonic() - started, 3),
                )
            )
            _write_state(run_dir, state)
        return results


def _write_state(run_dir: Path | None, state: dict) -> None:
    if run_dir is None:
        return
    payload = dict(state, steps=[asdict(s) for s in state["steps"]])
    with open(run_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _resolve_paths(paths_spec: PathSpec, config: BuildConfig) -> list[str]:
    """Resolve a static list of paths or a callable(PathSpec) into a list[str].

    Callables receive the full config and must return a list of path strings.
    """
    if callable(paths_spec):
        paths = paths_spec(config)
    else:
        paths = paths_spec
    if paths is None:
        return []
    # Normalize to strings
    out: list[str] = []
    for p in paths:
        out.append(str(p))
    return out


def _prepare_outputs(outputs: list[str]) -> None:
    for out in outputs:
        p = Path(out)
        if p.suffix:
            p.parent.mkdir(parents=True, exist_ok=True)
        else:
            p.mkdir(parents=True, exist_ok=True)


def task_inputs(spec: TaskSpec, config: BuildConfig) -> list[str]:
    """The source patterns a task reads, resolved against `config`."""
    return _resolve_paths(spec.inputs, config)

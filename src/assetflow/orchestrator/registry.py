from __future__ import annotations

import importlib
import pkgutil
from typing import Dict, Iterable

from .core import TaskName, TaskSpec
from .logging import get_logger


log = get_logger("assetflow.registry")

TASKS_PACKAGE = "assetflow.tasks"


def discover_tasks(tasks_pkg: str = TASKS_PACKAGE) -> Dict[TaskName, TaskSpec]:
    """Import all modules in the tasks package and collect decorated functions."""
    specs: Dict[TaskName, TaskSpec] = {}
    try:
        pkg = importlib.import_module(tasks_pkg)
    except ModuleNotFoundError:
        log.warning("No tasks package found.")
        return specs
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{tasks_pkg}."):
        try:
            mod = importlib.import_module(m.name)
        except Exception as e:  # noqa: BLE001
            log.warning("Failed to import %s: %s", m.name, e)
            continue
        for attr_name in dir(mod):
            obj = getattr(mod, attr_name)
            spec = getattr(obj, "_task_spec", None)
            if isinstance(spec, TaskSpec):
                if spec.name in specs and specs[spec.name].fn is not spec.fn:
                    raise ValueError(f"Task registered twice: {spec.name.value}")
                specs[spec.name] = spec
    return specs


def require(
    specs: Dict[TaskName, TaskSpec], names: Iterable[TaskName] = tuple(TaskName)
) -> None:
    """Fail fast when a known task identifier has no implementation."""
    missing = [n.value for n in names if n not in specs]
    if missing:
        raise KeyError("Unregistered tasks: " + ", ".join(missing))

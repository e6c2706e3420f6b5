"""Lightweight in-repo orchestrator for the asset build.

Provides Task and Pipeline primitives, ordered sequencing, file watching and a
Typer CLI.
"""

from .core import Pipeline, TaskName, TaskSpec, task  # re-export for convenience

__all__ = ["Pipeline", "TaskName", "TaskSpec", "task"]

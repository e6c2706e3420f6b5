# tests/helpers.py

from __future__ import annotations

from pathlib import Path


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class FakeServer:
    """Stands in for `livereload.Server`: records watches, never binds a port."""

    def __init__(self) -> None:
        self.watches: list[tuple[str, object]] = []
        self.served: dict | None = None

    def watch(self, pattern, func=None, delay=None, ignore=None) -> None:
        self.watches.append((pattern, func))

    def serve(self, **kwargs) -> None:
        self.served = kwargs

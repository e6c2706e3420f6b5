# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from assetflow.orchestrator.config import BuildConfig, build_config

from .helpers import write


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    A throwaway project root with the stock `build/` layout.

    Tests run with the project root as cwd, since all configured paths are
    relative, the same way the CLI runs them.
    """
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "build/scripts/script.js", "const x = 1;\n")
    write(
        tmp_path / "build/styles/style.scss",
        "$accent: #f00;\n.title { color: $accent; user-select: none; }\n",
    )
    write(
        tmp_path / "build/index.html",
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        "    <!-- a regular comment -->\n"
        "    <!-- build:css -->\n"
        '    <link rel="stylesheet" href="styles/style.css">\n'
        "    <!-- endbuild -->\n"
        "  </head>\n"
        "  <body>\n"
        "    <p>Hello   world</p>\n"
        "    <!-- build:js -->\n"
        '    <script src="scripts/script.js"></script>\n'
        "    <!-- endbuild -->\n"
        "  </body>\n"
        "</html>\n",
    )
    return tmp_path


@pytest.fixture()
def config(project: Path) -> BuildConfig:
    return build_config({})

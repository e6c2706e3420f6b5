# tests/test_htmlreplace.py

from __future__ import annotations

from pathlib import Path

import pytest

from assetflow.orchestrator.config import Flags
from assetflow.tasks.htmlreplace import htmlreplace

from .helpers import write

PAGE = (
    "<head><!-- build:css --><link href=old.css><!-- endbuild --></head>"
    "<body><!-- build:js --><script src=old.js></script><!-- endbuild --></body>"
)


@pytest.fixture()
def built(project: Path) -> Path:
    write(project / "dist/index.html", PAGE)
    write(project / "dist/style.css", ".logo{background:url(../images/logo.png)}")
    write(project / "dist/script.js", "var x = 1;")
    return project


def test_default_links_point_at_bundles(built: Path, config) -> None:
    htmlreplace(config=config, flags=Flags())

    out = (built / "dist/index.html").read_text(encoding="utf-8")
    assert out == (
        '<head><link rel="stylesheet" href="style.css"></head>'
        '<body><script src="script.js"></script></body>'
    )


def test_inline_css_strips_parent_references(built: Path, config) -> None:
    htmlreplace(config=config, flags=Flags(inline_css=True))

    out = (built / "dist/index.html").read_text(encoding="utf-8")
    assert "<style>.logo{background:url(images/logo.png)}</style>" in out
    assert "../" not in out
    assert '<script src="script.js"></script>' in out


def test_inline_js_and_css_combine(built: Path, config) -> None:
    htmlreplace(config=config, flags=Flags(inline_css=True, inline_js=True))

    out = (built / "dist/index.html").read_text(encoding="utf-8")
    assert "<style>" in out
    assert "<script>var x = 1;</script>" in out
    assert "old.css" not in out and "old.js" not in out


def test_missing_artifact_raises(project: Path, config) -> None:
    write(project / "dist/index.html", PAGE)
    with pytest.raises(FileNotFoundError):
        htmlreplace(config=config, flags=Flags(inline_js=True))


def test_unassigned_blocks_are_removed(project: Path, config) -> None:
    write(
        project / "dist/index.html",
        "<head><!-- build:css --><link href=old.css><!-- endbuild -->"
        "<!-- build:fonts --><link href=f.css><!-- endbuild --></head>",
    )
    write(project / "dist/style.css", "a{color:red}")

    htmlreplace(config=config, flags=Flags())

    out = (project / "dist/index.html").read_text(encoding="utf-8")
    assert out == '<head><link rel="stylesheet" href="style.css"></head>'

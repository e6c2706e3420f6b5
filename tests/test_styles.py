# tests/test_styles.py

from __future__ import annotations

import json
import logging
from pathlib import Path

from assetflow.orchestrator.config import Flags, build_config
from assetflow.tasks.styles import css
from assetflow.transforms.css import prefix_css

from .helpers import write


def test_css_builds_single_prefixed_minified_bundle(project: Path, config) -> None:
    css(config=config, flags=Flags())

    out = (project / "dist/style.css").read_text(encoding="utf-8")
    assert ".title{" in out
    assert "color:red" in out
    assert "-webkit-user-select:none" in out
    assert "-moz-user-select:none" in out
    assert out.rstrip().endswith("/*# sourceMappingURL=style.css.map */")
    assert sorted(p.name for p in (project / "dist").iterdir()) == [
        "style.css",
        "style.css.map",
    ]

    sourcemap = json.loads((project / "dist/style.css.map").read_text(encoding="utf-8"))
    assert sourcemap["version"] == 3
    assert sourcemap["file"] == "style.css"
    assert sourcemap["sources"] == ["build/styles/style.scss"]
    assert sourcemap["sourcesContent"][0].startswith("$accent")
    assert sourcemap["mappings"] == ""


def test_external_css_comes_before_compiled_sass(project: Path) -> None:
    write(project / "vendor/reset.css", "body {\n  margin: 0;\n}\n")
    cfg = build_config({"styles": {"external": ["vendor/reset.css"]}})

    css(config=cfg, flags=Flags())

    out = (project / "dist/style.css").read_text(encoding="utf-8")
    assert "body{margin:0}" in out
    assert out.index("body{") < out.index(".title{")


def test_sass_error_is_logged_and_not_fatal(project: Path, caplog) -> None:
    write(project / "build/styles/style.scss", ".broken { color: $undefined; }\n")
    write(project / "vendor/reset.css", "body { margin: 0 }\n")
    cfg = build_config({"styles": {"external": ["vendor/reset.css"]}})

    with caplog.at_level(logging.ERROR):
        css(config=cfg, flags=Flags())

    assert any("Sass compilation failed" in r.getMessage() for r in caplog.records)
    out = (project / "dist/style.css").read_text(encoding="utf-8")
    assert "body{margin:0}" in out
    assert ".broken" not in out


def test_indented_sass_entry_point(project: Path) -> None:
    (project / "build/styles/style.scss").unlink()
    write(project / "build/styles/style.sass", "$c: blue\n.nav\n  color: $c\n")

    css(config=build_config({}), flags=Flags())

    assert ".nav{color:blue}" in (project / "dist/style.css").read_text(encoding="utf-8")


def test_no_sources_writes_nothing(project: Path) -> None:
    (project / "build/styles/style.scss").unlink()
    css(config=build_config({}), flags=Flags())
    assert not (project / "dist/style.css").exists()


def test_prefix_css_only_touches_listed_properties() -> None:
    table = {"appearance": ("webkit", "moz")}
    out = prefix_css("a{appearance:none;color:red}b{display:block}", table)
    assert out == (
        "a{-webkit-appearance:none;-moz-appearance:none;appearance:none;color:red}"
        "b{display:block}"
    )
    assert prefix_css("@media (min-width:10px){a{color:red}}", table) == (
        "@media (min-width:10px){a{color:red}}"
    )

# tests/test_views.py

from __future__ import annotations

from pathlib import Path

from assetflow.orchestrator.config import Flags
from assetflow.tasks.views import views
from assetflow.transforms.html import minify_markup, replace_blocks

from .helpers import write


def test_views_strip_comments_but_keep_build_markers(project: Path, config) -> None:
    views(config=config, flags=Flags())

    source = (project / "build/index.html").read_text(encoding="utf-8")
    out = (project / "dist/index.html").read_text(encoding="utf-8")
    assert "a regular comment" not in out
    assert "<!-- build:css -->" in out
    assert "<!-- build:js -->" in out
    assert out.count("<!-- endbuild -->") == 2
    assert "Hello world" in out
    assert "\n    <p>" not in out
    assert len(out) < len(source)


def test_views_keep_relative_layout(project: Path, config) -> None:
    write(project / "build/pages/about.html", "<p>\n  About\n</p>\n")
    write(project / "build/contact.php", "<div>  <?php echo 'hi'; ?>  </div>\n")

    views(config=config, flags=Flags())

    assert (project / "dist/pages/about.html").exists()
    assert (project / "dist/contact.php").exists()


def test_minify_markup_marker_match_is_substring_based() -> None:
    out = minify_markup("<div>\n  <!-- build:css extra -->\n  <!-- note -->\n</div>")
    assert "<!-- build:css extra -->" in out
    assert "note" not in out


def test_replace_blocks_drops_unassigned_blocks() -> None:
    markup = (
        "<head>\n"
        "  <!-- build:css -->\n  <link href=a.css>\n  <!-- endbuild -->\n"
        "  <!-- build:fonts -->\n  <link href=f.css>\n  <!-- endbuild -->\n"
        "</head>"
    )
    out = replace_blocks(markup, {"css": '<link rel="stylesheet" href="style.css">'})
    assert '  <link rel="stylesheet" href="style.css">\n' in out
    assert "a.css" not in out
    assert "build:fonts" not in out
    assert "f.css" not in out
    assert out.count("<!-- endbuild -->") == 0

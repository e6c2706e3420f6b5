# tests/test_logging.py

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from assetflow.orchestrator.logging import configure_logging, get_logger


@pytest.fixture()
def root_logger():
    root = logging.getLogger("assetflow")
    before = list(root.handlers)
    yield root
    for handler in set(root.handlers) - set(before):
        root.removeHandler(handler)
        handler.close()


def test_get_logger_lives_under_the_package_namespace() -> None:
    assert get_logger("tasks.views").name == "assetflow.tasks.views"
    assert get_logger("assetflow.cli").name == "assetflow.cli"
    assert get_logger("assetflow").name == "assetflow"


def test_log_file_receives_child_records(tmp_path: Path, root_logger, caplog) -> None:
    log_file = tmp_path / "logs/af.log"
    configure_logging(log_file=log_file)

    with caplog.at_level(logging.INFO, logger="assetflow"):
        get_logger("tasks.styles").info("compiled %s", "style.scss")

    for handler in root_logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "assetflow.tasks.styles | INFO | compiled style.scss" in text


def test_same_log_file_is_attached_once(tmp_path: Path, root_logger) -> None:
    log_file = tmp_path / "af.log"
    configure_logging(log_file=log_file)
    configure_logging(log_file=log_file)

    files = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert [h.baseFilename for h in files].count(str(log_file.resolve())) == 1

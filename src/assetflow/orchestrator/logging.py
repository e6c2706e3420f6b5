"""Logging for the build: one console setup plus an optional log file.

Every logger lives under the `assetflow` namespace, so a file handler on
that parent collects records from tasks, pipelines and the watcher alike.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
ROOT_LOGGER = "assetflow"

_configured = False


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    level = os.getenv("ASSETFLOW_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
    _configured = True


def configure_logging(log_file: Path | None = None) -> logging.Logger:
    """Set up console logging and, when given, a rotating `log_file`.

    The file handler goes on the `assetflow` parent logger; calling this
    again with the same file is a no-op.
    """
    _ensure_base_logger()
    root = logging.getLogger(ROOT_LOGGER)
    if log_file is None:
        return root
    target = str(Path(log_file).resolve())
    if any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == target
        for h in root.handlers
    ):
        return root
    Path(target).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(target, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    _ensure_base_logger()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

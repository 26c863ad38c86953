"""Logging setup.

The terminal belongs to the UI, so log records never go to stdout/stderr.
Debug runs write to a file in the platform log directory; otherwise records
are discarded.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "feedviewer.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(debug: bool, log_path: Path | None = None) -> Path | None:
    """Configure the ``feedviewer`` logger and return the log file in use."""
    root = logging.getLogger(APP_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False

    if not debug:
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.WARNING)
        return None

    path = log_path if log_path is not None else default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return path

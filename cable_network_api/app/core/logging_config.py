"""
Logging configuration for the API process.

``setup_logging`` attaches a console handler to the root logger and,
when ``LOG_FILE`` is configured, a file handler for that path.  Each
handler is attached at most once, so repeated ``create_app`` calls
(tests build an app per case) do not duplicate log lines, while a
later call may still add a file the first call did not know about.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here, to tell them apart from handlers
# added by uvicorn or the test runner.
_HANDLER_TAG = "_cable_network_handler"


def _installed(root: logging.Logger, key: str) -> bool:
    return any(getattr(handler, _HANDLER_TAG, None) == key for handler in root.handlers)


def _install(root: logging.Logger, handler: logging.Handler, key: str) -> None:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_TAG, key)
    root.addHandler(handler)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    ``level`` is a level name such as ``"DEBUG"`` (case insensitive,
    unknown names fall back to ``INFO``).  ``logfile`` is resolved
    against the working directory; its parent directory must exist.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not _installed(root, "console"):
        _install(root, logging.StreamHandler(), "console")

    if logfile:
        log_path = str(Path(logfile).resolve())
        if not _installed(root, log_path):
            _install(root, logging.FileHandler(log_path, encoding="utf-8"), log_path)

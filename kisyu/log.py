"""Logging setup.

The terminal is in fullscreen mode while editing, so log records go to a
file under the platform's user log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    """Return the log file path, honouring the KISYU_LOG_FILE override."""
    override = os.environ.get(EditorConstants.LOG_FILE_ENV)
    if override:
        return Path(override)
    log_dir = Path(platformdirs.user_log_dir(EditorConstants.APP_NAME))
    return log_dir / EditorConstants.LOG_FILE_NAME


def configure_logging(path: Optional[Path] = None, level: Optional[str] = None) -> Optional[Path]:
    """Attach a file handler to the package logger.

    Returns the log file path, or None if the file could not be opened; an
    unusable log location never stops the editor.
    """
    level_name = (level or os.environ.get(EditorConstants.LOG_LEVEL_ENV)
                  or EditorConstants.DEFAULT_LOG_LEVEL).upper()
    package_logger = logging.getLogger(EditorConstants.APP_NAME)
    package_logger.setLevel(getattr(logging, level_name, logging.WARNING))
    package_logger.propagate = False

    for existing in package_logger.handlers:
        if isinstance(existing, logging.FileHandler):
            # Already configured; one file handler per process
            return Path(existing.baseFilename)

    log_path = path or default_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    logger.debug("Logging to %s at %s", log_path, level_name)
    return log_path

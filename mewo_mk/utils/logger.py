"""
Logger utility for mk.

Logs to:
- stderr: warnings and errors, or everything when MK_DEBUG is set
- {cache dir}/mk.log: 1MB rotation, keeps 2 backups, written only once the
  cache directory exists

The cache directory is MK_CACHE_DIR or ~/.cache/mewo_mk.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from mewo_mk.constants import LOG_FILE_NAME, EnvVar
from mewo_mk.primitives.errors import MkError
from mewo_mk.utils.path_utils import get_cache_dir

ROOT_LOGGER = "mewo_mk"


class CacheDirFileHandler(RotatingFileHandler):
    """Rotating file handler that never creates its directory.

    The cache directory is created by the first cache append. Records emitted
    before that are dropped from the file (stderr still gets them).
    """

    def emit(self, record: logging.LogRecord) -> None:
        if self.stream is None and not os.path.isdir(os.path.dirname(self.baseFilename)):
            return
        super().emit(record)

    def handleError(self, record: logging.LogRecord) -> None:
        pass  # File logging is optional


def debug_enabled() -> bool:
    return os.getenv(EnvVar.DEBUG, "").lower() in ("1", "true", "yes", "on")


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger under the mk hierarchy, configuring handlers once.

    Handlers live on the "mewo_mk" root logger so every module logger
    shares them.

    Args:
        name: Logger name (usually __name__)
        level: Optional logging level for this logger

    Returns:
        Logger instance
    """
    root = logging.getLogger(ROOT_LOGGER)

    if not root.handlers:
        _configure(root)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)

    return logger


def _configure(root: logging.Logger) -> None:
    text_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler (stderr) - minimal output unless debugging
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter("[%(name)s] %(levelname)s: %(message)s")
    )
    root.addHandler(console_handler)

    # File handler (cache dir), opened on first record once the dir exists
    try:
        file_handler = CacheDirFileHandler(
            get_cache_dir() / LOG_FILE_NAME,
            maxBytes=1024 * 1024,
            backupCount=2,
            encoding="utf-8",
            errors="backslashreplace",
            delay=True,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(text_formatter)
        root.addHandler(file_handler)
    except (OSError, MkError):
        pass  # File logging is optional

    root.setLevel(logging.DEBUG)
    root.propagate = False

"""Logging helpers for the jsontoxlsx package.

Library modules only ask for a child of the ``jsontoxlsx`` logger. Handlers
are attached by ``configure_logging``, which applications call once at start
up (the CLI does so before merging). Until then records go nowhere and no
log directory is created.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "jsontoxlsx"
LOG_DIR_ENV = "JSONTOXLSX_LOG_DIR"
DEFAULT_LOG_BASE = Path.home() / "JsonToXlsx" / "logs"
LOG_FILE = "jsontoxlsx.log"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def log_directory(log_dir: Optional[Union[str, Path]] = None) -> Path:
    """Explicit ``log_dir``, else ``$JSONTOXLSX_LOG_DIR``, else ``~/JsonToXlsx/logs``."""

    if log_dir:
        return Path(log_dir)
    env_dir = os.environ.get(LOG_DIR_ENV)
    return Path(env_dir) if env_dir else DEFAULT_LOG_BASE


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Attach a rotating file handler and a console handler to the package logger.

    Handlers from an earlier call are closed and replaced, so the latest
    level and directory win.

    Returns:
        Path of the log file.
    """

    directory = log_directory(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.NullHandler):
            continue
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8", delay=True
    )
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    package_logger.propagate = False
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Return ``jsontoxlsx.<name>``; configuration is left to ``configure_logging``."""

    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

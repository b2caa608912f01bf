from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .settings import Settings


def setup_logging(settings: Settings) -> Path:
    """Configure the `ttr` logger to write to a rotating diagnostic log file.

    Returns the resolved log file path.

    Notes:
      - Nothing goes to the console: the screen is owned by the menu and
        by the running task.
      - Safe to call multiple times (it resets handlers).
    """

    log_dir = Path(settings.TTR_LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "ttr.log"

    level_name = str(settings.TTR_LOG_LEVEL or "WARNING").upper().strip()
    level = getattr(logging, level_name, logging.WARNING)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(settings.TTR_LOG_BACKUP_COUNT or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))

    logger = logging.getLogger("ttr")
    logger.handlers = []
    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info("ttr logging enabled (file=%s, level=%s)", os.fspath(log_file), level_name)
    return log_file

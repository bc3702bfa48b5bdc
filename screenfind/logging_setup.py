from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from screenfind.config import log_dir_from_env

LOG_FILE_NAME = "screenfind.log"
EVENTS_LOG_FILE_NAME = "screenfind_events.log"
EVENTS_LOGGER = "screenfind.events"


def _safe_mkdir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False


def _rotating_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=1_000_000,
        backupCount=2,
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO, console: bool = False) -> None:
    """Configure rotating file logging for screenfind and its JSON event log."""
    package_logger = logging.getLogger("screenfind")
    if package_logger.handlers:
        return  # already configured

    log_dir = Path(log_dir) if log_dir is not None else log_dir_from_env()
    handlers = []

    if _safe_mkdir(log_dir):
        file_handler = _rotating_handler(log_dir / LOG_FILE_NAME)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    if console or not handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handlers.append(stream_handler)

    package_logger.setLevel(level)
    for handler in handlers:
        package_logger.addHandler(handler)

    # Structured events go to their own file only.
    event_logger = logging.getLogger(EVENTS_LOGGER)
    event_logger.setLevel(logging.INFO)
    event_logger.propagate = False
    if log_dir.is_dir():
        event_handler = _rotating_handler(log_dir / EVENTS_LOG_FILE_NAME)
        event_handler.setLevel(logging.INFO)
        event_logger.addHandler(event_handler)

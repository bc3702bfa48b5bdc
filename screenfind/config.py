"""Environment-derived settings for callers of the locator (the search core never reads them)."""

from __future__ import annotations

import os
from pathlib import Path

from screenfind.contracts.events import DebugConfig

SAVE_STEPS_ENV = "SCREENFIND_SAVE_STEPS"
SAVE_STEPS_VERBOSE_ENV = "SCREENFIND_SAVE_STEPS_VERBOSE"
SAVE_STEPS_DIRECTORY_ENV = "SCREENFIND_SAVE_STEPS_DIRECTORY"
LOG_DIR_ENV = "SCREENFIND_LOG_DIR"

DEFAULT_DEBUG_DIR = Path("debug_frames")
DEFAULT_LOG_DIR = Path("logs")


def _flag_from_env(var: str, default: bool) -> bool:
    value = os.getenv(var)
    if value is None:
        return default
    return str(value).strip().lower() not in {"0", "false", "off", "no", "none"}


def debug_config_from_env() -> DebugConfig:
    """Build the debug-frame configuration from SCREENFIND_SAVE_STEPS* variables."""
    directory = os.getenv(SAVE_STEPS_DIRECTORY_ENV) or str(DEFAULT_DEBUG_DIR)
    return DebugConfig(
        enabled=_flag_from_env(SAVE_STEPS_ENV, False),
        directory=Path(directory),
        verbose=_flag_from_env(SAVE_STEPS_VERBOSE_ENV, False),
    )


def log_dir_from_env() -> Path:
    return Path(os.getenv(LOG_DIR_ENV) or DEFAULT_LOG_DIR)

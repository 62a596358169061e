from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from candwin.config import env_flag
from candwin.version import dev_mode_enabled

ROOT_LOGGER_NAME = "CandWin"
LOG_FILENAME = "candwin.log"
LOG_DIR_ENV_VAR = "CANDWIN_LOG_DIR"
PROPAGATE_ENV_VAR = "CANDWIN_PROPAGATE_LOGS"
LOG_MAX_BYTES = 512 * 1024
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_logs_dir(log_dir_name: str = "candwin") -> Path:
    """
    Resolve the directory to store window logs.

    Strategy:
    - Use CANDWIN_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())
    else:
        state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
        cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
        candidates.append(state_home / log_dir_name)
        candidates.append(cache_home / log_dir_name)
        candidates.append(Path.cwd() / "logs" / log_dir_name)

    for target in candidates:
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def open_log_file(log_dir: Path, *, retention: int = 5) -> RotatingFileHandler:
    """Rotating handler for candwin.log keeping ``retention`` files in total."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=max(1, retention) - 1,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(
    *,
    retention: int = 5,
    log_dir: Optional[Path] = None,
    debug_enabled: Optional[bool] = None,
) -> logging.Logger:
    """Attach the rotating file handler to the ``CandWin`` logger tree.

    ``debug_enabled`` defaults to dev mode as seen when this is called.
    stdout carries index replies to the engine, so nothing logs there.
    """
    if debug_enabled is None:
        debug_enabled = dev_mode_enabled()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    logger.propagate = bool(env_flag(PROPAGATE_ENV_VAR))
    for existing in list(logger.handlers):
        if getattr(existing, "_candwin_handler", False):
            logger.removeHandler(existing)
            existing.close()

    handler = open_log_file(log_dir or resolve_logs_dir(), retention=retention)
    handler._candwin_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger

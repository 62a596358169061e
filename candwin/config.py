"""Settings for the candidate table window."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from candwin.label_table import LABEL_CELLS

_LOGGER = logging.getLogger("CandWin.Config")

SETTINGS_ENV_VAR = "CANDWIN_SETTINGS_PATH"
SETTINGS_FILENAME = "candwin_settings.json"

EOF_POLICY_FATAL = "fatal"
EOF_POLICY_GRACEFUL = "graceful"
EOF_POLICIES = (EOF_POLICY_FATAL, EOF_POLICY_GRACEFUL)

LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20


@dataclass(frozen=True)
class CandWinSettings:
    """Values read once at startup."""

    label_layout: Optional[Tuple[Optional[str], ...]] = None
    eof_policy: str = EOF_POLICY_FATAL
    log_retention: int = 5


def resolve_settings_path(arg_path: Optional[str] = None) -> Path:
    if arg_path:
        return Path(arg_path).expanduser().resolve()
    env_override = os.getenv(SETTINGS_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_home / "candwin" / SETTINGS_FILENAME


def env_flag(name: str) -> Optional[bool]:
    """Read an on/off environment switch; None when unset or unrecognised."""
    raw = os.getenv(name)
    if raw is None:
        return None
    token = raw.strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return None


def coerce_eof_policy(value: Any, fallback: str = EOF_POLICY_FATAL) -> str:
    if isinstance(value, str):
        token = value.strip().lower()
        if token in EOF_POLICIES:
            return token
    return fallback


def _coerce_layout(value: Any) -> Optional[Tuple[Optional[str], ...]]:
    if not isinstance(value, (list, tuple)) or not value:
        return None
    if len(value) > LABEL_CELLS:
        _LOGGER.warning("label_layout has %d entries; only the first %d are used", len(value), LABEL_CELLS)
    return tuple(item if isinstance(item, str) else None for item in value[:LABEL_CELLS])


def _coerce_retention(value: Any, fallback: int) -> int:
    if value is None:
        return fallback
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(LOG_RETENTION_MIN, min(LOG_RETENTION_MAX, numeric))


def load_settings(settings_path: Path) -> CandWinSettings:
    """Read settings JSON; a missing or malformed file yields defaults."""
    defaults = CandWinSettings()
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Failed to parse %s; using defaults (%s)", settings_path, exc)
        return defaults
    if not isinstance(data, dict):
        _LOGGER.warning("Settings at %s are not a JSON object; using defaults", settings_path)
        return defaults

    return CandWinSettings(
        label_layout=_coerce_layout(data.get("label_layout")),
        eof_policy=coerce_eof_policy(data.get("eof_policy"), defaults.eof_policy),
        log_retention=_coerce_retention(data.get("log_retention"), defaults.log_retention),
    )

"""Version identifier for the candidate table window."""
from __future__ import annotations

import re
from typing import Optional

from candwin.config import env_flag

__all__ = ["__version__", "DEV_MODE_ENV_VAR", "dev_mode_enabled"]

__version__ = "0.3.0"
DEV_MODE_ENV_VAR = "CANDWIN_DEV_MODE"

# "dev" as its own segment: 1.0-dev, 1.0.dev3, dev
_DEV_SEGMENT = re.compile(r"(?:^|[.+-])dev\d*(?:$|[.+-])")


def dev_mode_enabled(version: Optional[str] = None) -> bool:
    """CANDWIN_DEV_MODE wins when set; otherwise a dev version turns it on."""
    override = env_flag(DEV_MODE_ENV_VAR)
    if override is not None:
        return override
    identifier = (version if version is not None else __version__).strip().lower()
    return bool(_DEV_SEGMENT.search(identifier))

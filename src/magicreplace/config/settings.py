"""Where: src/magicreplace/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

import os

from magicreplace import __version__
from magicreplace.config.config import DEFAULT_API_BASE_URL, config as app_config

# Content store endpoint -------------------------------------------------------

_env_base = (os.environ.get("MAGICREPLACE_API_BASE") or "").strip()
_base = _env_base or (app_config.api_base_url or "").strip() or DEFAULT_API_BASE_URL
API_BASE_URL: str = _base.rstrip("/")

_timeout = getattr(app_config, "request_timeout", None)
REQUEST_TIMEOUT: float | None = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and not isinstance(_timeout, bool) and _timeout > 0
    else None
)


# Client identity ---------------------------------------------------------------

APP_NAME: str = "magicreplace"
APP_VERSION: str = __version__
USER_AGENT: str = f"{APP_NAME}/{APP_VERSION}"


# CLI defaults --------------------------------------------------------------------

DEFAULT_SMART_MODE: bool = bool(getattr(app_config, "smart_mode", False))


__all__ = [
    "API_BASE_URL",
    "REQUEST_TIMEOUT",
    "APP_NAME",
    "APP_VERSION",
    "USER_AGENT",
    "DEFAULT_SMART_MODE",
]

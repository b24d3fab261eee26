from __future__ import annotations

import logging
import os
from typing import Optional, Union

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "MATRACK_LOG_LEVEL"
DEBUG_ENV = "MATRACK_DEBUG"


def _coerce_level(value: Union[int, str, None], fallback: int) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper()) if text else None
    return candidate if isinstance(candidate, int) else fallback


def _env_level() -> Optional[int]:
    explicit = os.getenv(LEVEL_ENV)
    if explicit:
        return _coerce_level(explicit, logging.INFO)
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """
    Configure the root logger with a compact format.

    Environment overrides:
      - MATRACK_LOG_LEVEL: explicit log level (name or number)
      - MATRACK_DEBUG: truthy -> DEBUG
    """
    env_level = _env_level()
    effective = env_level if env_level is not None else _coerce_level(default_level, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    )
    return effective


def level_name(level: int) -> str:
    """Return logging level name for diagnostics."""
    return logging.getLevelName(level)

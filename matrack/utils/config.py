"""Runtime settings for the web client.

Settings come from environment variables so the same build can target a
local API or the hosted one. CLI flags in ``matrack.web_ui.main`` override
the listen address only.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "https://military-asset-backend-cxyg.onrender.com/api"


def _as_int(value: Optional[str], default: int) -> int:
    """Convert env text to int with deterministic fallback."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return int(default)


@dataclass(frozen=True)
class ClientSettings:
    """Typed runtime settings for transport and the NiceGUI server."""

    api_base_url: str = DEFAULT_API_URL
    request_timeout_s: int = 15
    host: str = "127.0.0.1"
    port: int = 8080
    storage_secret: str = "matrack-web-secret"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        base_url = (env.get("MATRACK_API_URL") or "").strip() or defaults.api_base_url
        return cls(
            api_base_url=base_url.rstrip("/"),
            request_timeout_s=_as_int(env.get("MATRACK_REQUEST_TIMEOUT_S"), defaults.request_timeout_s),
            host=(env.get("MATRACK_WEB_HOST") or "").strip() or defaults.host,
            port=_as_int(env.get("MATRACK_WEB_PORT"), defaults.port),
            storage_secret=env.get("MATRACK_WEB_STORAGE_SECRET") or defaults.storage_secret,
        )


__all__ = ["ClientSettings", "DEFAULT_API_URL"]

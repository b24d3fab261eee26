from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from matrack.adapters.api_errors import ApiClientError, TransportError
from matrack.domain.envelopes import normalize_object
from matrack.domain.ports import AssetApiPort, CredentialPort, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login failed. Please check your credentials."


@dataclass
class Login:
    """Exchange email/password for a bearer token and keep it for the session."""

    api: AssetApiPort
    credentials: CredentialPort

    async def __call__(self, email: str, password: str) -> Dict[str, Any]:
        email = (email or "").strip()
        if not email or not password:
            raise UseCaseError("LOGIN_INVALID", "Email and password are required.")
        try:
            raw = await self.api.login(email, password)
        except ApiClientError as exc:
            if exc.status in (400, 401, 403):
                raise UseCaseError("LOGIN_FAILED", LOGIN_FAILED_MESSAGE) from exc
            raise map_api_error(exc, default_code="LOGIN_FAILED") from exc
        except TransportError as exc:
            raise map_api_error(exc, default_code="LOGIN_FAILED") from exc

        body = normalize_object(raw, key="data", marker_keys=("token",))
        token = body.get("token")
        if not isinstance(token, str) or not token.strip():
            raise UseCaseError("LOGIN_FAILED", LOGIN_FAILED_MESSAGE)
        self.credentials.store(token)
        user = body.get("user")
        LOGGER.info("Logged in as %s", email)
        return dict(user) if isinstance(user, dict) else {}


@dataclass
class Logout:
    credentials: CredentialPort

    def __call__(self) -> None:
        self.credentials.clear()


__all__ = ["LOGIN_FAILED_MESSAGE", "Login", "Logout"]

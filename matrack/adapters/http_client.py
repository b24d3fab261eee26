"""Shared HTTP transport for the asset API.

This module provides a thin wrapper around ``httpx.AsyncClient`` so the API
adapter can share timeout policy, bearer-token injection, and status-code
mapping.

Dependencies:
    - ``httpx`` for asynchronous network I/O.
    - ``matrack.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed once per process by ``matrack.web_ui.runtime`` and bound to
      each browser session's credentials with ``ApiSession.bind``.
    - Used only by ``matrack.adapters.asset_api.AssetApiAdapter``; use cases
      interact through ``AssetApiPort``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from matrack.adapters.api_errors import (
    ApiClientError,
    ApiServerError,
    ApiTimeoutError,
    TransportError,
    describe_failure,
    parse_error_payload,
)
from matrack.domain.ports import CredentialPort

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Endpoint and timeout configuration for API calls.

    Attributes:
        base_url: API root, e.g. ``https://host/api``. Paths are appended.
        request_timeout_s: Timeout in seconds for every request.
    """
    base_url: str
    request_timeout_s: float = 15


class ApiSession:
    """Single-attempt JSON client with optional bearer credentials.

    Every call is exactly one HTTP round trip. Callers receive decoded JSON
    on 2xx and a ``TransportError`` subclass otherwise.
    """

    def __init__(
        self,
        cfg: HttpConfig,
        credentials: Optional[CredentialPort] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Create the session.

        Args:
            cfg: Base URL and timeout settings.
            credentials: Source of the bearer token, read on every request.
            transport: Optional transport override (``httpx.MockTransport``
                in tests).
        """
        self.cfg = cfg
        self.credentials = credentials
        self.client = httpx.AsyncClient(
            base_url=cfg.base_url,
            timeout=cfg.request_timeout_s,
            transport=transport,
        )

    def _headers(self, *, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        token = self.credentials.token() if self.credentials is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def get(self, path: str, *, params: Optional[Dict[str, str]] = None) -> Any:
        """Send a GET request and return the decoded JSON body.

        Raises:
            ApiTimeoutError: On timeout or connection failure.
            ApiClientError: On HTTP 4xx.
            ApiServerError: On HTTP 5xx.
        """
        ctx = f"GET {path}"
        try:
            resp = await self.client.get(path, params=params or None, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise ApiTimeoutError(f"Timeout contacting {path}", context=ctx) from exc
        except httpx.TransportError as exc:
            raise ApiTimeoutError(f"Cannot reach {path}: {exc}", context=ctx) from exc
        self._ensure_ok(resp, ctx)
        return self._json_any(resp, ctx)

    async def post(self, path: str, *, json_body: Optional[Dict[str, Any]] = None) -> Any:
        """Send a JSON POST request and return the decoded JSON body."""
        ctx = f"POST {path}"
        try:
            resp = await self.client.post(
                path,
                json=json_body,
                headers=self._headers(json_body=json_body is not None),
            )
        except httpx.TimeoutException as exc:
            raise ApiTimeoutError(f"Timeout contacting {path}", context=ctx) from exc
        except httpx.TransportError as exc:
            raise ApiTimeoutError(f"Cannot reach {path}: {exc}", context=ctx) from exc
        self._ensure_ok(resp, ctx)
        return self._json_any(resp, ctx)

    def bind(self, credentials: Optional[CredentialPort]) -> "ApiSession":
        """Return a view of this session that reads tokens from ``credentials``.

        The view shares the underlying ``httpx.AsyncClient`` and its pool.
        """
        bound = copy.copy(self)
        bound.credentials = credentials
        return bound

    async def aclose(self) -> None:
        await self.client.aclose()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _ensure_ok(resp: httpx.Response, ctx: str) -> None:
        if resp.is_success:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = describe_failure(ctx, status, payload)
        LOGGER.debug("%s failed with HTTP %s", ctx, status)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, payload=payload, context=ctx)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise TransportError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def _json_any(resp: httpx.Response, ctx: str) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            snippet = resp.text[:400]
            raise TransportError(
                f"{ctx}: invalid JSON response: {snippet}",
                status=resp.status_code,
                context=ctx,
            ) from exc


__all__ = ["ApiSession", "HttpConfig"]

"""Typed transport failures raised by the HTTP layer.

Every failure to obtain a successful JSON response from the asset API is a
``TransportError``. Use cases catch it at their boundary and translate it
with ``matrack.usecases.error_mapping.map_api_error``.

The asset API reports failures as ``{"message": "..."}``; proxies in front
of it may answer with a plain text page instead.
"""

from __future__ import annotations

from typing import Any, Optional

FALLBACK_DETAIL = "An error occurred while fetching data."
_TEXT_SNIPPET = 400


class TransportError(RuntimeError):
    """Base class for network or HTTP failures talking to the asset API."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context

    @property
    def server_message(self) -> Optional[str]:
        """Message reported by the server in the error body, if any."""
        return error_message(self.payload)


class ApiClientError(TransportError):
    """HTTP 4xx from the asset API."""


class ApiServerError(TransportError):
    """HTTP 5xx from the asset API."""


class ApiTimeoutError(TransportError):
    """Timeout or connectivity failure before any HTTP status was received."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Return the decoded error body, or a text snippet when it is not JSON."""
    try:
        return resp.json()
    except ValueError:
        text = getattr(resp, "text", "") or ""
        return text[:_TEXT_SNIPPET] or None


def error_message(payload: Any) -> Optional[str]:
    """Read ``message`` from an error body; plain text bodies are the message."""
    if isinstance(payload, dict):
        payload = payload.get("message")
    if isinstance(payload, str):
        return payload.strip() or None
    return None


def describe_failure(ctx: str, status: int, payload: Any) -> str:
    detail = error_message(payload) or FALLBACK_DETAIL
    return f"{ctx}: {detail} (HTTP {status})"


__all__ = [
    "ApiClientError",
    "ApiServerError",
    "ApiTimeoutError",
    "TransportError",
    "describe_failure",
    "error_message",
    "parse_error_payload",
]

"""Translate transport errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from matrack.adapters.api_errors import (
    ApiClientError,
    ApiServerError,
    ApiTimeoutError,
    TransportError,
)
from matrack.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
    forbidden_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by the adapter or an earlier use-case step.
        default_code: Code used for failures that are not transport errors.
        default_message: Message used for such failures, when given.
        forbidden_message: Endpoint-specific text for HTTP 403.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        detail = exc.server_message
        if status == 401:
            return UseCaseError("AUTH_FAILED", "Not logged in or session expired.")
        if status == 403:
            message = forbidden_message or _compose_error_message("Access denied", detail)
            return UseCaseError("ACCESS_DENIED", message)
        if status in (400, 422):
            return UseCaseError("INVALID_PARAMS", _compose_error_message("Invalid request", detail))
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, detail))
    if isinstance(exc, ApiServerError):
        return UseCaseError(
            "SERVER_ERROR", _compose_error_message("Server error, try again", exc.server_message)
        )
    if isinstance(exc, TransportError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, detail: Optional[str]) -> str:
    text = (detail or "").strip()
    if text:
        return f"{base}: {text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]

"""Domain-level error types raised before any network call.

``ValidationError`` blocks a user action with a specific reason;
``ShapeError`` marks an API envelope the client does not recognize and is
absorbed by the normalizers in ``matrack.domain.envelopes``.
"""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Local, pre-network rejection of filter or form state."""

    def __init__(self, reason: str, *, field: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field


class ShapeError(ValueError):
    """Response envelope did not match any known shape."""


__all__ = ["ShapeError", "ValidationError"]

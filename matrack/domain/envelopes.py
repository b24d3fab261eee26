"""Normalize the heterogeneous response envelopes of the asset API.

Endpoints answer either with the payload nested under a named key
(``data``, ``purchases``, ``transfers``, ``logs``), a bare list, or a bare
object. ``classify`` names the shape once; the ``unwrap_*`` helpers accept
or reject it per resource type, and the ``normalize_*`` wrappers turn a
rejected shape into an empty result.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

from .errors import ShapeError

LOGGER = logging.getLogger(__name__)


class EnvelopeShape(Enum):
    NESTED = "nested"
    BARE_LIST = "bare_list"
    BARE_OBJECT = "bare_object"
    UNRECOGNIZED = "unrecognized"


def classify(payload: Any, keys: Sequence[str]) -> Tuple[EnvelopeShape, Any]:
    """Return the envelope shape and the value it wraps.

    ``keys`` are checked in order; the first one present with a non-null
    value makes the envelope ``NESTED``.
    """
    if isinstance(payload, list):
        return EnvelopeShape.BARE_LIST, payload
    if isinstance(payload, dict):
        for key in keys:
            if payload.get(key) is not None:
                return EnvelopeShape.NESTED, payload[key]
        return EnvelopeShape.BARE_OBJECT, payload
    return EnvelopeShape.UNRECOGNIZED, payload


def unwrap_list(payload: Any, key: str) -> List[Dict[str, Any]]:
    """Extract a list of row objects from a list-style envelope.

    Raises:
        ShapeError: If the envelope does not carry a list.
    """
    shape, inner = classify(payload, (key, "data"))
    if shape in (EnvelopeShape.NESTED, EnvelopeShape.BARE_LIST) and isinstance(inner, list):
        return [row for row in inner if isinstance(row, dict)]
    raise ShapeError(f"{key}: expected a list envelope, got {shape.value}")


def unwrap_object(
    payload: Any, *, key: str = "data", marker_keys: Sequence[str] = ()
) -> Dict[str, Any]:
    """Extract an object from an object-style envelope.

    A bare object is accepted when ``marker_keys`` is empty or at least one
    marker is present in it.

    Raises:
        ShapeError: If the envelope does not carry an object.
    """
    shape, inner = classify(payload, (key,))
    if shape is EnvelopeShape.NESTED and isinstance(inner, dict):
        return inner
    if shape is EnvelopeShape.BARE_OBJECT:
        if not marker_keys or any(marker in inner for marker in marker_keys):
            return inner
    raise ShapeError(f"{key}: expected an object envelope, got {shape.value}")


def normalize_list(payload: Any, key: str) -> List[Dict[str, Any]]:
    try:
        return unwrap_list(payload, key)
    except ShapeError as exc:
        LOGGER.debug("Treating response as empty: %s", exc)
        return []


def normalize_object(
    payload: Any, *, key: str = "data", marker_keys: Sequence[str] = ()
) -> Dict[str, Any]:
    try:
        return unwrap_object(payload, key=key, marker_keys=marker_keys)
    except ShapeError as exc:
        LOGGER.debug("Treating response as empty: %s", exc)
        return {}


__all__ = [
    "EnvelopeShape",
    "classify",
    "normalize_list",
    "normalize_object",
    "unwrap_list",
    "unwrap_object",
]

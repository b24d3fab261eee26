"""Display helpers shared by the table projections."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from matrack.domain.entities import AssetRef, BaseRef


def asset_label(asset: Optional[AssetRef]) -> str:
    return (asset.name if asset else "") or "Unknown Asset"


def equipment_label(asset: Optional[AssetRef]) -> str:
    return (asset.equipment_type if asset else "") or "Unknown"


def base_label(base: Optional[BaseRef]) -> str:
    return (base.name if base else "") or "Unknown Base"


def _parse_iso(text: str) -> Optional[datetime]:
    cleaned = (text or "").strip()
    if not cleaned:
        return None
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None


def format_date(text: str) -> str:
    parsed = _parse_iso(text)
    return parsed.date().isoformat() if parsed else (text or "-")


def format_timestamp(text: str) -> str:
    parsed = _parse_iso(text)
    return parsed.strftime("%Y-%m-%d %H:%M:%S") if parsed else (text or "-")

"""Editable filter and form state for the asset pages.

All values are kept as the strings the widgets produce. ``UNSCOPED`` marks a
filter that must not constrain the query; ``DEFAULT_BASE`` marks a purchase
that should be booked against the caller's own base.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple

from .errors import ValidationError

UNSCOPED = "all"
DEFAULT_BASE = "default"
DATE_RANGE_SEPARATOR = "="

DEFAULT_WINDOW_START = "2025-06-01"
DEFAULT_WINDOW_END = "2025-06-30"


def today_iso() -> str:
    return date.today().isoformat()


def encode_date_range(start: str, end: str) -> str:
    return f"{start}{DATE_RANGE_SEPARATOR}{end}"


def split_date_range(text: str) -> Tuple[str, str]:
    """Split ``start=end`` into its two bounds.

    Raises:
        ValidationError: If either bound is missing.
    """
    start, sep, end = str(text or "").partition(DATE_RANGE_SEPARATOR)
    start, end = start.strip(), end.strip()
    if not sep or not start or not end:
        raise ValidationError("date range must be start=end", field="date_range")
    return start, end


def monthly_date_ranges(year: int) -> List[Tuple[str, str]]:
    """Return ``(label, encoded_range)`` pairs for each month of ``year``."""
    options: List[Tuple[str, str]] = []
    for month in range(1, 13):
        last_day = calendar.monthrange(year, month)[1]
        start = date(year, month, 1).isoformat()
        end = date(year, month, last_day).isoformat()
        label = f"{calendar.month_name[month]} {year}"
        options.append((label, encode_date_range(start, end)))
    return options


# ---------------------------------------------------------------------------
# Filter state
# ---------------------------------------------------------------------------
@dataclass
class DashboardFilters:
    """Dashboard scope: a base and a date window are mandatory for the API."""

    base: str = "1"
    equipment_type: str = UNSCOPED
    date_range: str = encode_date_range(DEFAULT_WINDOW_START, DEFAULT_WINDOW_END)


@dataclass
class PurchaseFilters:
    base_id: str = "1"
    equipment_type: str = UNSCOPED
    start_date: str = DEFAULT_WINDOW_START
    end_date: str = DEFAULT_WINDOW_END


@dataclass
class TransferFilters:
    from_base_id: str = UNSCOPED
    to_base_id: str = UNSCOPED
    asset_id: str = UNSCOPED
    equipment_type: str = UNSCOPED
    start_date: str = DEFAULT_WINDOW_START
    end_date: str = DEFAULT_WINDOW_END


# ---------------------------------------------------------------------------
# Form state
# ---------------------------------------------------------------------------
@dataclass
class PurchaseForm:
    asset_id: str = ""
    base_id: str = DEFAULT_BASE
    quantity: str = ""
    date: str = field(default_factory=today_iso)


@dataclass
class TransferForm:
    asset_id: str = ""
    from_base_id: str = ""
    to_base_id: str = ""
    quantity: str = ""
    date: str = field(default_factory=today_iso)


__all__ = [
    "DEFAULT_BASE",
    "DashboardFilters",
    "PurchaseFilters",
    "PurchaseForm",
    "TransferFilters",
    "TransferForm",
    "UNSCOPED",
    "encode_date_range",
    "monthly_date_ranges",
    "split_date_range",
    "today_iso",
]

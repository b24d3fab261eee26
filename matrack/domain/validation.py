"""Pure gates deciding whether a fetch or a submission may run.

Every check is recomputed from the state it is given; nothing is cached
between calls. Each denial carries one user-visible reason, and different
violations never share a reason string.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .entities import MetadataCatalog
from .errors import ValidationError
from .filters import (
    DEFAULT_BASE,
    DashboardFilters,
    PurchaseFilters,
    PurchaseForm,
    TransferFilters,
    TransferForm,
    split_date_range,
)
from .params import coerce_int, coerce_quantity, is_unscoped

REASON_BASE_REQUIRED = "base required"
REASON_DATE_RANGE_REQUIRED = "date range required"
REASON_DATE_ORDER = "start date must not be after end date"
REASON_ASSET_REQUIRED = "asset required"
REASON_SOURCE_REQUIRED = "source base required"
REASON_DESTINATION_REQUIRED = "destination base required"
REASON_QUANTITY_REQUIRED = "quantity required"
REASON_DATE_REQUIRED = "date required"
REASON_DATE_FORMAT = "date must be YYYY-MM-DD"
REASON_SAME_ENDPOINTS = "source and destination must differ"
REASON_UNKNOWN_ASSET = "unknown asset"
REASON_UNKNOWN_BASE = "unknown base"


@dataclass(frozen=True)
class GateDecision:
    """Allow/deny outcome of a gate plus the reason shown to the user."""

    allowed: bool
    reason: str = ""
    field: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = GateDecision(True)


def _deny(reason: str, field: Optional[str] = None) -> GateDecision:
    return GateDecision(False, reason, field)


def _blank(value: Optional[str]) -> bool:
    return not str(value or "").strip()


def _parse_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(str(text).strip())
    except ValueError:
        return None


def _check_window(start: Optional[str], end: Optional[str]) -> GateDecision:
    """Deny a window whose bounds are both set and out of order."""
    if is_unscoped(start) or is_unscoped(end):
        return ALLOW
    start_day, end_day = _parse_date(start), _parse_date(end)
    if start_day is None or end_day is None:
        return _deny(REASON_DATE_FORMAT, "date_range")
    if start_day > end_day:
        return _deny(REASON_DATE_ORDER, "date_range")
    return ALLOW


# ---------------------------------------------------------------------------
# Read gates
# ---------------------------------------------------------------------------
def check_dashboard_filters(filters: DashboardFilters) -> GateDecision:
    """The dashboard query contract requires a base and a date window."""
    if is_unscoped(filters.base):
        return _deny(REASON_BASE_REQUIRED, "base")
    if is_unscoped(filters.date_range):
        return _deny(REASON_DATE_RANGE_REQUIRED, "date_range")
    try:
        start, end = split_date_range(filters.date_range)
    except ValidationError as exc:
        return _deny(exc.reason, exc.field)
    return _check_window(start, end)


def check_purchase_filters(filters: PurchaseFilters) -> GateDecision:
    return _check_window(filters.start_date, filters.end_date)


def check_transfer_filters(filters: TransferFilters) -> GateDecision:
    return _check_window(filters.start_date, filters.end_date)


# ---------------------------------------------------------------------------
# Write gates
# ---------------------------------------------------------------------------
def _check_quantity_and_date(quantity: str, when: str) -> GateDecision:
    try:
        coerce_quantity(quantity)
    except ValidationError as exc:
        return _deny(exc.reason, exc.field)
    if _parse_date(when) is None:
        return _deny(REASON_DATE_FORMAT, "date")
    return ALLOW


def _check_known(
    catalog: Optional[MetadataCatalog], *, asset_id: int, base_ids: tuple
) -> GateDecision:
    # An empty catalog means metadata failed to load; the server decides then.
    if catalog is None:
        return ALLOW
    if catalog.assets and not catalog.has_asset(asset_id):
        return _deny(REASON_UNKNOWN_ASSET, "asset_id")
    if catalog.bases:
        for field_name, base_id in base_ids:
            if not catalog.has_base(base_id):
                return _deny(REASON_UNKNOWN_BASE, field_name)
    return ALLOW


def check_purchase_form(
    form: PurchaseForm, catalog: Optional[MetadataCatalog] = None
) -> GateDecision:
    if _blank(form.asset_id):
        return _deny(REASON_ASSET_REQUIRED, "asset_id")
    if _blank(form.quantity):
        return _deny(REASON_QUANTITY_REQUIRED, "quantity")
    if _blank(form.date):
        return _deny(REASON_DATE_REQUIRED, "date")
    decision = _check_quantity_and_date(form.quantity, form.date)
    if not decision:
        return decision
    try:
        asset_id = coerce_int(form.asset_id, field="asset_id", reason="invalid asset")
        base_ids: tuple = ()
        if not _blank(form.base_id) and form.base_id.strip() != DEFAULT_BASE:
            base_ids = (
                ("base_id", coerce_int(form.base_id, field="base_id", reason="invalid base")),
            )
    except ValidationError as exc:
        return _deny(exc.reason, exc.field)
    return _check_known(catalog, asset_id=asset_id, base_ids=base_ids)


def check_transfer_form(
    form: TransferForm, catalog: Optional[MetadataCatalog] = None
) -> GateDecision:
    if _blank(form.asset_id):
        return _deny(REASON_ASSET_REQUIRED, "asset_id")
    if _blank(form.from_base_id):
        return _deny(REASON_SOURCE_REQUIRED, "from_base_id")
    if _blank(form.to_base_id):
        return _deny(REASON_DESTINATION_REQUIRED, "to_base_id")
    if _blank(form.quantity):
        return _deny(REASON_QUANTITY_REQUIRED, "quantity")
    if _blank(form.date):
        return _deny(REASON_DATE_REQUIRED, "date")
    try:
        asset_id = coerce_int(form.asset_id, field="asset_id", reason="invalid asset")
        from_base = coerce_int(
            form.from_base_id, field="from_base_id", reason="invalid source base"
        )
        to_base = coerce_int(
            form.to_base_id, field="to_base_id", reason="invalid destination base"
        )
    except ValidationError as exc:
        return _deny(exc.reason, exc.field)
    if from_base == to_base:
        return _deny(REASON_SAME_ENDPOINTS, "to_base_id")
    decision = _check_quantity_and_date(form.quantity, form.date)
    if not decision:
        return decision
    return _check_known(
        catalog,
        asset_id=asset_id,
        base_ids=(("from_base_id", from_base), ("to_base_id", to_base)),
    )


__all__ = [
    "ALLOW",
    "GateDecision",
    "check_dashboard_filters",
    "check_purchase_filters",
    "check_purchase_form",
    "check_transfer_filters",
    "check_transfer_form",
]

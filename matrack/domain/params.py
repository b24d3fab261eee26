"""Turn filter/form state into API query parameters and mutation payloads.

Read path: a parameter is emitted only for a filter that actually constrains
the query. Unscoped, empty, or missing values are left out entirely.

Write path: identifiers and quantities are coerced to ``int``; the date is
passed through. Any coercion failure raises ``ValidationError`` before a
payload object exists, so callers never see a partial payload.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from .errors import ValidationError
from .filters import (
    DEFAULT_BASE,
    UNSCOPED,
    DashboardFilters,
    PurchaseFilters,
    PurchaseForm,
    TransferFilters,
    TransferForm,
    split_date_range,
)
from .ports import Payload, QueryParams

_INTEGER = re.compile(r"[+-]?[0-9]+")


def is_unscoped(value: Optional[str]) -> bool:
    if value is None:
        return True
    text = str(value).strip()
    return not text or text == UNSCOPED


def _put_scoped(query: QueryParams, key: str, value: Optional[str]) -> None:
    if not is_unscoped(value):
        query[key] = str(value).strip()


def build_dashboard_query(filters: DashboardFilters) -> QueryParams:
    query: QueryParams = {}
    _put_scoped(query, "baseId", filters.base)
    _put_scoped(query, "equipmentType", filters.equipment_type)
    if not is_unscoped(filters.date_range):
        start, end = split_date_range(filters.date_range)
        query["startDate"] = start
        query["endDate"] = end
    return query


def build_purchase_query(filters: PurchaseFilters) -> QueryParams:
    query: QueryParams = {}
    _put_scoped(query, "baseId", filters.base_id)
    _put_scoped(query, "equipmentType", filters.equipment_type)
    _put_scoped(query, "startDate", filters.start_date)
    _put_scoped(query, "endDate", filters.end_date)
    return query


def build_transfer_query(filters: TransferFilters) -> QueryParams:
    query: QueryParams = {}
    _put_scoped(query, "fromBaseId", filters.from_base_id)
    _put_scoped(query, "toBaseId", filters.to_base_id)
    _put_scoped(query, "assetId", filters.asset_id)
    _put_scoped(query, "equipmentType", filters.equipment_type)
    _put_scoped(query, "startDate", filters.start_date)
    _put_scoped(query, "endDate", filters.end_date)
    return query


# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------
def coerce_int(value: Any, *, field: str, reason: str) -> int:
    """Parse a whole number from widget text or raise ``ValidationError``."""
    text = "" if value is None else str(value).strip()
    if not _INTEGER.fullmatch(text):
        raise ValidationError(reason, field=field)
    return int(text)


def coerce_quantity(value: Any) -> int:
    quantity = coerce_int(
        value, field="quantity", reason="quantity must be a positive integer"
    )
    if quantity <= 0:
        raise ValidationError("quantity must be a positive integer", field="quantity")
    return quantity


def build_purchase_payload(form: PurchaseForm) -> Payload:
    asset_id = coerce_int(form.asset_id, field="asset_id", reason="invalid asset")
    base_text = str(form.base_id or "").strip()
    base_id: Optional[int] = None
    if base_text and base_text != DEFAULT_BASE:
        base_id = coerce_int(base_text, field="base_id", reason="invalid base")
    quantity = coerce_quantity(form.quantity)

    payload: Dict[str, Any] = {"assetId": asset_id}
    if base_id is not None:
        payload["baseId"] = base_id
    payload["quantity"] = quantity
    payload["date"] = form.date
    return payload


def build_transfer_payload(form: TransferForm) -> Payload:
    asset_id = coerce_int(form.asset_id, field="asset_id", reason="invalid asset")
    from_base_id = coerce_int(
        form.from_base_id, field="from_base_id", reason="invalid source base"
    )
    to_base_id = coerce_int(
        form.to_base_id, field="to_base_id", reason="invalid destination base"
    )
    quantity = coerce_quantity(form.quantity)
    return {
        "assetId": asset_id,
        "fromBaseId": from_base_id,
        "toBaseId": to_base_id,
        "quantity": quantity,
        "date": form.date,
    }


__all__ = [
    "build_dashboard_query",
    "build_purchase_payload",
    "build_purchase_query",
    "build_transfer_payload",
    "build_transfer_query",
    "coerce_int",
    "coerce_quantity",
    "is_unscoped",
]

from __future__ import annotations

import pytest

from matrack.domain.entities import MetadataCatalog
from matrack.domain.filters import (
    DashboardFilters,
    PurchaseFilters,
    PurchaseForm,
    TransferFilters,
    TransferForm,
)
from matrack.domain.validation import (
    check_dashboard_filters,
    check_purchase_filters,
    check_purchase_form,
    check_transfer_filters,
    check_transfer_form,
)

CATALOG = MetadataCatalog.from_payload(
    {
        "bases": [{"id": 1, "name": "Alpha"}, {"id": 2, "name": "Bravo"}],
        "assets": [{"id": 3, "name": "M4", "equipmentType": "Weapon"}],
    }
)


def _transfer(**overrides) -> TransferForm:
    values = dict(asset_id="3", from_base_id="1", to_base_id="2", quantity="5", date="2025-06-10")
    values.update(overrides)
    return TransferForm(**values)


def test_dashboard_defaults_are_allowed() -> None:
    decision = check_dashboard_filters(DashboardFilters())

    assert decision.allowed
    assert decision.reason == ""


@pytest.mark.parametrize(
    "filters, reason",
    [
        (DashboardFilters(base="all"), "base required"),
        (DashboardFilters(base=""), "base required"),
        (DashboardFilters(date_range="all"), "date range required"),
        (DashboardFilters(date_range="2025-06-30=2025-06-01"), "start date must not be after end date"),
        (DashboardFilters(date_range="June=July"), "date must be YYYY-MM-DD"),
    ],
)
def test_dashboard_gate_denies_missing_scope(filters, reason) -> None:
    decision = check_dashboard_filters(filters)

    assert not decision
    assert decision.reason == reason


def test_list_filters_allow_open_windows() -> None:
    assert check_purchase_filters(PurchaseFilters(start_date="", end_date="2025-06-30"))
    assert check_transfer_filters(TransferFilters(start_date="all", end_date="all"))


def test_list_filters_deny_inverted_window() -> None:
    decision = check_transfer_filters(TransferFilters(start_date="2025-07-01", end_date="2025-06-01"))

    assert decision.reason == "start date must not be after end date"


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"asset_id": ""}, "asset required"),
        ({"from_base_id": ""}, "source base required"),
        ({"to_base_id": " "}, "destination base required"),
        ({"quantity": ""}, "quantity required"),
        ({"date": ""}, "date required"),
        ({"quantity": "0"}, "quantity must be a positive integer"),
        ({"quantity": "1.5"}, "quantity must be a positive integer"),
        ({"to_base_id": "1"}, "source and destination must differ"),
        ({"date": "10/06/2025"}, "date must be YYYY-MM-DD"),
    ],
)
def test_transfer_gate_reasons_are_distinct(overrides, reason) -> None:
    decision = check_transfer_form(_transfer(**overrides))

    assert not decision.allowed
    assert decision.reason == reason


def test_transfer_gate_allows_complete_form() -> None:
    assert check_transfer_form(_transfer(), CATALOG).allowed


def test_transfer_gate_checks_catalog_membership() -> None:
    assert check_transfer_form(_transfer(asset_id="8"), CATALOG).reason == "unknown asset"
    decision = check_transfer_form(_transfer(to_base_id="9"), CATALOG)
    assert decision.reason == "unknown base"
    assert decision.field == "to_base_id"


def test_empty_catalog_skips_membership_checks() -> None:
    assert check_transfer_form(_transfer(asset_id="8", to_base_id="9"), MetadataCatalog()).allowed


def test_purchase_gate_accepts_default_base() -> None:
    form = PurchaseForm(asset_id="3", base_id="default", quantity="2", date="2025-06-10")

    assert check_purchase_form(form, CATALOG).allowed


@pytest.mark.parametrize(
    "form, reason",
    [
        (PurchaseForm(asset_id="", quantity="2", date="2025-06-10"), "asset required"),
        (PurchaseForm(asset_id="3", quantity="", date="2025-06-10"), "quantity required"),
        (PurchaseForm(asset_id="3", quantity="-2", date="2025-06-10"), "quantity must be a positive integer"),
        (PurchaseForm(asset_id="3", base_id="x", quantity="2", date="2025-06-10"), "invalid base"),
    ],
)
def test_purchase_gate_denials(form, reason) -> None:
    assert check_purchase_form(form).reason == reason


def test_purchase_gate_rejects_unknown_base() -> None:
    form = PurchaseForm(asset_id="3", base_id="7", quantity="2", date="2025-06-10")

    assert check_purchase_form(form, CATALOG).reason == "unknown base"


def test_gate_is_recomputed_from_current_state() -> None:
    form = _transfer(to_base_id="1")
    assert not check_transfer_form(form)

    form.to_base_id = "2"

    assert check_transfer_form(form)

from __future__ import annotations

from matrack.domain.entities import (
    DashboardSummary,
    LogEntry,
    MetadataCatalog,
    Purchase,
    Transfer,
)


def test_catalog_skips_malformed_entries() -> None:
    catalog = MetadataCatalog.from_payload(
        {
            "bases": [{"id": "1", "name": "Alpha"}, {"name": "no id"}, "junk"],
            "equipmentTypes": ["Weapon", "", None, "Vehicle"],
            "assets": {"not": "a list"},
        }
    )

    assert [base.id for base in catalog.bases] == [1]
    assert catalog.equipment_types == ("Weapon", "Vehicle")
    assert catalog.assets == ()
    assert catalog.has_base(1) and not catalog.has_base(2)
    assert catalog != MetadataCatalog()


def test_empty_catalog() -> None:
    assert MetadataCatalog.from_payload({}) == MetadataCatalog()


def test_purchase_reads_nested_references() -> None:
    purchase = Purchase.from_payload(
        {
            "id": 10,
            "assetId": 3,
            "baseId": 1,
            "quantity": "4",
            "date": "2025-06-10T00:00:00.000Z",
            "asset": {"id": 3, "name": "M4", "equipmentType": "Weapon"},
            "base": {"id": 1, "name": "Alpha"},
        }
    )

    assert purchase.quantity == 4
    assert purchase.asset.name == "M4"
    assert purchase.base.name == "Alpha"


def test_transfer_tolerates_missing_references() -> None:
    transfer = Transfer.from_payload({"id": 2, "quantity": None, "fromBase": None})

    assert transfer.quantity == 0
    assert transfer.asset is None
    assert transfer.from_base is None and transfer.to_base is None


def test_log_entry_reads_user() -> None:
    entry = LogEntry.from_payload(
        {"id": 1, "userId": 4, "action": "CREATE_PURCHASE", "user": {"username": "jdoe"}}
    )

    assert entry.username == "jdoe"
    assert entry.email == ""
    assert entry.user_id == 4


def test_dashboard_summary_defaults_missing_metrics_to_zero() -> None:
    summary = DashboardSummary.from_payload(
        {
            "openingBalance": 100,
            "closingBalance": "120",
            "netMovement": {"purchases": 30, "transferIn": 5, "transferOut": 15},
            "assigned": None,
        }
    )

    assert summary.opening_balance == 100
    assert summary.closing_balance == 120
    assert summary.assigned == 0
    assert summary.expended == 0
    assert summary.net_movement == 20

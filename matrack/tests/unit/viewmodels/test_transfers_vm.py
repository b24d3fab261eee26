from __future__ import annotations

import asyncio

from matrack.tests.unit.helpers import FakeAssetApi, NotifyRecorder, offline
from matrack.usecases.load_resources import LoadMetadata, LoadTransfers
from matrack.usecases.submit_mutation import SubmitTransfer
from matrack.viewmodels.transfers_vm import TransfersVM


def _vm(api: FakeAssetApi, notify=None) -> TransfersVM:
    return TransfersVM(
        loader=LoadTransfers(api),
        submit=SubmitTransfer(api),
        load_metadata=LoadMetadata(api),
        notify=notify,
    )


def _fill(vm: TransfersVM, **values: str) -> None:
    for name, value in values.items():
        vm.set_form_field(name, value)


def test_mount_with_unscoped_filters_sends_only_dates() -> None:
    api = FakeAssetApi()
    vm = _vm(api)

    asyncio.run(vm.mount())

    assert api.called("list_transfers") == [{"startDate": "2025-06-01", "endDate": "2025-06-30"}]


def test_equal_endpoints_rejected_before_network() -> None:
    api = FakeAssetApi()
    vm = _vm(api)

    async def scenario() -> bool:
        await vm.mount()
        _fill(vm, asset_id="3", from_base_id="1", to_base_id="1", quantity="5")
        return await vm.submit()

    assert asyncio.run(scenario()) is False
    assert vm.form_reason == "source and destination must differ"
    assert vm.form_error == "source and destination must differ"
    assert api.called("create_transfer") == []


def test_submit_posts_payload_then_refetches_with_active_filters() -> None:
    notify = NotifyRecorder()
    api = FakeAssetApi()
    vm = _vm(api, notify=notify)

    async def scenario() -> bool:
        await vm.mount()
        vm.set_filter("to_base_id", "2")
        _fill(vm, asset_id="3", from_base_id="1", to_base_id="2", quantity="5", date="2025-06-10")
        return await vm.submit()

    assert asyncio.run(scenario()) is True
    assert api.called("create_transfer") == [
        {"assetId": 3, "fromBaseId": 1, "toBaseId": 2, "quantity": 5, "date": "2025-06-10"}
    ]
    assert api.called("list_transfers")[-1] == {
        "toBaseId": "2",
        "startDate": "2025-06-01",
        "endDate": "2025-06-30",
    }
    assert (vm.form.asset_id, vm.form.from_base_id, vm.form.to_base_id, vm.form.quantity) == ("", "", "", "")
    assert ("Transfer created successfully!", "positive") in notify.messages


def test_offline_submit_keeps_form() -> None:
    notify = NotifyRecorder()
    api = FakeAssetApi(create_transfer=offline())
    vm = _vm(api, notify=notify)

    async def scenario() -> bool:
        await vm.mount()
        _fill(vm, asset_id="4", from_base_id="2", to_base_id="1", quantity="1")
        return await vm.submit()

    assert asyncio.run(scenario()) is False
    assert vm.form.asset_id == "4"
    assert notify.last() == (
        "Error creating transfer: Request timed out. Check connection.",
        "negative",
    )
    assert vm.flags.submitting is False


def test_transfer_rows_resolve_both_bases() -> None:
    api = FakeAssetApi(
        list_transfers=[
            {
                "id": 5,
                "quantity": 2,
                "date": "2025-06-03",
                "asset": {"id": 4, "name": "Humvee", "equipmentType": "Vehicle"},
                "fromBase": {"id": 1, "name": "Alpha"},
                "toBase": None,
            }
        ]
    )
    vm = _vm(api)

    asyncio.run(vm.mount())

    row = vm.rows()[0]
    assert (row.asset, row.equipment_type, row.from_base, row.to_base) == (
        "Humvee",
        "Vehicle",
        "Alpha",
        "Unknown Base",
    )


def test_inverted_window_blocks_fetch() -> None:
    notify = NotifyRecorder()
    api = FakeAssetApi()
    vm = _vm(api, notify=notify)

    async def scenario() -> bool:
        await vm.mount()
        vm.set_filter("start_date", "2025-07-01")
        return await vm.fetch()

    assert asyncio.run(scenario()) is False
    assert len(api.called("list_transfers")) == 1
    assert notify.last() == ("start date must not be after end date", "warning")

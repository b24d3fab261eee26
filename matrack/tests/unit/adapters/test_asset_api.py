from __future__ import annotations

import asyncio
import json
from typing import List

import httpx

from matrack.adapters.asset_api import AssetApiAdapter
from matrack.adapters.http_client import ApiSession, HttpConfig


class RecordingTransport:
    def __init__(self, body=None) -> None:
        self.requests: List[httpx.Request] = []
        self.body = {} if body is None else body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json=self.body)


def _adapter(recorder: RecordingTransport) -> AssetApiAdapter:
    session = ApiSession(
        HttpConfig(base_url="https://assets.example.test/api"),
        transport=httpx.MockTransport(recorder),
    )
    return AssetApiAdapter(session)


def test_filter_data_joins_kinds() -> None:
    recorder = RecordingTransport()
    adapter = _adapter(recorder)

    asyncio.run(adapter.fetch_filter_data(("bases", "equipmentTypes", "assets")))

    request = recorder.requests[0]
    assert request.url.path == "/api/filter-data"
    assert request.url.params["filters"] == "bases,equipmentTypes,assets"


def test_read_endpoints_forward_query() -> None:
    recorder = RecordingTransport()
    adapter = _adapter(recorder)

    async def scenario() -> None:
        await adapter.fetch_dashboard({"baseId": "1", "startDate": "2025-06-01"})
        await adapter.list_purchases({"equipmentType": "Weapon"})
        await adapter.list_transfers({"fromBaseId": "2"})
        await adapter.list_logs()

    asyncio.run(scenario())

    paths = [(r.method, r.url.path, dict(r.url.params)) for r in recorder.requests]
    assert paths == [
        ("GET", "/api/dashboard", {"baseId": "1", "startDate": "2025-06-01"}),
        ("GET", "/api/purchases", {"equipmentType": "Weapon"}),
        ("GET", "/api/transfers", {"fromBaseId": "2"}),
        ("GET", "/api/logs", {}),
    ]


def test_write_endpoints_post_payloads() -> None:
    recorder = RecordingTransport(body={"id": 1})
    adapter = _adapter(recorder)

    async def scenario() -> None:
        await adapter.create_purchase({"assetId": 3, "quantity": 2, "date": "2025-06-10"})
        await adapter.create_transfer({"assetId": 3, "fromBaseId": 1, "toBaseId": 2})
        await adapter.login("a@b.c", "pw")

    asyncio.run(scenario())

    sent = [(r.url.path, json.loads(r.content)) for r in recorder.requests]
    assert sent == [
        ("/api/purchases", {"assetId": 3, "quantity": 2, "date": "2025-06-10"}),
        ("/api/transfers", {"assetId": 3, "fromBaseId": 1, "toBaseId": 2}),
        ("/api/auth/login", {"email": "a@b.c", "password": "pw"}),
    ]
    assert all(r.method == "POST" for r in recorder.requests)

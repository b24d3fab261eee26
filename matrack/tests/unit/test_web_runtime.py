from __future__ import annotations

import asyncio
from typing import List

import httpx

from matrack.utils.config import ClientSettings
from matrack.web_ui.runtime import WebRuntime


def _runtime(requests: List[httpx.Request]) -> WebRuntime:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/auth/login"):
            return httpx.Response(200, json={"token": "tok-1", "user": {"username": "admin"}})
        if request.url.path.endswith("/filter-data"):
            return httpx.Response(200, json={"data": {"bases": [{"id": 1, "name": "Alpha"}]}})
        return httpx.Response(200, json={"data": {"openingBalance": 1}})

    settings = ClientSettings(api_base_url="https://assets.example.test/api")
    return WebRuntime(settings, transport=httpx.MockTransport(handler))


def test_login_then_dashboard_uses_browser_token() -> None:
    requests: List[httpx.Request] = []
    runtime = _runtime(requests)
    storage = {}

    async def scenario() -> None:
        login = runtime.login_vm(storage)
        login.email = "admin@example.com"
        login.password = "pw"
        assert await login.submit()
        await runtime.dashboard_vm(storage).mount()
        await runtime.shutdown()

    asyncio.run(scenario())

    assert runtime.is_authenticated(storage)
    assert [r.url.path for r in requests] == ["/api/auth/login", "/api/filter-data", "/api/dashboard"]
    assert requests[1].url.params["filters"] == "bases,equipmentTypes"
    assert requests[2].headers["Authorization"] == "Bearer tok-1"


def test_each_call_builds_a_fresh_viewmodel() -> None:
    runtime = _runtime([])
    storage = {}

    first = runtime.purchases_vm(storage)
    second = runtime.purchases_vm(storage)

    assert first is not second
    assert first.loader is not second.loader
    assert first.flags is not second.flags


def test_sessions_are_isolated_between_browsers() -> None:
    runtime = _runtime([])
    alice, bob = {"token": "a"}, {}

    assert runtime.is_authenticated(alice)
    assert not runtime.is_authenticated(bob)

    runtime.logout(alice)

    assert not runtime.is_authenticated(alice)

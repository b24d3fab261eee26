from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from matrack.adapters.api_errors import (
    ApiClientError,
    ApiServerError,
    ApiTimeoutError,
    TransportError,
)
from matrack.adapters.credentials import SessionCredentialStore
from matrack.adapters.http_client import ApiSession, HttpConfig

BASE_URL = "https://assets.example.test/api"


def _session(handler, credentials=None) -> ApiSession:
    return ApiSession(
        HttpConfig(base_url=BASE_URL, request_timeout_s=5),
        credentials,
        transport=httpx.MockTransport(handler),
    )


def _run(coro_factory):
    """Run ``coro_factory(session)`` and close the session afterwards."""

    async def scenario(session: ApiSession):
        try:
            return await coro_factory(session)
        finally:
            await session.aclose()

    return scenario


def test_get_sends_bearer_token_and_params() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": [1, 2]})

    session = _session(handler, SessionCredentialStore({"token": "abc"}))
    body = asyncio.run(_run(lambda s: s.get("/purchases", params={"baseId": "1"}))(session))

    assert body == {"data": [1, 2]}
    assert seen["url"] == f"{BASE_URL}/purchases?baseId=1"
    assert seen["auth"] == "Bearer abc"


def test_no_authorization_header_without_token() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    session = _session(handler, SessionCredentialStore())
    asyncio.run(_run(lambda s: s.get("/logs"))(session))

    assert seen["auth"] is None


def test_post_sends_json_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        seen["type"] = request.headers.get("Content-Type")
        return httpx.Response(201, json={"id": 5})

    session = _session(handler)
    body = asyncio.run(_run(lambda s: s.post("/transfers", json_body={"assetId": 3}))(session))

    assert body == {"id": 5}
    assert seen == {"method": "POST", "body": {"assetId": 3}, "type": "application/json"}


def test_client_error_carries_server_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Quantity too large", "code": "E_QTY"})

    session = _session(handler)
    with pytest.raises(ApiClientError) as info:
        asyncio.run(_run(lambda s: s.post("/purchases", json_body={}))(session))

    assert info.value.status == 400
    assert info.value.server_message == "Quantity too large"
    assert "Quantity too large (HTTP 400)" in str(info.value)


def test_client_error_without_message_uses_fallback_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"errors": ["quantity"], "code": "E_QTY"})

    session = _session(handler)
    with pytest.raises(ApiClientError) as info:
        asyncio.run(_run(lambda s: s.post("/purchases", json_body={}))(session))

    assert info.value.server_message is None
    assert str(info.value) == "POST /purchases: An error occurred while fetching data. (HTTP 422)"


def test_server_error_with_text_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad gateway")

    session = _session(handler)
    with pytest.raises(ApiServerError) as info:
        asyncio.run(_run(lambda s: s.get("/dashboard"))(session))

    assert info.value.status == 502
    assert info.value.server_message == "Bad gateway"


def test_timeout_maps_to_api_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    session = _session(handler)
    with pytest.raises(ApiTimeoutError):
        asyncio.run(_run(lambda s: s.get("/dashboard"))(session))


def test_connection_failure_maps_to_api_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    session = _session(handler)
    with pytest.raises(ApiTimeoutError) as info:
        asyncio.run(_run(lambda s: s.get("/logs"))(session))

    assert info.value.context == "GET /logs"


def test_invalid_json_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    session = _session(handler)
    with pytest.raises(TransportError):
        asyncio.run(_run(lambda s: s.get("/purchases"))(session))


def test_empty_body_returns_none() -> None:
    session = _session(lambda request: httpx.Response(204))

    assert asyncio.run(_run(lambda s: s.post("/transfers"))(session)) is None


def test_bind_shares_client_but_not_credentials() -> None:
    session = _session(lambda request: httpx.Response(200, json={}))
    alice = SessionCredentialStore({"token": "a"})

    bound = session.bind(alice)

    assert bound.client is session.client
    assert bound.credentials is alice
    assert session.credentials is None
    assert bound._headers()["Authorization"] == "Bearer a"
    assert "Authorization" not in session._headers()

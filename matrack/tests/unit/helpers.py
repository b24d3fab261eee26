from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

from matrack.adapters.api_errors import ApiTimeoutError, TransportError

CATALOG_PAYLOAD: Dict[str, Any] = {
    "data": {
        "bases": [{"id": 1, "name": "Alpha"}, {"id": 2, "name": "Bravo"}],
        "equipmentTypes": ["Weapon", "Vehicle"],
        "assets": [
            {"id": 3, "name": "M4 Carbine", "equipmentType": "Weapon"},
            {"id": 4, "name": "Humvee", "equipmentType": "Vehicle"},
        ],
    }
}


class FakeAssetApi:
    """In-memory ``AssetApiPort`` recording every call.

    ``responses`` maps a method name to the value it returns; an exception
    instance is raised instead of returned.
    """

    def __init__(self, **responses: Any) -> None:
        self.responses: Dict[str, Any] = {
            "fetch_filter_data": CATALOG_PAYLOAD,
            "fetch_dashboard": {"data": {}},
            "list_purchases": {"purchases": []},
            "create_purchase": {"id": 99},
            "list_transfers": {"transfers": []},
            "create_transfer": {"id": 77},
            "list_logs": {"logs": []},
            "login": {"token": "tkn", "user": {"username": "admin"}},
        }
        self.responses.update(responses)
        self.calls: List[Tuple[str, Any]] = []

    async def _answer(self, name: str, arg: Any) -> Any:
        self.calls.append((name, arg))
        await asyncio.sleep(0)
        value = self.responses[name]
        if isinstance(value, BaseException):
            raise value
        return value

    def called(self, name: str) -> List[Any]:
        return [arg for method, arg in self.calls if method == name]

    async def fetch_filter_data(self, kinds: Sequence[str]) -> Any:
        return await self._answer("fetch_filter_data", tuple(kinds))

    async def fetch_dashboard(self, params: Dict[str, str]) -> Any:
        return await self._answer("fetch_dashboard", dict(params))

    async def list_purchases(self, params: Dict[str, str]) -> Any:
        return await self._answer("list_purchases", dict(params))

    async def create_purchase(self, payload: Dict[str, Any]) -> Any:
        return await self._answer("create_purchase", dict(payload))

    async def list_transfers(self, params: Dict[str, str]) -> Any:
        return await self._answer("list_transfers", dict(params))

    async def create_transfer(self, payload: Dict[str, Any]) -> Any:
        return await self._answer("create_transfer", dict(payload))

    async def list_logs(self) -> Any:
        return await self._answer("list_logs", None)

    async def login(self, email: str, password: str) -> Any:
        return await self._answer("login", (email, password))


class NotifyRecorder:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def __call__(self, message: str, kind: str = "info") -> None:
        self.messages.append((message, kind))

    def last(self) -> Optional[Tuple[str, str]]:
        return self.messages[-1] if self.messages else None


def offline(message: str = "Cannot reach host") -> TransportError:
    return ApiTimeoutError(message)


__all__ = ["CATALOG_PAYLOAD", "FakeAssetApi", "NotifyRecorder", "offline"]

from __future__ import annotations

from typing import Any, Sequence

from matrack.adapters.http_client import ApiSession
from matrack.domain.ports import AssetApiPort, Payload, QueryParams


class AssetApiAdapter(AssetApiPort):
    """REST adapter mapping ``AssetApiPort`` calls onto API endpoints."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    async def fetch_filter_data(self, kinds: Sequence[str]) -> Any:
        selection = ",".join(str(kind) for kind in kinds if kind)
        return await self.session.get("/filter-data", params={"filters": selection})

    async def fetch_dashboard(self, params: QueryParams) -> Any:
        return await self.session.get("/dashboard", params=dict(params))

    async def list_purchases(self, params: QueryParams) -> Any:
        return await self.session.get("/purchases", params=dict(params))

    async def create_purchase(self, payload: Payload) -> Any:
        return await self.session.post("/purchases", json_body=dict(payload))

    async def list_transfers(self, params: QueryParams) -> Any:
        return await self.session.get("/transfers", params=dict(params))

    async def create_transfer(self, payload: Payload) -> Any:
        return await self.session.post("/transfers", json_body=dict(payload))

    async def list_logs(self) -> Any:
        return await self.session.get("/logs")

    async def login(self, email: str, password: str) -> Any:
        return await self.session.post(
            "/auth/login", json_body={"email": email, "password": password}
        )

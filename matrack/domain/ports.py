from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

QueryParams = Dict[str, str]
Payload = Dict[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class AssetApiPort(Protocol):
    """Read/write operations against the asset-tracking REST API.

    Methods return the raw decoded JSON. Envelope normalization belongs to
    the use cases, not the adapter.
    """

    async def fetch_filter_data(self, kinds: Sequence[str]) -> Any: ...
    async def fetch_dashboard(self, params: QueryParams) -> Any: ...
    async def list_purchases(self, params: QueryParams) -> Any: ...
    async def create_purchase(self, payload: Payload) -> Any: ...
    async def list_transfers(self, params: QueryParams) -> Any: ...
    async def create_transfer(self, payload: Payload) -> Any: ...
    async def list_logs(self) -> Any: ...
    async def login(self, email: str, password: str) -> Any: ...


class CredentialPort(Protocol):
    """Holds the bearer token for the current browser session."""

    def token(self) -> Optional[str]: ...
    def store(self, token: str) -> None: ...
    def clear(self) -> None: ...

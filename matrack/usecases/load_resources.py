"""Resource loaders: fetch one resource type, normalize it, guard staleness.

Every loader keeps a monotonically increasing request generation. A response
that resolves after a newer request was issued is discarded and reported as
``stale`` instead of overwriting newer data.

Transport failures never propagate out of a loader: they come back as a
``LoadResult`` carrying a ``UseCaseError`` for the page to display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from matrack.adapters.api_errors import TransportError
from matrack.domain.entities import (
    DashboardSummary,
    LogEntry,
    MetadataCatalog,
    Purchase,
    Transfer,
)
from matrack.domain.envelopes import normalize_list, normalize_object, unwrap_object
from matrack.domain.errors import ShapeError
from matrack.domain.ports import AssetApiPort, QueryParams, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

ACCESS_DENIED_LOGS = "Access denied. Only administrators can view logs."
METADATA_KINDS = ("bases", "equipmentTypes", "assets")


@dataclass
class LoadResult:
    """Outcome of one loader invocation."""

    data: Any = None
    error: Optional[UseCaseError] = None
    stale: bool = False
    generation: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale


class ResourceLoader:
    """Base loader; subclasses supply the endpoint call and normalization."""

    resource = "resource"
    error_code = "LOAD_FAILED"
    error_message: Optional[str] = None
    forbidden_message: Optional[str] = None

    def __init__(self, api: AssetApiPort) -> None:
        self.api = api
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def __call__(self, params: Optional[QueryParams] = None) -> LoadResult:
        self._generation += 1
        generation = self._generation
        try:
            raw = await self._fetch(dict(params or {}))
        except TransportError as exc:
            if not self.is_current(generation):
                LOGGER.debug("Ignoring failure of superseded %s request #%s", self.resource, generation)
                return LoadResult(stale=True, generation=generation)
            LOGGER.warning("Loading %s failed: %s", self.resource, exc)
            error = map_api_error(
                exc,
                default_code=self.error_code,
                forbidden_message=self.forbidden_message,
            )
            return LoadResult(error=error, generation=generation)

        if not self.is_current(generation):
            LOGGER.debug(
                "Discarding stale %s response #%s (latest #%s)",
                self.resource,
                generation,
                self._generation,
            )
            return LoadResult(stale=True, generation=generation)
        return LoadResult(data=self._normalize(raw), generation=generation)

    async def _fetch(self, params: QueryParams) -> Any:
        raise NotImplementedError

    def _normalize(self, raw: Any) -> Any:
        raise NotImplementedError


class LoadMetadata(ResourceLoader):
    """Fetch the bases/equipment-types/assets catalog for option lists."""

    resource = "metadata"
    error_code = "METADATA_FAILED"

    def __init__(self, api: AssetApiPort, kinds=METADATA_KINDS) -> None:
        super().__init__(api)
        self.kinds = tuple(kinds)

    async def _fetch(self, params: QueryParams) -> Any:
        return await self.api.fetch_filter_data(self.kinds)

    def _normalize(self, raw: Any) -> MetadataCatalog:
        body = normalize_object(raw, key="data", marker_keys=METADATA_KINDS)
        return MetadataCatalog.from_payload(body)


class LoadDashboard(ResourceLoader):
    resource = "dashboard"
    error_code = "DASHBOARD_FAILED"
    error_message = "Error fetching dashboard data"

    async def _fetch(self, params: QueryParams) -> Any:
        return await self.api.fetch_dashboard(params)

    def _normalize(self, raw: Any) -> Optional[DashboardSummary]:
        try:
            body = unwrap_object(raw, key="data")
        except ShapeError as exc:
            LOGGER.debug("Dashboard response carries no summary: %s", exc)
            return None
        return DashboardSummary.from_payload(body)


class LoadPurchases(ResourceLoader):
    resource = "purchases"
    error_code = "PURCHASES_FAILED"
    error_message = "Error fetching purchases"

    async def _fetch(self, params: QueryParams) -> Any:
        return await self.api.list_purchases(params)

    def _normalize(self, raw: Any) -> List[Purchase]:
        return [Purchase.from_payload(row) for row in normalize_list(raw, "purchases")]


class LoadTransfers(ResourceLoader):
    resource = "transfers"
    error_code = "TRANSFERS_FAILED"
    error_message = "Error fetching transfers"

    async def _fetch(self, params: QueryParams) -> Any:
        return await self.api.list_transfers(params)

    def _normalize(self, raw: Any) -> List[Transfer]:
        return [Transfer.from_payload(row) for row in normalize_list(raw, "transfers")]


class LoadLogs(ResourceLoader):
    resource = "logs"
    error_code = "LOGS_FAILED"
    error_message = "Error fetching logs"
    forbidden_message = ACCESS_DENIED_LOGS

    async def _fetch(self, params: QueryParams) -> Any:
        return await self.api.list_logs()

    def _normalize(self, raw: Any) -> List[LogEntry]:
        return [LogEntry.from_payload(row) for row in normalize_list(raw, "logs")]


__all__ = [
    "ACCESS_DENIED_LOGS",
    "LoadDashboard",
    "LoadLogs",
    "LoadMetadata",
    "LoadPurchases",
    "LoadResult",
    "LoadTransfers",
    "ResourceLoader",
]

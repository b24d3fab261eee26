"""Composition root for the NiceGUI client.

One ``WebRuntime`` lives per server process and owns the shared HTTP
session. Viewmodels are never cached here: every page render asks for a
fresh one, bound to the credentials of the browser that requested it.
"""

from __future__ import annotations

import logging
from typing import MutableMapping, Optional

import httpx

from matrack.adapters.asset_api import AssetApiAdapter
from matrack.adapters.credentials import SessionCredentialStore
from matrack.adapters.http_client import ApiSession, HttpConfig
from matrack.usecases.auth import Login, Logout
from matrack.usecases.load_resources import (
    LoadDashboard,
    LoadLogs,
    LoadMetadata,
    LoadPurchases,
    LoadTransfers,
)
from matrack.usecases.submit_mutation import SubmitPurchase, SubmitTransfer
from matrack.utils.config import ClientSettings
from matrack.viewmodels.dashboard_vm import DashboardVM
from matrack.viewmodels.login_vm import LoginVM
from matrack.viewmodels.logs_vm import LogsVM
from matrack.viewmodels.page_base import Notify
from matrack.viewmodels.purchases_vm import PurchasesVM
from matrack.viewmodels.transfers_vm import TransfersVM

LOGGER = logging.getLogger(__name__)

Storage = MutableMapping[str, str]

DASHBOARD_METADATA = ("bases", "equipmentTypes")
FORM_METADATA = ("bases", "equipmentTypes", "assets")


class WebRuntime:
    """Builds per-page viewmodels on top of one shared ``ApiSession``."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ClientSettings.from_env()
        self.session = ApiSession(
            HttpConfig(
                base_url=self.settings.api_base_url,
                request_timeout_s=self.settings.request_timeout_s,
            ),
            transport=transport,
        )
        LOGGER.info("Asset API: %s", self.settings.api_base_url)

    # ------------------------------------------------------------------
    # Session helpers
    # ------------------------------------------------------------------
    def credentials(self, storage: Storage) -> SessionCredentialStore:
        return SessionCredentialStore(storage)

    def api(self, storage: Storage) -> AssetApiAdapter:
        return AssetApiAdapter(self.session.bind(self.credentials(storage)))

    def is_authenticated(self, storage: Storage) -> bool:
        return self.credentials(storage).token() is not None

    def logout(self, storage: Storage) -> None:
        Logout(self.credentials(storage))()

    async def shutdown(self) -> None:
        await self.session.aclose()

    # ------------------------------------------------------------------
    # Page viewmodels (fresh instance per call)
    # ------------------------------------------------------------------
    def login_vm(self, storage: Storage, notify: Optional[Notify] = None) -> LoginVM:
        login = Login(api=self.api(storage), credentials=self.credentials(storage))
        return LoginVM(login=login, notify=notify)

    def dashboard_vm(self, storage: Storage, notify: Optional[Notify] = None) -> DashboardVM:
        api = self.api(storage)
        return DashboardVM(
            loader=LoadDashboard(api),
            load_metadata=LoadMetadata(api, kinds=DASHBOARD_METADATA),
            notify=notify,
        )

    def purchases_vm(self, storage: Storage, notify: Optional[Notify] = None) -> PurchasesVM:
        api = self.api(storage)
        return PurchasesVM(
            loader=LoadPurchases(api),
            submit=SubmitPurchase(api),
            load_metadata=LoadMetadata(api, kinds=FORM_METADATA),
            notify=notify,
        )

    def transfers_vm(self, storage: Storage, notify: Optional[Notify] = None) -> TransfersVM:
        api = self.api(storage)
        return TransfersVM(
            loader=LoadTransfers(api),
            submit=SubmitTransfer(api),
            load_metadata=LoadMetadata(api, kinds=FORM_METADATA),
            notify=notify,
        )

    def logs_vm(self, storage: Storage, notify: Optional[Notify] = None) -> LogsVM:
        return LogsVM(loader=LoadLogs(self.api(storage)), notify=notify)


__all__ = ["WebRuntime"]

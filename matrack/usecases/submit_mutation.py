"""Validate, build, and post create-purchase / create-transfer mutations.

The coordinator only talks to the API. Resetting the form and refreshing the
list after a confirmed write is the page's job (see
``matrack.viewmodels.page_base``), so nothing here touches UI state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from matrack.adapters.api_errors import TransportError
from matrack.domain.entities import MetadataCatalog
from matrack.domain.errors import ValidationError
from matrack.domain.params import build_purchase_payload, build_transfer_payload
from matrack.domain.ports import AssetApiPort, Payload, UseCaseError
from matrack.domain.validation import (
    GateDecision,
    check_purchase_form,
    check_transfer_form,
)

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class MutationResult:
    """Outcome of a submission.

    Exactly one of ``reason`` (local rejection, nothing was sent) or
    ``error`` (the server call failed) is set on failure.
    """

    ok: bool
    response: Any = None
    payload: Optional[Payload] = None
    reason: Optional[str] = None
    error: Optional[UseCaseError] = None


class MutationCoordinator:
    """Single-attempt submission pipeline for one form type."""

    resource = "mutation"
    error_code = "MUTATION_FAILED"
    error_message = "Error creating record"

    def __init__(
        self,
        gate: Callable[[Any, Optional[MetadataCatalog]], GateDecision],
        build_payload: Callable[[Any], Payload],
        post: Callable[[Payload], Awaitable[Any]],
    ) -> None:
        self.gate = gate
        self.build_payload = build_payload
        self.post = post

    async def __call__(
        self, form: Any, catalog: Optional[MetadataCatalog] = None
    ) -> MutationResult:
        decision = self.gate(form, catalog)
        if not decision.allowed:
            return MutationResult(ok=False, reason=decision.reason)
        try:
            payload = self.build_payload(form)
        except ValidationError as exc:
            return MutationResult(ok=False, reason=exc.reason)

        try:
            response = await self.post(payload)
        except TransportError as exc:
            LOGGER.warning("Creating %s failed: %s", self.resource, exc)
            error = map_api_error(exc, default_code=self.error_code)
            return MutationResult(ok=False, payload=payload, error=error)
        LOGGER.info("Created %s: %s", self.resource, payload)
        return MutationResult(ok=True, response=response, payload=payload)


class SubmitPurchase(MutationCoordinator):
    resource = "purchase"
    error_code = "CREATE_PURCHASE_FAILED"
    error_message = "Error creating purchase"

    def __init__(self, api: AssetApiPort) -> None:
        super().__init__(check_purchase_form, build_purchase_payload, api.create_purchase)


class SubmitTransfer(MutationCoordinator):
    resource = "transfer"
    error_code = "CREATE_TRANSFER_FAILED"
    error_message = "Error creating transfer"

    def __init__(self, api: AssetApiPort) -> None:
        super().__init__(check_transfer_form, build_transfer_payload, api.create_transfer)


__all__ = ["MutationCoordinator", "MutationResult", "SubmitPurchase", "SubmitTransfer"]

"""Purchases page state: purchase history filters, create form, rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from matrack.domain.filters import PurchaseFilters, PurchaseForm
from matrack.domain.params import build_purchase_query
from matrack.domain.ports import QueryParams
from matrack.domain.validation import GateDecision, check_purchase_filters
from matrack.usecases.load_resources import LoadMetadata, LoadPurchases
from matrack.usecases.submit_mutation import SubmitPurchase

from .page_base import MutationPageVM, Notify, replace_field
from .status_format import asset_label, base_label, equipment_label, format_date


@dataclass
class PurchaseRow:
    """Display row for the purchase history table."""
    id: str
    asset: str
    equipment_type: str
    base: str
    quantity: int
    date: str


class PurchasesVM(MutationPageVM):
    success_message = "Purchase created successfully!"

    def __init__(
        self,
        *,
        loader: LoadPurchases,
        submit: SubmitPurchase,
        load_metadata: Optional[LoadMetadata] = None,
        notify: Optional[Notify] = None,
        filters: Optional[PurchaseFilters] = None,
    ) -> None:
        super().__init__(
            loader=loader, submit=submit, load_metadata=load_metadata, notify=notify
        )
        self.filters = filters or PurchaseFilters()

    def default_form(self) -> PurchaseForm:
        return PurchaseForm()

    def read_gate(self) -> GateDecision:
        return check_purchase_filters(self.filters)

    def build_query(self) -> QueryParams:
        return build_purchase_query(self.filters)

    def set_filter(self, name: str, value: Any) -> None:
        self.filters = replace_field(self.filters, name, value)

    def rows(self) -> List[PurchaseRow]:
        return [
            PurchaseRow(
                id="" if item.id is None else str(item.id),
                asset=asset_label(item.asset),
                equipment_type=equipment_label(item.asset),
                base=base_label(item.base),
                quantity=item.quantity,
                date=format_date(item.date),
            )
            for item in self.data
        ]

"""Transfer page state: transfer history filters, create form, rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from matrack.domain.filters import TransferFilters, TransferForm
from matrack.domain.params import build_transfer_query
from matrack.domain.ports import QueryParams
from matrack.domain.validation import GateDecision, check_transfer_filters
from matrack.usecases.load_resources import LoadMetadata, LoadTransfers
from matrack.usecases.submit_mutation import SubmitTransfer

from .page_base import MutationPageVM, Notify, replace_field
from .status_format import asset_label, base_label, equipment_label, format_date


@dataclass
class TransferRow:
    """Display row for the transfer history table."""
    id: str
    asset: str
    equipment_type: str
    from_base: str
    to_base: str
    quantity: int
    date: str


class TransfersVM(MutationPageVM):
    success_message = "Transfer created successfully!"

    def __init__(
        self,
        *,
        loader: LoadTransfers,
        submit: SubmitTransfer,
        load_metadata: Optional[LoadMetadata] = None,
        notify: Optional[Notify] = None,
        filters: Optional[TransferFilters] = None,
    ) -> None:
        super().__init__(
            loader=loader, submit=submit, load_metadata=load_metadata, notify=notify
        )
        self.filters = filters or TransferFilters()

    def default_form(self) -> TransferForm:
        return TransferForm()

    def read_gate(self) -> GateDecision:
        return check_transfer_filters(self.filters)

    def build_query(self) -> QueryParams:
        return build_transfer_query(self.filters)

    def set_filter(self, name: str, value: Any) -> None:
        self.filters = replace_field(self.filters, name, value)

    def rows(self) -> List[TransferRow]:
        return [
            TransferRow(
                id="" if item.id is None else str(item.id),
                asset=asset_label(item.asset),
                equipment_type=equipment_label(item.asset),
                from_base=base_label(item.from_base),
                to_base=base_label(item.to_base),
                quantity=item.quantity,
                date=format_date(item.date),
            )
            for item in self.data
        ]

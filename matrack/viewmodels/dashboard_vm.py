"""Dashboard page state: balance summary for one base and date window."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from matrack.domain.entities import DashboardSummary
from matrack.domain.filters import DashboardFilters, monthly_date_ranges
from matrack.domain.params import build_dashboard_query
from matrack.domain.ports import QueryParams
from matrack.domain.validation import GateDecision, check_dashboard_filters
from matrack.usecases.load_resources import LoadDashboard, LoadMetadata

from .page_base import Notify, Option, ResourcePageVM, replace_field

MetricRow = Tuple[str, float]

DATE_RANGE_YEAR = 2025


class DashboardVM(ResourcePageVM):
    """Owns dashboard filters and the last loaded ``DashboardSummary``."""

    def __init__(
        self,
        *,
        loader: LoadDashboard,
        load_metadata: Optional[LoadMetadata] = None,
        notify: Optional[Notify] = None,
        filters: Optional[DashboardFilters] = None,
    ) -> None:
        super().__init__(loader=loader, load_metadata=load_metadata, notify=notify)
        self.filters = filters or DashboardFilters()

    def empty_data(self) -> Any:
        return None

    def read_gate(self) -> GateDecision:
        return check_dashboard_filters(self.filters)

    def build_query(self) -> QueryParams:
        return build_dashboard_query(self.filters)

    def set_filter(self, name: str, value: Any) -> None:
        self.filters = replace_field(self.filters, name, value)

    @property
    def summary(self) -> Optional[DashboardSummary]:
        return self.data

    def metric_rows(self) -> List[MetricRow]:
        """Rows for the overview table; zeros until a summary is loaded."""
        summary = self.summary or DashboardSummary()
        return [
            ("Opening Balance", summary.opening_balance),
            ("Purchases", summary.purchases),
            ("Transfer In", summary.transfer_in),
            ("Transfer Out", summary.transfer_out),
            ("Net Movement", summary.net_movement),
            ("Assigned", summary.assigned),
            ("Expended", summary.expended),
            ("Closing Balance", summary.closing_balance),
        ]

    @staticmethod
    def date_range_options(year: int = DATE_RANGE_YEAR) -> List[Option]:
        return [(value, label) for label, value in monthly_date_ranges(year)]

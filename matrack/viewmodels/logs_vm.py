"""Activity-log page state. No metadata dependency: mount loads directly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from matrack.usecases.load_resources import LoadLogs

from .page_base import Notify, ResourcePageVM
from .status_format import format_timestamp


@dataclass
class LogRow:
    """Display row for the activity log table."""
    id: str
    user: str
    action: str
    details: str
    timestamp: str


class LogsVM(ResourcePageVM):
    def __init__(self, *, loader: LoadLogs, notify: Optional[Notify] = None) -> None:
        super().__init__(loader=loader, load_metadata=None, notify=notify)

    @property
    def access_denied(self) -> bool:
        return self.last_error is not None and self.last_error.code == "ACCESS_DENIED"

    def rows(self) -> List[LogRow]:
        return [
            LogRow(
                id="" if entry.id is None else str(entry.id),
                user=entry.username or entry.email or (
                    f"User {entry.user_id}" if entry.user_id is not None else "Unknown"
                ),
                action=entry.action,
                details=entry.details,
                timestamp=format_timestamp(entry.timestamp),
            )
            for entry in self.data
        ]

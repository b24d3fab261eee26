"""Domain package exports for value objects, state, and pure rules."""

from .entities import (
    AssetRef,
    BaseRef,
    DashboardSummary,
    LoadingFlags,
    LogEntry,
    MetadataCatalog,
    Purchase,
    Transfer,
)
from .errors import ShapeError, ValidationError
from .filters import (
    DEFAULT_BASE,
    UNSCOPED,
    DashboardFilters,
    PurchaseFilters,
    PurchaseForm,
    TransferFilters,
    TransferForm,
)
from .validation import GateDecision

__all__ = [
    "AssetRef",
    "BaseRef",
    "DEFAULT_BASE",
    "DashboardFilters",
    "DashboardSummary",
    "GateDecision",
    "LoadingFlags",
    "LogEntry",
    "MetadataCatalog",
    "Purchase",
    "PurchaseFilters",
    "PurchaseForm",
    "ShapeError",
    "Transfer",
    "TransferFilters",
    "TransferForm",
    "UNSCOPED",
    "ValidationError",
]

"""Domain value objects for the asset API: reference data and resource rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _number(value: Any) -> float:
    """Numeric metric with missing or malformed values shown as zero."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        text = str(value).strip()
        return int(text) if text.lstrip("-").isdigit() else float(text)
    except (TypeError, ValueError):
        return 0


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class BaseRef:
    """A military base that can own, receive, or send assets."""

    id: int
    name: str = ""

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["BaseRef"]:
        if not isinstance(raw, Mapping):
            return None
        base_id = _int_or_none(raw.get("id"))
        if base_id is None:
            return None
        return cls(id=base_id, name=_text(raw.get("name")))


@dataclass(frozen=True)
class AssetRef:
    """A trackable asset kind, e.g. a rifle model or vehicle class."""

    id: int
    name: str = ""
    equipment_type: str = ""

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["AssetRef"]:
        if not isinstance(raw, Mapping):
            return None
        asset_id = _int_or_none(raw.get("id"))
        if asset_id is None:
            return None
        return cls(
            id=asset_id,
            name=_text(raw.get("name")),
            equipment_type=_text(raw.get("equipmentType")),
        )


@dataclass(frozen=True)
class MetadataCatalog:
    """Reference data loaded once per page mount.

    Used to populate selectable options and, when non-empty, to check that
    selected identifiers exist. An empty catalog is valid: it is what a page
    gets when the metadata request failed.
    """

    bases: Tuple[BaseRef, ...] = ()
    equipment_types: Tuple[str, ...] = ()
    assets: Tuple[AssetRef, ...] = ()

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "MetadataCatalog":
        bases = _collect(BaseRef.from_payload, raw.get("bases"))
        assets = _collect(AssetRef.from_payload, raw.get("assets"))
        types_raw = raw.get("equipmentTypes")
        equipment_types: Tuple[str, ...] = ()
        if isinstance(types_raw, list):
            equipment_types = tuple(
                text for text in (_text(item) for item in types_raw) if text
            )
        return cls(bases=bases, equipment_types=equipment_types, assets=assets)

    def has_base(self, base_id: int) -> bool:
        return any(base.id == base_id for base in self.bases)

    def has_asset(self, asset_id: int) -> bool:
        return any(asset.id == asset_id for asset in self.assets)


def _collect(factory, raw: Any) -> tuple:
    if not isinstance(raw, list):
        return ()
    items = (factory(entry) for entry in raw)
    return tuple(item for item in items if item is not None)


@dataclass(frozen=True)
class Purchase:
    """A recorded acquisition of assets at a base."""

    id: Optional[int]
    asset_id: Optional[int]
    base_id: Optional[int]
    quantity: int
    date: str
    asset: Optional[AssetRef] = None
    base: Optional[BaseRef] = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Purchase":
        return cls(
            id=_int_or_none(raw.get("id")),
            asset_id=_int_or_none(raw.get("assetId")),
            base_id=_int_or_none(raw.get("baseId")),
            quantity=_int_or_none(raw.get("quantity")) or 0,
            date=_text(raw.get("date")),
            asset=AssetRef.from_payload(raw.get("asset")),
            base=BaseRef.from_payload(raw.get("base")),
        )


@dataclass(frozen=True)
class Transfer:
    """A movement of assets from one base to another."""

    id: Optional[int]
    asset_id: Optional[int]
    from_base_id: Optional[int]
    to_base_id: Optional[int]
    quantity: int
    date: str
    asset: Optional[AssetRef] = None
    from_base: Optional[BaseRef] = None
    to_base: Optional[BaseRef] = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Transfer":
        return cls(
            id=_int_or_none(raw.get("id")),
            asset_id=_int_or_none(raw.get("assetId")),
            from_base_id=_int_or_none(raw.get("fromBaseId")),
            to_base_id=_int_or_none(raw.get("toBaseId")),
            quantity=_int_or_none(raw.get("quantity")) or 0,
            date=_text(raw.get("date")),
            asset=AssetRef.from_payload(raw.get("asset")),
            from_base=BaseRef.from_payload(raw.get("fromBase")),
            to_base=BaseRef.from_payload(raw.get("toBase")),
        )


@dataclass(frozen=True)
class LogEntry:
    """One audit-trail record of a user action."""

    id: Optional[int]
    user_id: Optional[int]
    action: str
    details: str
    timestamp: str
    username: str = ""
    email: str = ""

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "LogEntry":
        user = raw.get("user")
        user_map: Mapping[str, Any] = user if isinstance(user, Mapping) else {}
        return cls(
            id=_int_or_none(raw.get("id")),
            user_id=_int_or_none(raw.get("userId")),
            action=_text(raw.get("action")),
            details=_text(raw.get("details")),
            timestamp=_text(raw.get("timestamp")),
            username=_text(user_map.get("username")),
            email=_text(user_map.get("email")),
        )


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated balance figures for one base and date window."""

    opening_balance: float = 0
    closing_balance: float = 0
    purchases: float = 0
    transfer_in: float = 0
    transfer_out: float = 0
    assigned: float = 0
    expended: float = 0

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "DashboardSummary":
        movement = raw.get("netMovement")
        movement_map: Mapping[str, Any] = movement if isinstance(movement, Mapping) else {}
        return cls(
            opening_balance=_number(raw.get("openingBalance")),
            closing_balance=_number(raw.get("closingBalance")),
            purchases=_number(movement_map.get("purchases")),
            transfer_in=_number(movement_map.get("transferIn")),
            transfer_out=_number(movement_map.get("transferOut")),
            assigned=_number(raw.get("assigned")),
            expended=_number(raw.get("expended")),
        )

    @property
    def net_movement(self) -> float:
        return self.purchases + self.transfer_in - self.transfer_out


@dataclass
class LoadingFlags:
    """Independent in-flight markers owned by one page instance."""

    metadata_loading: bool = False
    resource_loading: bool = False
    submitting: bool = False


__all__ = [
    "AssetRef",
    "BaseRef",
    "DashboardSummary",
    "LoadingFlags",
    "LogEntry",
    "MetadataCatalog",
    "Purchase",
    "Transfer",
]

"""Inventory records and requests shared by the services."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


class UniqueViolationError(Exception):
    """A record clashes with an existing one on a unique column."""


class ForeignKeyViolationError(Exception):
    """A record is still referenced by others."""


@dataclass
class Location:
    """A place where items are kept or delivered."""

    id: int = 0
    name: str = ""
    pavilion: str = ""


@dataclass
class ItemCategory:
    """A kind of item; assets of a category share its PYR id."""

    id: int = 0
    label: str = ""
    name: str = ""
    type: str = ""
    pyr_id: str = ""


@dataclass
class Asset:
    """A single tracked piece of equipment."""

    id: int = 0
    serial: Optional[str] = None
    pyr_code: str = ""
    status: str = ""
    origin: str = ""
    category: ItemCategory = field(default_factory=ItemCategory)
    location: Location = field(default_factory=Location)

    def to_dict(self) -> dict[str, Any]:
        """The asset as plain data, nested records included."""
        return dataclasses.asdict(self)


@dataclass
class StockItem:
    """A quantity of untracked items of one category at one location."""

    id: int = 0
    quantity: int = 0
    origin: str = ""
    category: ItemCategory = field(default_factory=ItemCategory)
    location: Location = field(default_factory=Location)


@dataclass
class Transfer:
    """Movement of assets and stock between two locations."""

    id: int = 0
    status: str = ""
    from_location: Location = field(default_factory=Location)
    to_location: Location = field(default_factory=Location)
    assets_collection: list[Asset] = field(default_factory=list)
    stock_items_collection: list[StockItem] = field(default_factory=list)


@dataclass
class TransferUser:
    """A user assigned to a transfer."""

    user_id: int = 0
    transfer_id: int = 0


@dataclass
class ItemRequest:
    """A request to register one asset."""

    serial: Optional[str] = None
    location_id: int = 0
    status: str = ""
    category_id: int = 0
    origin: str = ""


@dataclass
class BulkItemRequest:
    """A request to register several assets by serial number."""

    serials: list[str] = field(default_factory=list)
    location_id: int = 0
    status: str = ""
    category_id: int = 0
    origin: str = ""


@dataclass
class EmergencyAssetRequest:
    """A request to register assets that have no serial number."""

    quantity: int = 0
    location_id: int = 0
    status: str = ""
    category_id: int = 0
    origin: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity}")


@dataclass
class DeliveryLocation:
    """Where and when an asset was last seen."""

    lat: float
    lng: float
    timestamp: datetime
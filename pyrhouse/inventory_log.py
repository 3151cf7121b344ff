"""Audit log entries written for inventory events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from pyrhouse.models import Asset, Transfer, TransferUser


class _AuditLog(Protocol):
    def log(self, action: str, data: dict[str, Any], resource: Any) -> Any: ...


TRANSFER_MESSAGES = {
    "delivered": {
        "transfer": "Transfer completed",
        "assets": "Asset moved to transfer locations",
        "stocks": "Stock Items moved to transfer locations",
    },
    "in_transfer": {
        "transfer": "Transfer registered",
        "assets": "Assets in transport",
        "stocks": "Stock Items in transport",
    },
    "cancelled": {
        "transfer": "Transfer cancelled",
        "assets": "Assets returned to original location",
        "stocks": "Stock Items returned to original location",
    },
}


class InventoryLog:
    """Writes audit entries for assets, transfers and transfer users."""

    def __init__(self, audit_log: _AuditLog) -> None:
        self.audit_log = audit_log

    def delivery_location_entry(
        self,
        action: str,
        asset: Asset,
        latitude: float,
        longitude: float,
        timestamp: datetime,
    ) -> None:
        """Record the last known position of an asset."""
        self.audit_log.log(
            action,
            {
                "asset_id": asset.id,
                "msg": "Ostatnia znana lokalizacja",
                "location": {
                    "location_id": asset.location.id,
                    "latitude": latitude,
                    "longitude": longitude,
                    "timestamp": timestamp,
                },
            },
            asset,
        )

    def asset_entry(self, action: str, asset: Asset, msg: str) -> None:
        """Record an event on one asset."""
        self.audit_log.log(action, {"asset_id": asset.id, "msg": msg}, asset)

    def transfer_entry(self, action: str, transfer: Transfer) -> None:
        """Record a transfer event and one entry per moved asset and stock item.

        Actions other than delivered, in_transfer and cancelled are not logged.
        """
        messages = TRANSFER_MESSAGES.get(action)
        if messages is None:
            return

        source, target = transfer.from_location, transfer.to_location
        self.audit_log.log(
            action,
            {
                "transfer_id": transfer.id,
                "from_location_id": source.id,
                "to_location_id": target.id,
                "msg": messages["transfer"],
            },
            transfer,
        )
        for asset in transfer.assets_collection:
            self.audit_log.log(
                action,
                {
                    "transfer_id": transfer.id,
                    "from_location_id": source.id,
                    "from_location_name": source.name,
                    "to_location_id": target.id,
                    "to_location_name": target.name,
                    "msg": messages["assets"],
                },
                asset,
            )
        for stock in transfer.stock_items_collection:
            self.audit_log.log(
                action,
                {
                    "transfer_id": transfer.id,
                    "from_location_id": source.id,
                    "to_location_id": target.id,
                    "quantity": stock.quantity,
                    "msg": messages["stocks"],
                },
                stock,
            )

    def transfer_user_entry(
        self, action: str, transfer_id: int, user: TransferUser
    ) -> None:
        """Record that a user was assigned to a transfer."""
        self.audit_log.log(
            action,
            {
                "transfer_id": transfer_id,
                "user_id": user.user_id,
                "msg": "Użytkownik przypisany do questa dostawy",
            },
            user,
        )
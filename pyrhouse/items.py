"""Lookup of single items and item lists across assets and stock."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Sequence

ASSET = "asset"
STOCK = "stock"


class _ConditionSource(Protocol):
    def build_conditions(self, aliases: dict[str, str]) -> dict[str, Any]: ...


class _AssetRepository(Protocol):
    def get_asset(self, asset_id: int) -> Any: ...

    def get_assets_by(self, conditions: _ConditionSource) -> Sequence[Any]: ...


class _StockRepository(Protocol):
    def get_stock_item(self, stock_id: int) -> Any: ...

    def get_stock_items_by(self, conditions: _ConditionSource) -> Sequence[Any]: ...


class _AuditLogRepository(Protocol):
    def get_resource_log(self, resource_id: int, resource_type: str) -> Sequence[Any]: ...


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ItemQuery:
    """Identifies one item by its category type and id."""

    id: int
    category_type: str

    def __post_init__(self) -> None:
        if not _is_int(self.id):
            raise ValueError(f"item id must be a number, got {self.id!r}")
        if not self.category_type:
            raise ValueError("category type is required")


@dataclass
class ItemListQuery:
    """Filters for listing items; unset filters are left out."""

    location_ids: Optional[list[int]] = None
    category_id: Optional[int] = None
    category_type: str = ""
    category_label: str = ""

    def add_condition(self, key: str, value: Any) -> None:
        """Set a filter when the value has the right type; other values are ignored."""
        if key == "location_ids":
            if isinstance(value, list) and all(_is_int(item) for item in value):
                self.location_ids = value
        elif key == "category_id":
            if _is_int(value):
                self.category_id = value
        elif key == "category_label":
            if isinstance(value, str):
                self.category_label = value

    def build_conditions(self, aliases: dict[str, str]) -> dict[str, Any]:
        """Map the set filters onto the column names given by ``aliases``."""
        conditions: dict[str, Any] = {}
        if self.location_ids is not None:
            conditions[aliases.get("location_ids", "")] = self.location_ids
        if self.category_id is not None:
            conditions[aliases.get("category_id", "")] = self.category_id
        if self.category_label:
            conditions[aliases.get("category_label", "")] = self.category_label
        return conditions

    def has_conditions(self) -> bool:
        """Whether any filter narrows the list."""
        return bool(self.location_ids) or self.category_id is not None or bool(
            self.category_label
        )


def parallel_fetch(*fetchers: Callable[[], Sequence[Any]]) -> list[Any]:
    """Run the fetchers concurrently and join their results in fetcher order.

    The first failure to arrive is raised.
    """
    if not fetchers:
        return []
    with ThreadPoolExecutor(max_workers=len(fetchers)) as pool:
        futures = [pool.submit(fetcher) for fetcher in fetchers]
        for future in as_completed(futures):
            future.result()
        return [item for future in futures for item in future.result()]


class ItemService:
    """Reads assets and stock items together with their audit history."""

    def __init__(
        self,
        assets: _AssetRepository,
        stocks: _StockRepository,
        audit_logs: _AuditLogRepository,
    ) -> None:
        self.assets = assets
        self.stocks = stocks
        self.audit_logs = audit_logs

    def fetch_item(self, query: ItemQuery) -> dict[str, Any]:
        """One asset or stock item with its audit log entries."""
        if query.category_type == ASSET:
            asset = self.assets.get_asset(query.id)
            logs = self.audit_logs.get_resource_log(query.id, query.category_type)
            return {"asset": asset, "assetLogs": logs}
        if query.category_type == STOCK:
            stock = self.stocks.get_stock_item(query.id)
            logs = self.audit_logs.get_resource_log(query.id, query.category_type)
            return {"stock": stock, "assetLogs": logs}
        raise ValueError("invalid item type provided")

    def fetch_item_list(self, conditions: ItemListQuery) -> list[Any]:
        """Items matching the filters; both kinds when no category type is given."""
        if conditions.category_type == ASSET:
            return list(self.assets.get_assets_by(conditions))
        if conditions.category_type == STOCK:
            return list(self.stocks.get_stock_items_by(conditions))
        return parallel_fetch(
            lambda: self.assets.get_assets_by(conditions),
            lambda: self.stocks.get_stock_items_by(conditions),
        )
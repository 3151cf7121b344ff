"""Registration of assets and their PYR codes."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Protocol

from pyrhouse.models import (
    Asset,
    BulkItemRequest,
    DeliveryLocation,
    EmergencyAssetRequest,
    ItemRequest,
    UniqueViolationError,
)

log = logging.getLogger(__name__)

DEFAULT_LOCATION_ID = 1
DEFAULT_STATUS = "available"
ASSET_CATEGORY = "asset"


class _AssetRepository(Protocol):
    def persist_item(self, request: ItemRequest) -> Asset: ...

    def generate_unique_pyr_code(self, category_id: int, category_pyr_id: str) -> str: ...

    def update_pyr_code(self, asset_id: int, pyr_code: str) -> None: ...

    def remove_asset(self, asset_id: int) -> Any: ...

    def get_asset(self, asset_id: int) -> Asset: ...


class _CategoryTypes(Protocol):
    def get_category_type(self, category_id: int) -> str: ...


class _AuditLog(Protocol):
    def log(self, action: str, data: dict[str, Any], resource: Any) -> Any: ...


class _PyrCodeError(Exception):
    """A PYR code could not be generated or stored; the asset was discarded."""

    def __init__(self, verb: str, cause: Exception) -> None:
        super().__init__(f"{verb}: {cause}")
        self.verb = verb
        self.cause = cause


def format_pyr_code(pyr_id: str, number: int) -> str:
    """The PYR code of the given number within a category."""
    return f"PYR-{pyr_id}{number}"


def apply_request_defaults(
    location_id: int, status: str, origin: str
) -> tuple[int, str, str]:
    """Fill in the default location and status; the origin is required."""
    if not origin:
        raise ValueError("Origin is required")
    return location_id or DEFAULT_LOCATION_ID, status or DEFAULT_STATUS, origin


class AssetService:
    """Creates and removes assets, giving each one a unique PYR code."""

    def __init__(
        self,
        assets: _AssetRepository,
        categories: _CategoryTypes,
        audit_log: _AuditLog,
    ) -> None:
        self.assets = assets
        self.categories = categories
        self.audit_log = audit_log

    def _audit(self, action: str, data: dict[str, Any], resource: Any) -> None:
        try:
            self.audit_log.log(action, data, resource)
        except Exception:
            log.exception("audit log entry for %r failed", action)

    def _check_category(self, category_id: int) -> None:
        try:
            category_type = self.categories.get_category_type(category_id)
        except Exception as exc:
            raise ValueError(f"Unable to check category type: {exc}") from exc
        if category_type != ASSET_CATEGORY:
            raise ValueError("Invalid category type")

    def _discard(self, asset: Asset) -> None:
        try:
            self.assets.remove_asset(asset.id)
        except Exception:
            log.exception("could not remove asset %d after a PYR code failure", asset.id)

    def _assign_pyr_code(self, asset: Asset) -> None:
        try:
            pyr_code = self.assets.generate_unique_pyr_code(
                asset.category.id, asset.category.pyr_id
            )
        except Exception as exc:
            self._discard(asset)
            raise _PyrCodeError("wygenerować", exc) from exc
        try:
            self.assets.update_pyr_code(asset.id, pyr_code)
        except Exception as exc:
            self._discard(asset)
            raise _PyrCodeError("zaktualizować", exc) from exc
        asset.pyr_code = pyr_code

    def create_assets_without_serial(self, request: EmergencyAssetRequest) -> list[Asset]:
        """Register ``request.quantity`` assets that have no serial number."""
        location_id, status, origin = apply_request_defaults(
            request.location_id, request.status, request.origin
        )
        request = dataclasses.replace(
            request, location_id=location_id, status=status, origin=origin
        )
        self._check_category(request.category_id)

        created = []
        for _ in range(request.quantity):
            item = ItemRequest(
                serial=None,
                location_id=request.location_id,
                status=request.status,
                category_id=request.category_id,
                origin=request.origin,
            )
            try:
                asset = self.assets.persist_item(item)
            except Exception as exc:
                raise RuntimeError(f"nie udało się utworzyć zasobu: {exc}") from exc
            try:
                self._assign_pyr_code(asset)
            except _PyrCodeError as exc:
                raise RuntimeError(
                    f"nie udało się {exc.verb} kodu PYR: {exc.cause}"
                ) from exc

            created.append(asset)
            self._audit(
                "create",
                {
                    "pyr_code": asset.pyr_code,
                    "location_id": asset.location.id,
                    "msg": "Utworzono zasób awaryjny bez numeru seryjnego",
                },
                asset,
            )
        return created

    def create_bulk_assets(
        self, request: BulkItemRequest
    ) -> tuple[list[Asset], list[str]]:
        """Register one asset per serial number.

        Returns the created assets and the per-serial error messages. When any
        serial fails, every asset created by this call is removed again and the
        list of created assets is empty.
        """
        location_id, status, origin = apply_request_defaults(
            request.location_id, request.status, request.origin
        )
        request = dataclasses.replace(
            request, location_id=location_id, status=status, origin=origin
        )
        self._check_category(request.category_id)

        created: list[Asset] = []
        errors: list[str] = []
        for serial in request.serials:
            item = ItemRequest(
                serial=serial,
                location_id=request.location_id,
                status=request.status,
                category_id=request.category_id,
                origin=request.origin,
            )
            try:
                asset = self.assets.persist_item(item)
            except UniqueViolationError:
                errors.append(f"Numer seryjny {serial} jest już zarejestrowany")
                continue
            except Exception as exc:
                errors.append(
                    f"Nie udało się utworzyć zasobu z numerem seryjnym {serial}: {exc}"
                )
                continue

            try:
                self._assign_pyr_code(asset)
            except _PyrCodeError as exc:
                log.warning("PYR code for asset %d failed: %s", asset.id, exc.cause)
                errors.append(
                    f"Nie udało się {exc.verb} kodu PYR dla zasobu z numerem "
                    f"seryjnym {serial}: {exc.cause}"
                )
                continue

            created.append(asset)
            self._audit(
                "create",
                {
                    "serial": asset.serial,
                    "pyr_code": asset.pyr_code,
                    "location_id": asset.location.id,
                    "msg": "Utworzono zasób zbiorczo",
                },
                asset,
            )

        if errors:
            self.remove_assets(created)
            return [], errors
        return created, errors

    def remove_assets(self, assets: Iterable[Asset]) -> None:
        """Remove the given assets, stopping at the first failure."""
        for asset in assets:
            try:
                self.assets.remove_asset(asset.id)
            except Exception as exc:
                raise RuntimeError(
                    f"nie udało się usunąć zasobu {asset.id}: {exc}"
                ) from exc

    def update_asset_location(self, asset_id: int, location: DeliveryLocation) -> None:
        """Record the last known position of an asset in the audit log."""
        try:
            asset = self.assets.get_asset(asset_id)
        except Exception as exc:
            raise RuntimeError(f"nie udało się pobrać zasobu: {exc}") from exc

        self._audit(
            "last_known_location",
            {
                "asset_id": asset.id,
                "msg": "Ostatnia zarejestrowana lokalizacja",
                "location": {
                    "location_id": asset.location.id,
                    "latitude": location.lat,
                    "longitude": location.lng,
                    "timestamp": location.timestamp,
                },
            },
            asset,
        )
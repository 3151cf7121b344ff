from datetime import datetime

import pytest

from pyrhouse.models import (
    Asset,
    BulkItemRequest,
    DeliveryLocation,
    EmergencyAssetRequest,
    ForeignKeyViolationError,
    ItemCategory,
    ItemRequest,
    Location,
    Transfer,
    UniqueViolationError,
)


def make_asset():
    return Asset(
        id=1,
        serial="SERIAL001",
        pyr_code="PYR-L1",
        status="available",
        origin="purchase",
        category=ItemCategory(id=4, pyr_id="L"),
        location=Location(id=1),
    )


def test_asset_to_dict_holds_nested_values():
    data = make_asset().to_dict()
    assert data["id"] == 1
    assert data["serial"] == "SERIAL001"
    assert data["pyr_code"] == "PYR-L1"
    assert data["category"]["pyr_id"] == "L"
    assert data["category"]["id"] == 4
    assert data["location"]["id"] == 1


def test_asset_to_dict_is_a_copy():
    asset = make_asset()
    data = asset.to_dict()
    data["category"]["pyr_id"] = "X"
    assert asset.category.pyr_id == "L"


def test_asset_without_serial():
    asset = Asset(id=2)
    assert asset.serial is None
    assert asset.to_dict()["serial"] is None


def test_item_request_defaults_to_no_serial():
    request = ItemRequest(location_id=1, status="available", category_id=4, origin="purchase")
    assert request.serial is None
    assert request.category_id == 4


def test_bulk_request_keeps_serials():
    request = BulkItemRequest(serials=["SERIAL001", "SERIAL002"], category_id=4)
    assert request.serials == ["SERIAL001", "SERIAL002"]
    assert BulkItemRequest().serials == []


@pytest.mark.parametrize("quantity", [0, -1])
def test_emergency_request_rejects_quantity_below_one(quantity):
    with pytest.raises(ValueError, match="quantity"):
        EmergencyAssetRequest(quantity=quantity, location_id=1, category_id=4, origin="purchase")


def test_emergency_request_accepts_positive_quantity():
    request = EmergencyAssetRequest(quantity=3, location_id=1, category_id=4, origin="purchase")
    assert request.quantity == 3
    assert request.origin == "purchase"


def test_transfers_do_not_share_collections():
    first, second = Transfer(id=1), Transfer(id=2)
    first.assets_collection.append(make_asset())
    assert second.assets_collection == []
    assert len(first.assets_collection) == 1


def test_delivery_location_holds_values():
    moment = datetime(2024, 7, 1, 12, 30)
    location = DeliveryLocation(lat=52.1, lng=21.0, timestamp=moment)
    assert (location.lat, location.lng, location.timestamp) == (52.1, 21.0, moment)


def test_violation_errors_carry_message():
    unique = UniqueViolationError("Duplicate serial number for asset")
    foreign = ForeignKeyViolationError("related items exist")
    assert str(unique) == "Duplicate serial number for asset"
    assert str(foreign) == "related items exist"
    assert isinstance(unique, Exception)
    assert not isinstance(unique, ForeignKeyViolationError)
    assert not isinstance(foreign, UniqueViolationError)
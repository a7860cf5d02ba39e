"""Tests for InventoryService against the in-memory fake store."""

import asyncio
import uuid

import pytest

from core.exceptions import (
    EmptyStore,
    ExpiryUnchanged,
    InvalidIdentifier,
    NotFound,
    StoreError,
    ValidationError,
)
from core.inventory import InventoryService, parse_item_id
from schemas.food import FoodItemCreate
from tests.fakes import FailingFoodStore, FakeFoodStore


def run(coro):
    return asyncio.run(coro)


def _setup():
    store = FakeFoodStore()
    return InventoryService(store), store


def _payload(**overrides):
    data = {"name": "Milk", "brands": "Acme", "quantity": "1L"}
    data.update(overrides)
    return FoodItemCreate(**data)


class TestParseItemId:

    def test_accepts_uuid_string(self):
        uid = uuid.uuid4()
        assert parse_item_id(str(uid)) == uid

    def test_passes_uuid_through(self):
        uid = uuid.uuid4()
        assert parse_item_id(uid) is uid

    @pytest.mark.parametrize("bad", ["", "123", "not-a-uuid", "all", "zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidIdentifier):
            parse_item_id(bad)


class TestAddItem:

    def test_trims_required_fields(self):
        service, _ = _setup()
        item = run(service.add_item(_payload(name="  Milk ", brands=" Acme", quantity=" 1L  ")))
        assert (item["name"], item["brand"], item["quantity"]) == ("Milk", "Acme", "1L")

    def test_assigns_id_and_persists(self):
        service, store = _setup()
        item = run(service.add_item(_payload()))
        assert item["id"] == store.issued_ids[0]
        assert len(store) == 1

    def test_returns_stored_record_not_input(self):
        service, _ = _setup()
        item = run(service.add_item(_payload()))
        # stock comes from the store's default, not from the request
        assert item["stock"] == 1

    def test_optional_fields_omitted_when_absent(self):
        service, _ = _setup()
        item = run(service.add_item(_payload()))
        for field in ("categories", "ingredients", "image_url", "source_url", "expiry_date"):
            assert field not in item

    def test_optional_fields_stored_as_is(self):
        service, _ = _setup()
        item = run(service.add_item(_payload(
            categories=" Dairies ",
            imageUrl="http://img/1.jpg",
            url="http://off/1",
            expiryDate="2026-12-01",
        )))
        assert item["categories"] == " Dairies "
        assert item["image_url"] == "http://img/1.jpg"
        assert item["source_url"] == "http://off/1"
        assert item["expiry_date"] == "2026-12-01"

    def test_multi_brand_kept_as_single_string(self):
        service, _ = _setup()
        item = run(service.add_item(_payload(brands="Acme, Foo Corp")))
        assert item["brand"] == "Acme, Foo Corp"

    def test_numeric_quantity_descriptor_becomes_text(self):
        service, _ = _setup()
        item = run(service.add_item(_payload(quantity=500)))
        assert item["quantity"] == "500"

    def test_missing_name_reports_field_map(self):
        service, store = _setup()
        with pytest.raises(ValidationError) as exc:
            run(service.add_item(_payload(name="   ")))
        assert exc.value.fields == {"name": True, "brand": False, "quantity": False}
        assert len(store) == 0

    def test_all_required_missing(self):
        service, _ = _setup()
        with pytest.raises(ValidationError) as exc:
            run(service.add_item(FoodItemCreate()))
        assert exc.value.fields == {"name": True, "brand": True, "quantity": True}

    def test_negative_stock_rejected(self):
        service, store = _setup()
        with pytest.raises(ValidationError):
            run(service.add_item(_payload(stock=-1)))
        assert len(store) == 0

    def test_explicit_stock_kept(self):
        service, _ = _setup()
        item = run(service.add_item(_payload(stock=6)))
        assert item["stock"] == 6


class TestGetItem:

    def test_returns_record(self):
        service, _ = _setup()
        added = run(service.add_item(_payload()))
        assert run(service.get_item(str(added["id"]))) == added

    def test_unknown_id_is_not_found(self):
        service, _ = _setup()
        with pytest.raises(NotFound):
            run(service.get_item(str(uuid.uuid4())))

    def test_malformed_id_checked_before_lookup(self):
        service = InventoryService(FailingFoodStore())
        with pytest.raises(InvalidIdentifier):
            run(service.get_item("nope"))


class TestListInventory:

    def test_empty_store(self):
        service, _ = _setup()
        assert run(service.list_inventory()) == []

    def test_counts_duplicates(self):
        service, _ = _setup()
        for _ in range(3):
            run(service.add_item(_payload(name=" Milk ")))
        run(service.add_item(_payload(name="Bread", brands="Bakery")))

        view = run(service.list_inventory())
        assert [(e["name"], e["count"]) for e in view] == [("Milk", 3), ("Bread", 1)]

    def test_last_record_represents_group(self):
        service, store = _setup()
        run(service.add_item(_payload(expiryDate="2026-01-01")))
        run(service.add_item(_payload(expiryDate="2026-03-01")))
        view = run(service.list_inventory())
        assert view[0]["id"] == store.issued_ids[-1]
        assert view[0]["expiry_date"] == "2026-03-01"

    def test_store_failure_propagates(self):
        service = InventoryService(FailingFoodStore())
        with pytest.raises(StoreError):
            run(service.list_inventory())


class TestUpdateExpiry:

    def test_sets_only_expiry(self):
        service, _ = _setup()
        added = run(service.add_item(_payload(categories="Dairies")))
        run(service.update_expiry(str(added["id"]), "2026-05-01"))

        item = run(service.get_item(added["id"]))
        assert item["expiry_date"] == "2026-05-01"
        assert {k: v for k, v in item.items() if k != "expiry_date"} == added

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_expiry_rejected(self, value):
        service, _ = _setup()
        added = run(service.add_item(_payload()))
        with pytest.raises(ValidationError):
            run(service.update_expiry(str(added["id"]), value))

    def test_unknown_id_is_not_found(self):
        service, _ = _setup()
        with pytest.raises(NotFound) as exc:
            run(service.update_expiry(str(uuid.uuid4()), "2026-05-01"))
        assert not isinstance(exc.value, ExpiryUnchanged)

    def test_same_value_is_unchanged(self):
        service, _ = _setup()
        added = run(service.add_item(_payload(expiryDate="2026-05-01")))
        with pytest.raises(ExpiryUnchanged):
            run(service.update_expiry(str(added["id"]), "2026-05-01"))

    def test_malformed_id(self):
        service, _ = _setup()
        with pytest.raises(InvalidIdentifier):
            run(service.update_expiry("bad-id", "2026-05-01"))


class TestUpdateQuantity:

    def test_positive_overwrites_stock(self):
        service, _ = _setup()
        added = run(service.add_item(_payload()))
        change = run(service.update_quantity(str(added["id"]), 4))
        assert not change.deleted
        assert run(service.get_item(added["id"]))["stock"] == 4

    def test_zero_deletes_record(self):
        service, store = _setup()
        added = run(service.add_item(_payload()))
        change = run(service.update_quantity(str(added["id"]), 0))
        assert change.deleted
        assert len(store) == 0
        with pytest.raises(NotFound):
            run(service.get_item(added["id"]))

    def test_negative_rejected_and_record_untouched(self):
        service, _ = _setup()
        added = run(service.add_item(_payload(stock=3)))
        with pytest.raises(ValidationError):
            run(service.update_quantity(str(added["id"]), -2))
        assert run(service.get_item(added["id"]))["stock"] == 3

    @pytest.mark.parametrize("quantity", [0, 5])
    def test_unknown_id_is_not_found(self, quantity):
        service, _ = _setup()
        with pytest.raises(NotFound):
            run(service.update_quantity(str(uuid.uuid4()), quantity))

    def test_missing_quantity_rejected(self):
        service, _ = _setup()
        with pytest.raises(ValidationError):
            run(service.update_quantity(str(uuid.uuid4()), None))


class TestDelete:

    def test_delete_item(self):
        service, store = _setup()
        added = run(service.add_item(_payload()))
        run(service.delete_item(str(added["id"])))
        assert len(store) == 0

    def test_delete_unknown(self):
        service, _ = _setup()
        with pytest.raises(NotFound):
            run(service.delete_item(str(uuid.uuid4())))

    def test_delete_malformed(self):
        service, _ = _setup()
        with pytest.raises(InvalidIdentifier):
            run(service.delete_item("123"))

    def test_ids_not_reused_after_delete(self):
        service, store = _setup()
        first = run(service.add_item(_payload()))
        run(service.delete_item(first["id"]))
        second = run(service.add_item(_payload()))
        assert second["id"] != first["id"]

    def test_delete_all_then_again(self):
        service, store = _setup()
        for _ in range(3):
            run(service.add_item(_payload()))
        assert run(service.delete_all()) == 3
        assert len(store) == 0
        with pytest.raises(EmptyStore):
            run(service.delete_all())

    def test_empty_store_is_a_not_found(self):
        service, _ = _setup()
        with pytest.raises(NotFound):
            run(service.delete_all())

"""
Inventory item lifecycle: create, read, list, update and delete food items.

A record moves absent -> active on create, stays active across expiry and
stock updates, and goes back to absent on delete, on bulk delete, or when
its stock is set to zero. There is no soft-deleted state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

import structlog

from core.aggregation import aggregate_inventory
from core.exceptions import (
    EmptyStore,
    ExpiryUnchanged,
    InvalidIdentifier,
    NotFound,
    StoreError,
    ValidationError,
)
from db.store import FoodStore
from schemas.food import FoodItemCreate

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("name", "brand", "quantity")


def parse_item_id(item_id: Union[str, UUID]) -> UUID:
    if isinstance(item_id, UUID):
        return item_id
    try:
        return UUID(str(item_id))
    except (TypeError, ValueError):
        raise InvalidIdentifier(item_id) from None


def _trimmed(value: Optional[str]) -> str:
    return value.strip() if value else ""


@dataclass
class StockChange:
    item_id: UUID
    deleted: bool
    stock: int


class InventoryService:

    def __init__(self, store: FoodStore) -> None:
        self.store = store

    async def add_item(self, payload: FoodItemCreate) -> Dict[str, Any]:
        """Validate and persist a new record, then return it as stored."""
        values = payload.model_dump(exclude_none=True)
        for field in REQUIRED_FIELDS:
            values[field] = _trimmed(values.get(field))

        missing = {field: not values[field] for field in REQUIRED_FIELDS}
        if any(missing.values()):
            raise ValidationError("Missing required fields", fields=missing)
        if values.get("stock") is not None and values["stock"] < 0:
            raise ValidationError("Stock cannot be negative")

        logger.info(
            "adding_food_item",
            name=values["name"],
            brand=values["brand"],
            quantity=values["quantity"],
            expiry_date=values.get("expiry_date"),
        )
        item_id = await self.store.insert(values)

        item = await self.store.get(item_id)
        if item is None:
            raise StoreError(f"Product {item_id} was not readable after insert")
        logger.info("food_item_added", item_id=str(item_id))
        return item.to_dict

    async def get_item(self, item_id: Union[str, UUID]) -> Dict[str, Any]:
        uid = parse_item_id(item_id)
        item = await self.store.get(uid)
        if item is None:
            raise NotFound(f"Product {uid} not found")
        return item.to_dict

    async def list_inventory(self) -> List[Dict[str, Any]]:
        records = await self.store.scan()
        return aggregate_inventory(r.to_dict for r in records)

    async def update_expiry(self, item_id: Union[str, UUID], expiry_date: Optional[str]) -> None:
        if not _trimmed(expiry_date):
            raise ValidationError("Expiry date is required")
        uid = parse_item_id(item_id)

        item = await self.store.get(uid)
        if item is None:
            raise NotFound(f"Product {uid} not found")
        if item.expiry_date == expiry_date:
            raise ExpiryUnchanged(f"Product {uid} already expires on {expiry_date}")

        matched = await self.store.update(uid, {"expiry_date": expiry_date})
        if not matched:
            # removed between the lookup and the write
            raise NotFound(f"Product {uid} not found")
        logger.info("expiry_date_updated", item_id=str(uid), expiry_date=expiry_date)

    async def update_quantity(self, item_id: Union[str, UUID], quantity: Optional[int]) -> StockChange:
        """Set the on-hand stock. Zero removes the record entirely."""
        if quantity is None:
            raise ValidationError("Quantity is required")
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        uid = parse_item_id(item_id)

        if quantity == 0:
            if not await self.store.delete(uid):
                raise NotFound(f"Product {uid} not found")
            logger.info("food_item_deleted_at_zero_stock", item_id=str(uid))
            return StockChange(item_id=uid, deleted=True, stock=0)

        if not await self.store.update(uid, {"stock": quantity}):
            raise NotFound(f"Product {uid} not found")
        logger.info("stock_updated", item_id=str(uid), stock=quantity)
        return StockChange(item_id=uid, deleted=False, stock=quantity)

    async def delete_item(self, item_id: Union[str, UUID]) -> None:
        uid = parse_item_id(item_id)
        if not await self.store.delete(uid):
            raise NotFound(f"Product {uid} not found")
        logger.info("food_item_deleted", item_id=str(uid))

    async def delete_all(self) -> int:
        removed = await self.store.delete_all()
        if removed == 0:
            raise EmptyStore("No products to delete")
        logger.info("inventory_cleared", deleted_count=removed)
        return removed

"""Keyed record storage for food items.

A thin layer over one ``AsyncSession``: every write commits on its own, and
any SQLAlchemy failure surfaces as ``StoreError``.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StoreError
from db.food_item import FoodItem

logger = structlog.get_logger(__name__)


class FoodStore:

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("store_operation_failed", action=action, exc_info=True)
            raise StoreError(f"Failed to {action}") from e

    async def insert(self, values: Dict[str, Any]) -> UUID:
        async with self._guard("insert food item"):
            item = FoodItem(**values)
            self.session.add(item)
            await self.session.commit()
            return item.id

    async def get(self, item_id: UUID) -> Optional[FoodItem]:
        async with self._guard("fetch food item"):
            # populate_existing forces a round trip instead of the identity map
            return await self.session.get(FoodItem, item_id, populate_existing=True)

    async def update(self, item_id: UUID, values: Dict[str, Any]) -> int:
        """Overwrite the given columns; returns the number of rows matched."""
        async with self._guard("update food item"):
            res = await self.session.execute(
                update(FoodItem).where(FoodItem.id == item_id).values(**values)
            )
            await self.session.commit()
            return int(res.rowcount or 0)

    async def delete(self, item_id: UUID) -> bool:
        async with self._guard("delete food item"):
            res = await self.session.execute(delete(FoodItem).where(FoodItem.id == item_id))
            await self.session.commit()
            return bool(res.rowcount)

    async def delete_all(self) -> int:
        async with self._guard("delete inventory"):
            res = await self.session.execute(delete(FoodItem))
            await self.session.commit()
            return int(res.rowcount or 0)

    async def scan(self) -> List[FoodItem]:
        async with self._guard("fetch inventory"):
            res = await self.session.execute(select(FoodItem))
            return list(res.scalars().all())

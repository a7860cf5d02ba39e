"""
Delete ALL food items from the inventory.

Run from the backend directory:
  PYTHONPATH=. python scripts/reset_inventory.py
"""

from __future__ import annotations

import asyncio

from db.database import async_session_maker, create_db_and_tables
from db.store import FoodStore


async def main() -> None:
    await create_db_and_tables()
    async with async_session_maker() as db:
        deleted_n = await FoodStore(db).delete_all()
        print(f"Deleted food_items: {deleted_n}")


if __name__ == "__main__":
    asyncio.run(main())

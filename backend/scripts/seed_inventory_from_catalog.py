"""
Seed the inventory from an Open Food Facts search.

Candidates go through InventoryService, so hits missing a real name, brand
or quantity are skipped the same way the API would reject them.

Usage (from the backend directory):
  PYTHONPATH=. python scripts/seed_inventory_from_catalog.py nutella --limit 5
  PYTHONPATH=. python scripts/seed_inventory_from_catalog.py "oat milk" --expiry 2026-12-31
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Dict, Optional

from core.catalog import CANDIDATE_FIELDS, CatalogClient
from core.exceptions import ValidationError
from core.inventory import InventoryService
from core.logging import configure_logging
from db.database import async_session_maker, create_db_and_tables
from db.store import FoodStore
from schemas.food import FoodItemCreate

PLACEHOLDERS = {placeholder for _, placeholder in CANDIDATE_FIELDS.values()}


def _candidate_to_payload(candidate: Dict[str, str], expiry: Optional[str]) -> FoodItemCreate:
    # Placeholder text stands for "missing" and must not be stored as data
    data = {k: v for k, v in candidate.items() if v not in PLACEHOLDERS}
    if expiry:
        data["expiryDate"] = expiry
    return FoodItemCreate(**data)


async def main(term: str, limit: int, expiry: Optional[str]) -> None:
    configure_logging()
    await create_db_and_tables()

    # requests blocks; keep it off the event loop
    candidates = await asyncio.to_thread(CatalogClient().search, term)
    if not candidates:
        print(f"No products found for {term!r}")
        return

    added = skipped = 0
    async with async_session_maker() as db:
        service = InventoryService(FoodStore(db))
        for candidate in candidates[:limit]:
            try:
                item = await service.add_item(_candidate_to_payload(candidate, expiry))
            except ValidationError as e:
                print(f"  [skip] {candidate['name']}: {e.message} {e.fields or ''}")
                skipped += 1
                continue
            print(f"  [add] {item['name']} / {item['brand']} ({item['quantity']})")
            added += 1

    print(f"Added: {added}, skipped: {skipped}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the food inventory from Open Food Facts")
    parser.add_argument("term", help="free-text search term")
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--expiry", default=None, help="expiry date to set on every added item")
    args = parser.parse_args()
    asyncio.run(main(args.term, args.limit, args.expiry))

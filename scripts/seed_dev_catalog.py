"""Seed script for populating a development catalog and user roles."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy import select

from inventory_ledger.core.config import settings
from inventory_ledger.db.session_async import AsyncSessionLocal
from inventory_ledger.models.catalog import CatalogItem
from inventory_ledger.schemas.catalog import CatalogItemCreate
from inventory_ledger.schemas.user import UserRoleUpsert
from inventory_ledger.services import catalog_service, user_service


@dataclass(frozen=True, slots=True)
class ItemSeed:
    name: str
    price: float
    available_quantity: int
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UserSeed:
    user_id: str
    role: str
    email: str | None = None
    name: str | None = None


ITEMS: tuple[ItemSeed, ...] = (
    ItemSeed("Widget", 5.0, 10, {"category": "hardware"}),
    ItemSeed("Gadget", 12.5, 40, {"category": "hardware", "color": "black"}),
    ItemSeed("Sprocket", 0.75, 500, {"category": "parts"}),
    ItemSeed("Gizmo", 99.0, 0, {"category": "electronics", "discontinued": True}),
)

USERS: tuple[UserSeed, ...] = (
    UserSeed("dev-admin", "admin", "admin@example.com", "Dev Admin"),
    UserSeed("dev-clerk", "clerk", "clerk@example.com", "Dev Clerk"),
)


async def _seed_items(db, logger: logging.Logger) -> tuple[int, int]:
    existing = set((await db.execute(select(CatalogItem.name))).scalars().all())
    created = skipped = 0
    for seed in ITEMS:
        if seed.name in existing:
            skipped += 1
            continue
        payload = CatalogItemCreate(
            name=seed.name,
            price=seed.price,
            availableQuantity=seed.available_quantity,
            **seed.extra,
        )
        await catalog_service.create_item(db, payload)
        logger.debug("Created catalog item %s", seed.name)
        created += 1
    return created, skipped


async def _seed_users(db) -> int:
    for seed in USERS:
        await user_service.upsert_role(
            db,
            UserRoleUpsert(userId=seed.user_id, role=seed.role, email=seed.email, name=seed.name),
        )
    return len(USERS)


async def seed_dev_catalog() -> None:
    logger = logging.getLogger("seed_dev_catalog")
    logger.info("Seeding development catalog into %s", settings.ASYNC_DATABASE_URL)
    async with AsyncSessionLocal() as session:
        created, skipped = await _seed_items(session, logger)
        users = await _seed_users(session)
    logger.info("Seed completed: %s items created, %s skipped, %s users upserted", created, skipped, users)


async def main() -> None:
    await seed_dev_catalog()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

"""Seed script: load the sample fleet into the Elix key-value store.

Creates:
1. Three sample assets (HM-001, HM-002, HVAC-001)
2. Two predictive alerts against them (PA-001, PA-002)

Idempotent: safe to run multiple times; it skips if HM-001 already exists.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio
import sys

from sqlalchemy.ext.asyncio import AsyncSession

from src.demo.dataset import SAMPLE_ASSETS, load_dataset, sample_dataset
from src.repositories.assets import AssetRepository
from src.repositories.kv_store import KVStore

SENTINEL_ASSET_ID = SAMPLE_ASSETS[0]["id"]


async def seed_sample(session: AsyncSession) -> dict:
    """Load the sample fleet unless it is already present.

    Never clears existing records: unlike POST /demo/init-sample, seeding
    an already-populated store is a no-op.
    """
    store = KVStore(session)
    if await AssetRepository(store).get(SENTINEL_ASSET_ID) is not None:
        return {"created": False, "assets": 0, "alerts": 0, "workOrders": 0}

    assets, alerts, work_orders = sample_dataset()
    stats = await load_dataset(
        store, assets=assets, alerts=alerts, work_orders=work_orders, replace=False,
    )
    return {"created": True, **stats.to_dict()}


async def _run_seed() -> None:
    """Run the seed against the real database (idempotent)."""
    from src.db.session import async_session_factory

    async with async_session_factory() as session:
        result = await seed_sample(session)

        if not result["created"]:
            print(f"Sample data already seeded ({SENTINEL_ASSET_ID} exists). Skipping.")
            return

        await session.commit()

        print("Seed complete.")
        print(f"  Assets:       {result['assets']}")
        print(f"  Alerts:       {result['alerts']}")
        print(f"  Work orders:  {result['workOrders']}")


if __name__ == "__main__":
    asyncio.run(_run_seed())


def __getattr__(name: str):  # type: ignore[misc]
    """Allow `python -m scripts.seed` to work."""
    if name == "__main__":
        asyncio.run(_run_seed())
        sys.exit(0)
    raise AttributeError(name)

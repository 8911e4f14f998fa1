"""Key-value store adapter over the ``kv_store`` table.

The adapter only calls add()/flush()/delete(); it never commits.
The session dependency handles commit/rollback (Unit-of-Work).
Store errors (SQLAlchemyError) propagate unchanged; nothing is retried.
"""

import copy
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import KVStoreRow


class KVStore:
    """get / set / prefix-scan over JSON values keyed by string.

    Values are copied on the way in and out: JSON columns do not track
    in-place mutation, so a caller editing a fetched dict must not share it
    with the row.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> dict[str, Any] | None:
        row = await self._session.get(KVStoreRow, key)
        return None if row is None else copy.deepcopy(row.value)

    async def set(self, key: str, value: dict[str, Any]) -> None:
        await self._put(key, value)
        await self._session.flush()

    async def mset(self, items: dict[str, dict[str, Any]]) -> None:
        for key, value in items.items():
            await self._put(key, value)
        await self._session.flush()

    async def delete(self, key: str) -> bool:
        """Remove a key. Returns False when it did not exist."""
        row = await self._session.get(KVStoreRow, key)
        if row is None:
            return False
        await self._session.delete(row)
        await self._session.flush()
        return True

    async def scan_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        """All values whose key starts with ``prefix``, ordered by key.

        LIKE wildcards in the prefix are escaped, so ``work_order:`` does not
        match ``workXorder:``.
        """
        result = await self._session.execute(
            select(KVStoreRow)
            .where(KVStoreRow.key.startswith(prefix, autoescape=True))
            .order_by(KVStoreRow.key)
        )
        return [copy.deepcopy(row.value) for row in result.scalars().all()]

    async def delete_by_prefix(self, prefix: str) -> int:
        """Remove every key under ``prefix``. Returns the number removed."""
        result = await self._session.execute(
            select(KVStoreRow).where(KVStoreRow.key.startswith(prefix, autoescape=True))
        )
        rows = result.scalars().all()
        for row in rows:
            await self._session.delete(row)
        await self._session.flush()
        return len(rows)

    async def _put(self, key: str, value: dict[str, Any]) -> None:
        stored = copy.deepcopy(value)
        row = await self._session.get(KVStoreRow, key)
        if row is None:
            self._session.add(KVStoreRow(key=key, value=stored))
        else:
            row.value = stored

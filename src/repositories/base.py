"""Typed record repositories over the key-value store.

Each record type owns a key prefix; a record with id ``X`` lives under
``<prefix>X``. Repositories validate on the way out so callers always see
record models, never raw dicts.
"""

from typing import ClassVar, Generic, TypeVar

from src.models.common import ElixRecord
from src.repositories.kv_store import KVStore

T = TypeVar("T", bound=ElixRecord)


class RecordRepository(Generic[T]):
    """Base repository for one key prefix."""

    prefix: ClassVar[str]
    model: type[T]

    def __init__(self, store: KVStore) -> None:
        self._store = store

    def key_for(self, record_id: str) -> str:
        return f"{self.prefix}{record_id}"

    async def get(self, record_id: str) -> T | None:
        raw = await self._store.get(self.key_for(record_id))
        return None if raw is None else self.model.model_validate(raw)

    async def save(self, record: T) -> T:
        await self._store.set(self.key_for(record.id), record.to_record())
        return record

    async def save_many(self, records: list[T]) -> None:
        await self._store.mset({self.key_for(r.id): r.to_record() for r in records})

    async def delete(self, record_id: str) -> bool:
        return await self._store.delete(self.key_for(record_id))

    async def list_all(self) -> list[T]:
        return [self.model.model_validate(raw) for raw in await self._store.scan_by_prefix(self.prefix)]

    async def clear(self) -> int:
        return await self._store.delete_by_prefix(self.prefix)

# app/db/kv_store.py
"""
Flat string key-value store for quit dates and JSON-encoded tracker lists.

Writers to the same key are serialised with a per-key asyncio.Lock, so a
value is never interleaved; the last write wins.
"""
import asyncio
import weakref
from typing import Callable, Dict, MutableMapping, Optional

from ..utils.datetime_utils import now_utc


def _check_value(key: str, value) -> None:
    if not isinstance(value, str):
        raise TypeError(f"value for {key!r} must be str, got {type(value).__name__}")


class KeyValueStore:
    def __init__(self) -> None:
        # a lock lives only while some coroutine holds or awaits it
        self._locks: MutableMapping[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def get(self, key: str) -> Optional[str]:
        return await self._get(key)

    async def set(self, key: str, value: str) -> None:
        _check_value(key, value)
        async with self._lock_for(key):
            await self._set(key, value)

    async def delete(self, key: str) -> None:
        async with self._lock_for(key):
            await self._delete(key)

    async def update(self, key: str, fn: Callable[[Optional[str]], Optional[str]]) -> Optional[str]:
        """
        Read-modify-write of one key under its lock. `fn` gets the current
        value (or None) and returns the new one; returning None deletes the key.
        """
        async with self._lock_for(key):
            new_value = fn(await self._get(key))
            if new_value is None:
                await self._delete(key)
            else:
                _check_value(key, new_value)
                await self._set(key, new_value)
            return new_value

    async def close(self) -> None:
        pass

    async def _get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def _set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def _delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self._data: Dict[str, str] = dict(initial or {})

    async def _get(self, key):
        return self._data.get(key)

    async def _set(self, key, value):
        self._data[key] = value

    async def _delete(self, key):
        self._data.pop(key, None)


class MongoKeyValueStore(KeyValueStore):
    """Documents are {_id: key, value: str, updated_at}."""

    def __init__(self, collection, client=None) -> None:
        super().__init__()
        self._collection = collection
        self._client = client

    async def _get(self, key):
        doc = await self._collection.find_one({"_id": key}, {"value": 1})
        if not doc:
            return None
        value = doc.get("value")
        return value if isinstance(value, str) else None

    async def _set(self, key, value):
        await self._collection.update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": now_utc()}},
            upsert=True,
        )

    async def _delete(self, key):
        await self._collection.delete_one({"_id": key})

    async def close(self):
        if self._client is not None:
            self._client.close()

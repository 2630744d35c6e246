import asyncio
import gc
import json

import pytest

from app.db.kv_store import MemoryKeyValueStore, MongoKeyValueStore


class SlowMemoryStore(MemoryKeyValueStore):
    """Yields to the loop between read and write so races would show up."""

    async def _get(self, key):
        value = await super()._get(key)
        await asyncio.sleep(0)
        return value


class FakeCollection:
    def __init__(self):
        self.docs = {}

    async def find_one(self, query, projection=None):
        return self.docs.get(query["_id"])

    async def update_one(self, query, update, upsert=False):
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"]})
        doc.update(update["$set"])

    async def delete_one(self, query):
        self.docs.pop(query["_id"], None)


def test_memory_store_get_set_delete():
    async def scenario():
        store = MemoryKeyValueStore()
        assert await store.get("quit_date:alcohol") is None
        await store.set("quit_date:alcohol", "2025-01-01T00:00:00Z")
        assert await store.get("quit_date:alcohol") == "2025-01-01T00:00:00Z"
        await store.delete("quit_date:alcohol")
        assert await store.get("quit_date:alcohol") is None

    asyncio.run(scenario())


def test_store_rejects_non_string_values():
    with pytest.raises(TypeError):
        asyncio.run(MemoryKeyValueStore().set("k", 5))


def test_concurrent_updates_to_one_key_do_not_lose_writes():
    async def scenario():
        store = SlowMemoryStore()

        def append(n):
            return lambda raw: json.dumps(json.loads(raw or "[]") + [n])

        await asyncio.gather(*(store.update("custom_entries", append(n)) for n in range(25)))
        return sorted(json.loads(await store.get("custom_entries")))

    assert asyncio.run(scenario()) == list(range(25))


def test_update_returning_none_deletes():
    async def scenario():
        store = MemoryKeyValueStore({"history:alcohol": "[3]"})
        await store.update("history:alcohol", lambda raw: None)
        return await store.get("history:alcohol")

    assert asyncio.run(scenario()) is None


def test_mongo_store_uses_key_as_document_id():
    async def scenario():
        collection = FakeCollection()
        store = MongoKeyValueStore(collection)
        await store.set("quit_date:smoking", "2025-02-01T08:00:00Z")
        doc = collection.docs["quit_date:smoking"]
        assert doc["value"] == "2025-02-01T08:00:00Z"
        assert "updated_at" in doc
        assert await store.get("quit_date:smoking") == "2025-02-01T08:00:00Z"
        await store.delete("quit_date:smoking")
        assert await store.get("quit_date:smoking") is None

    asyncio.run(scenario())


def test_mongo_store_ignores_non_string_values():
    async def scenario():
        collection = FakeCollection()
        collection.docs["k"] = {"_id": "k", "value": 12}
        return await MongoKeyValueStore(collection).get("k")

    assert asyncio.run(scenario()) is None


def test_idle_key_locks_are_released():
    async def scenario():
        store = MemoryKeyValueStore()
        await store.set("history:gone", "[3]")
        await store.delete("history:gone")
        await store.update("custom_entries", lambda raw: "[]")
        return store

    store = asyncio.run(scenario())
    gc.collect()
    assert "history:gone" not in store._locks
    assert "custom_entries" not in store._locks

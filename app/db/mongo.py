# app/db/mongo.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from ..config import Settings

logger = logging.getLogger(__name__)

KV_COLLECTION = "kv_store"


def connect(settings: Settings) -> AsyncIOMotorClient:
    if not settings.mongo_url:
        raise RuntimeError("MONGODB_URL env var is not set")
    return AsyncIOMotorClient(settings.mongo_url)


def kv_collection(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorCollection:
    return client[settings.mongo_db][KV_COLLECTION]


# Call once at startup; failures are logged, not fatal.
async def init_db_indexes(collection: AsyncIOMotorCollection) -> None:
    try:
        # keys live in _id, so only the housekeeping index is needed
        await collection.create_index("updated_at")
    except Exception:
        logger.exception("Index init error on %s", collection.name)

# app/state.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Request

from .config import Settings, load_settings
from .db.kv_store import KeyValueStore, MemoryKeyValueStore, MongoKeyValueStore
from .models.milestone_model import MilestoneDefinition
from .services.milestone_catalog import load_catalog

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything a request needs; built at startup, closed at shutdown."""
    settings: Settings
    store: KeyValueStore
    catalog: Tuple[MilestoneDefinition, ...]

    async def close(self) -> None:
        await self.store.close()


async def build_state(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> AppState:
    settings = settings or load_settings()
    # raises CatalogIntegrityViolation in debug mode
    catalog = load_catalog(strict=settings.debug)

    if store is None:
        if settings.store_backend == "mongo":
            from .db.mongo import connect, init_db_indexes, kv_collection

            client = connect(settings)
            collection = kv_collection(client, settings)
            await init_db_indexes(collection)
            store = MongoKeyValueStore(collection, client=client)
        else:
            store = MemoryKeyValueStore()
    logger.info("Store backend: %s, %d milestones loaded", type(store).__name__, len(catalog))
    return AppState(settings=settings, store=store, catalog=catalog)


def get_app_state(request: Request) -> AppState:
    state = getattr(request.app.state, "tracker", None)
    if state is None:
        raise RuntimeError("Application state is not initialised")
    return state

import os

import pytest
from fastapi.testclient import TestClient

# Never reach for a real Mongo from the test run
os.environ["STORE_BACKEND"] = "memory"

from app.config import Settings
from app.db.kv_store import MemoryKeyValueStore
from app.main import create_app


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def client(store):
    app = create_app(settings=Settings(store_backend="memory"), store=store)
    with TestClient(app) as c:
        yield c

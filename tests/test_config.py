import pytest

from app.config import load_settings


def test_mongo_backend_requires_url(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "mongo")
    monkeypatch.delenv("MONGODB_URL", raising=False)
    with pytest.raises(RuntimeError):
        load_settings()


def test_backend_defaults_follow_mongo_url(monkeypatch):
    monkeypatch.delenv("STORE_BACKEND", raising=False)
    monkeypatch.delenv("MONGODB_URL", raising=False)
    assert load_settings().store_backend == "memory"

    monkeypatch.setenv("MONGODB_URL", "mongodb://localhost:27017")
    assert load_settings().store_backend == "mongo"


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "redis")
    with pytest.raises(RuntimeError):
        load_settings()


def test_debug_flag_and_cors_list(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("APP_DEBUG", "yes")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    settings = load_settings()
    assert settings.debug is True
    assert settings.cors_origins == ["https://a.example", "https://b.example"]

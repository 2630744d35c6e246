# app/config.py
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in _TRUTHY


def _env_list(name: str, default: str = "") -> List[str]:
    return [s.strip() for s in (os.getenv(name, default) or "").split(",") if s.strip()]


@dataclass(frozen=True)
class Settings:
    mongo_url: Optional[str] = None
    mongo_db: str = "quit_tracker"
    store_backend: str = "memory"       # "mongo" | "memory"
    debug: bool = False                 # strict catalog checks, verbose logs
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    mongo_url = os.getenv("MONGODB_URL") or None
    # default to Mongo only when a URL is configured
    backend = (os.getenv("STORE_BACKEND") or ("mongo" if mongo_url else "memory")).strip().lower()
    if backend not in ("mongo", "memory"):
        raise RuntimeError(f"STORE_BACKEND must be 'mongo' or 'memory', got {backend!r}")
    if backend == "mongo" and not mongo_url:
        raise RuntimeError("MONGODB_URL env var is not set")

    return Settings(
        mongo_url=mongo_url,
        mongo_db=os.getenv("MONGODB_DB", "quit_tracker"),
        store_backend=backend,
        debug=_env_flag("APP_DEBUG"),
        log_level=(os.getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_origins=_env_list("CORS_ORIGINS", "*") or ["*"],
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

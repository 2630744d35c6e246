# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, configure_logging, load_settings
from app.db.kv_store import KeyValueStore
from app.state import build_state

# Routers
from app.routes.milestone import router as milestone_router
from app.routes.progress import router as progress_router
from app.routes.trackers import router as trackers_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    # ---------------------------
    # Lifecycle: state is built at startup and closed at shutdown
    # ---------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            app.state.tracker = await build_state(settings, store=store)
        except Exception:
            logger.exception("Startup failed")
            raise
        try:
            yield
        finally:
            await app.state.tracker.close()
            app.state.tracker = None

    # ---------------------------
    # Build FastAPI app
    # ---------------------------
    fastapi_app = FastAPI(title="Quit Tracker Backend", version="1.0.0", lifespan=lifespan)

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.get("/health")
    async def health_check():
        return {"status": "✅ OK", "message": "Quit tracker backend is running."}

    # ---------------------------
    # Routers
    # ---------------------------
    fastapi_app.include_router(milestone_router)
    fastapi_app.include_router(progress_router)
    fastapi_app.include_router(trackers_router)

    return fastapi_app


# ---------------------------
# Final ASGI app export
# ---------------------------
app = create_app()

# =======================================================================================
# securepass/main.py - FastAPI Application Entry Point
# =======================================================================================
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import config
from .api.routes.auth import router as auth_router
from .api.routes.passes import router as passes_router
from .api.routes.dashboard import router as dashboard_router
from .database import DatabaseManager, KeyValueStore
from .logging_config import setup_logging
from .models.schemas import HealthResponse
from .services.pass_service import PassLifecycleManager
from .services.plausibility_service import PlausibilityService


def build_manager(db_url: Optional[str] = None) -> PassLifecycleManager:
    """Wire the manager to the configured database and AI service."""
    store = KeyValueStore(DatabaseManager(db_url))
    checker = PlausibilityService()
    if not checker.is_configured:
        logger.warning("AI_API_KEY not set; pass requests will fail verification")
    return PassLifecycleManager(store, checker)


def create_app(manager: Optional[PassLifecycleManager] = None) -> FastAPI:
    setup_logging(config.LOG_LEVEL, debug=config.API_DEBUG)

    app = FastAPI(
        title="SecurePass Gate-Pass API",
        version="1.0.0",
        description="Visitor and gate-pass management with AI purpose screening",
        debug=config.API_DEBUG,
    )
    app.state.manager = manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(passes_router, prefix="/api", tags=["passes"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        current = app.state.manager
        if current is None:
            return HealthResponse(status="error", dataAvailable=False, message="Not initialised")
        try:
            current.store.db.fetch_one("SELECT 1")
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except Exception as e:
            return HealthResponse(status="error", dataAvailable=False, message=str(e))

    @app.on_event("startup")
    async def startup_event():
        if app.state.manager is None:
            app.state.manager = build_manager()
        logger.info("SecurePass API started")

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("securepass.main:app", host=config.API_HOST, port=config.API_PORT)

# backend/portfolio_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import crud
from .admin import router as admin_router
from .auth import router as auth_router
from .config import Settings, get_settings
from .database import Database, DatabaseUnavailable
from .portfolio import router as portfolio_router

logger = logging.getLogger(__name__)


def init_database(database: Database):
    """Create tables and convert legacy list columns. Safe to run repeatedly."""
    if not database.available:
        return
    try:
        database.create_all()
        db = database.session()
        try:
            crud.migrate_legacy_list_columns(db)
        finally:
            db.close()
    except Exception as e:
        logger.warning("[Database] Initialisation failed: %s", e)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    database = database or Database(settings.database_url, pool_pre_ping=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_database(database)
        yield
        database.dispose()

    app = FastAPI(title="Portfolio CMS API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Invalidate"],
    )

    @app.exception_handler(DatabaseUnavailable)
    async def database_unavailable_handler(request: Request, exc: DatabaseUnavailable):
        logger.error("Database unavailable for %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/health", tags=["system"])
    def health():
        return {"status": "ok", "database": database.available}

    # --- Include Routers ---
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"])
    app.include_router(admin_router, prefix="/admin", tags=["admin"])
    return app


app = create_app()

"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.api.v1.endpoints import health
from app.core.config import settings
from app.core.logger import logger, setup_logging
from app.db.database import Database
from app.middleware.correlation import CorrelationMiddleware

setup_logging(settings.LOG_LEVEL)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application. ``database`` is opened by the caller when given
    (tests); otherwise one is created from settings at start-up. Either way
    it is disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            echo=settings.DB_ECHO,
        )
        if settings.CREATE_TABLES_ON_STARTUP:
            db.create_all()
        app.state.database = db
        logger.info("%s started", settings.APP_NAME)
        try:
            yield
        finally:
            db.dispose()
            logger.info("%s stopped", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(api_router, prefix="/api")
    app.include_router(health.router, prefix="/health", tags=["Health"])

    # ── Middleware ────────────────────────────────────────────────────────────
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID"],
    )

    @app.get("/")
    def read_root():
        return {
            "message": f"{settings.APP_NAME} is running",
            "version": "1.0.0",
            "endpoints": {
                "health": "/health",
                "healthDb": "/health/db",
                "auth": "/api/auth",
                "cases": "/api/cases",
                "surveys": "/api/surveys",
                "activities": "/api/activities",
            },
        }

    return app


app = create_app()

"""
Edutrack API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           EDUTRACK API                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│   Middleware:   CORS → exception handlers                                   │
│                              │                                              │
│                              ▼                                              │
│   Routers:      Health │ Posts │ Best Practices │ Progress │ Admin          │
│                              │                                              │
│                              ▼                                              │
│   Dependencies: Auth (JWT) │ Services (AudienceService, Authoring)          │
│                              │                                              │
│                              ▼                                              │
│   Data source:  SqlContentDataSource (one session per fetch)                │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → logging configured, database connection verified
2. Application serves requests
3. Application stops → connection pool disposed

Usage:
======
    uvicorn edutrack.api.main:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edutrack.api.middleware import RequestContextMiddleware, setup_exception_handlers
from edutrack.api.routes import register_routes
from edutrack.config.settings import settings
from edutrack.shared.core.logging import logger
from edutrack.shared.db import close_db, init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup: verify the database connection.
    Shutdown: dispose of the connection pool.
    """
    logger.info(
        "Starting Edutrack API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )
    await init_db()

    yield

    logger.info("Shutting down Edutrack API")
    await close_db()


def create_application(use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        use_lifespan: Run database startup/shutdown hooks (tests disable it)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Targeted staff education posts with read tracking",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_exception_handlers(app)
    register_routes(app)

    return app


app = create_application()

"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /posts                  → Education posts
    /best-practices         → Best-practice posts
    /progress               → Caller's read progress
    /admin                  → Review queue, approval, deletion, dashboard

Usage:
======
    from edutrack.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from edutrack.api.handlers import (
    admin_handler,
    best_practice_handler,
    health_handler,
    posts_handler,
    progress_handler,
)
from edutrack.shared.schemas.common import ErrorResponse


# Error bodies documented on every authenticated router
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 503)
}


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        posts_handler.router,
        prefix="/posts",
        tags=["Education"],
        responses=ERROR_RESPONSES,
    )

    app.include_router(
        best_practice_handler.router,
        prefix="/best-practices",
        tags=["Best Practices"],
        responses=ERROR_RESPONSES,
    )

    app.include_router(
        progress_handler.router,
        prefix="/progress",
        tags=["Progress"],
        responses=ERROR_RESPONSES,
    )

    app.include_router(
        admin_handler.router,
        prefix="/admin",
        tags=["Admin"],
        responses=ERROR_RESPONSES,
    )

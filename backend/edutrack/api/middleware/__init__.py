"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling
- request_context: Request id bound to every log line

Usage:
======
    from edutrack.api.middleware import RequestContextMiddleware, setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)
"""

from edutrack.api.middleware.error_handler import setup_exception_handlers
from edutrack.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "setup_exception_handlers",
    "RequestContextMiddleware",
]

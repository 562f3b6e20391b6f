"""
API Handlers

Route handlers for the Edutrack API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from edutrack.api.handlers import (
    admin_handler,
    best_practice_handler,
    health_handler,
    posts_handler,
    progress_handler,
)

__all__ = [
    "admin_handler",
    "best_practice_handler",
    "health_handler",
    "posts_handler",
    "progress_handler",
]

"""
Database Module

Engine, session factory and lifecycle hooks for PostgreSQL.

    ┌──────────────────────┐      ┌────────────────────────┐      ┌────────────┐
    │ SqlContentDataSource │ ───► │ AsyncSessionLocal()    │ ───► │ PostgreSQL │
    │ (one session / call) │      │ pooled AsyncSession    │      │            │
    └──────────────────────┘      └────────────────────────┘      └────────────┘

Usage:
======
    from edutrack.shared.db import AsyncSessionLocal
    from edutrack.shared.repositories import SqlContentDataSource

    source = SqlContentDataSource(AsyncSessionLocal)
"""

from edutrack.shared.db.session import (
    AsyncSessionLocal,
    check_db,
    close_db,
    engine,
    init_db,
)

__all__ = [
    "AsyncSessionLocal",  # Session factory for the data source
    "check_db",  # Readiness probe
    "init_db",  # Verify connection on app startup
    "close_db",  # Dispose engine on app shutdown
    "engine",
]

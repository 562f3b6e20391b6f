"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from edutrack.config.settings import settings

    db_url = settings.DATABASE_URL
    allow_authoring = settings.ALLOW_MANAGER_AUTHORING
"""

from edutrack.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]

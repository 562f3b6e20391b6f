"""
Service Dependencies

FastAPI dependencies for service injection.

The data source is process-wide (it only holds the session factory);
services are created per request on top of it. Tests replace
`get_data_source` through `app.dependency_overrides` to run every endpoint
against an in-memory source.

Usage:
======
    from edutrack.api.dependencies.services import get_audience_service

    @router.get("")
    async def list_posts(
        current_user: CurrentUser,
        service: AudienceService = Depends(get_audience_service),
    ):
        return await service.list_visible_posts(current_user.id, current_user.role)
"""

from functools import lru_cache

from fastapi import Depends

from edutrack.shared.db import AsyncSessionLocal
from edutrack.shared.repositories.data_source import SqlContentDataSource
from edutrack.shared.services.audience_service import AudienceService
from edutrack.shared.services.authoring_service import ContentAuthoringService


@lru_cache
def get_data_source() -> SqlContentDataSource:
    """Process-wide PostgreSQL data source."""
    return SqlContentDataSource(AsyncSessionLocal)


async def get_audience_service(
    source: SqlContentDataSource = Depends(get_data_source),
) -> AudienceService:
    return AudienceService(source)


async def get_authoring_service(
    source: SqlContentDataSource = Depends(get_data_source),
) -> ContentAuthoringService:
    return ContentAuthoringService(source)

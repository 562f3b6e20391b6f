"""
Business Logic Services

Services load typed records through the injected data source, apply the
pure engine and the authoring rules, and raise domain exceptions.

Service Pattern:
================
    Handler → Service → AudienceDataSource / ContentStore → Repository → Database
                ↘ engine (pure)

Services should:
- Contain business logic and validation
- Never hold a session; the data source owns session lifetimes
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AudienceService: Visible listings, review queue, read tracking, progress
- ContentAuthoringService: Create, retarget, approve and delete posts
- ReadStateTracker: Read-state upsert and read maps

Usage:
======
    from edutrack.shared.services import AudienceService

    service = AudienceService(source)
    posts = await service.list_visible_posts(user_id, role)
"""

from edutrack.shared.services.read_state_service import ReadStateTracker, build_read_map
from edutrack.shared.services.audience_service import AudienceService
from edutrack.shared.services.authoring_service import (
    ContentAuthoringService,
    ContentDraft,
    TargetingSelection,
    validate_targeting,
)

__all__ = [
    "ReadStateTracker",
    "build_read_map",
    "AudienceService",
    "ContentAuthoringService",
    "ContentDraft",
    "TargetingSelection",
    "validate_targeting",
]

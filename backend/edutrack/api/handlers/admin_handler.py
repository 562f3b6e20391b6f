"""
Admin Handler

Review queue, approval, deletion and the per-manager progress dashboard.
Every endpoint requires an admin token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from edutrack.api.dependencies import AdminUser
from edutrack.api.dependencies.services import get_audience_service, get_authoring_service
from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.schemas.content import PostResponse, ReviewQueueResponse
from edutrack.shared.schemas.progress import ProgressOverviewResponse
from edutrack.shared.services.audience_service import AudienceService
from edutrack.shared.services.authoring_service import ContentAuthoringService


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# REVIEW QUEUE
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/review", response_model=ReviewQueueResponse)
async def list_review_queue(
    admin: AdminUser,
    audience_service: AudienceService = Depends(get_audience_service),
):
    """List pending education posts, newest first, regardless of targeting."""
    items = await audience_service.list_pending_for_review()
    return ReviewQueueResponse(
        items=[PostResponse.from_record(item) for item in items],
        total=len(items),
    )


@router.post("/review/{content_id}/approve", response_model=PostResponse)
async def approve_post(
    content_id: UUID,
    admin: AdminUser,
    authoring_service: ContentAuthoringService = Depends(get_authoring_service),
):
    """Approve a pending post; 409 if it is already approved."""
    item = await authoring_service.approve(admin, content_id)
    return PostResponse.from_record(item)


@router.delete("/posts/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    content_id: UUID,
    admin: AdminUser,
    authoring_service: ContentAuthoringService = Depends(get_authoring_service),
):
    """
    Delete a post of either collection with its targeting and read states.

    Deleting a pending post rejects the submission.
    """
    await authoring_service.delete_item(admin, content_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ═══════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/progress", response_model=ProgressOverviewResponse)
async def get_progress_overview(
    admin: AdminUser,
    collection: ContentCollection = Query(ContentCollection.EDUCATION),
    audience_service: AudienceService = Depends(get_audience_service),
):
    """Read progress of every manager, ordered by username."""
    rows = await audience_service.compute_progress_overview(collection)
    return ProgressOverviewResponse.from_rows(collection, rows)

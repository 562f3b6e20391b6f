"""
Progress Handler

Read progress of the caller.
"""

from fastapi import APIRouter, Depends, Query

from edutrack.api.dependencies import CurrentUser
from edutrack.api.dependencies.services import get_audience_service
from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.schemas.progress import ProgressResponse
from edutrack.shared.services.audience_service import AudienceService


router = APIRouter()


@router.get("/me", response_model=ProgressResponse)
async def get_my_progress(
    current_user: CurrentUser,
    collection: ContentCollection = Query(
        ContentCollection.EDUCATION,
        description="Collection to report on",
    ),
    audience_service: AudienceService = Depends(get_audience_service),
):
    """
    Overall and per-category progress over the posts visible to the caller.

    Posts without a category are counted in the 개인_피드백 bucket.
    """
    report = await audience_service.compute_progress(current_user.id, collection)
    return ProgressResponse.from_report(collection, report)

"""
Posts Handler

Listing, detail, read acknowledgment, authoring and retargeting of posts.

Education posts (/posts) and best-practice posts (/best-practices) share
one endpoint set; `create_posts_router(collection)` builds a router bound to
one collection.

ARCHITECTURE:
=============
    Handler → AudienceService / ContentAuthoringService → AudienceDataSource

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Visibility, approval and role rules live in the services.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from edutrack.api.dependencies import CurrentUser
from edutrack.api.dependencies.services import get_audience_service, get_authoring_service
from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.schemas.content import (
    CreatePostRequest,
    PostListResponse,
    PostResponse,
    TargetingRequest,
    VisiblePostResponse,
)
from edutrack.shared.services.audience_service import AudienceService
from edutrack.shared.services.authoring_service import (
    ContentAuthoringService,
    ContentDraft,
    TargetingSelection,
)


def _selection(request: TargetingRequest) -> TargetingSelection:
    return TargetingSelection(
        targeting_type=request.targeting_type,
        group_names=request.group_names,
        user_ids=request.user_ids,
    )


def create_posts_router(collection: ContentCollection) -> APIRouter:
    """
    Build the post endpoints for one collection.

    Args:
        collection: Collection every endpoint of the router operates on
    """
    router = APIRouter()

    @router.get("", response_model=PostListResponse)
    async def list_posts(
        current_user: CurrentUser,
        audience_service: AudienceService = Depends(get_audience_service),
    ):
        """
        List posts visible to the caller, newest first, with read flags.

        Pending posts never appear here, not even for admins.
        """
        posts = await audience_service.list_visible_posts(
            current_user.id, current_user.role, collection
        )
        items = [VisiblePostResponse.from_visible(post) for post in posts]

        return PostListResponse(
            items=items,
            total=len(items),
            unread_count=audience_service.count_unread(posts),
        )

    @router.get("/{content_id}", response_model=VisiblePostResponse)
    async def get_post(
        content_id: UUID,
        current_user: CurrentUser,
        audience_service: AudienceService = Depends(get_audience_service),
    ):
        """Get one post; 404 when it is missing or not visible to the caller."""
        post = await audience_service.get_visible_post(
            current_user.id, current_user.role, content_id, collection
        )
        return VisiblePostResponse.from_visible(post)

    @router.post("/{content_id}/read", status_code=status.HTTP_204_NO_CONTENT)
    async def mark_post_read(
        content_id: UUID,
        current_user: CurrentUser,
        audience_service: AudienceService = Depends(get_audience_service),
    ):
        """
        Acknowledge a page view.

        Answers 204 even when the write could not be stored; the read state
        then simply does not advance. Marks on posts outside the caller's
        audience are harmless: progress only counts visible posts.
        """
        await audience_service.mark_read(current_user.id, content_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
    async def create_post(
        request: CreatePostRequest,
        current_user: CurrentUser,
        authoring_service: ContentAuthoringService = Depends(get_authoring_service),
    ):
        """
        Create a post.

        Admin posts are published immediately; manager submissions to the
        education collection wait for review.
        """
        item = await authoring_service.create_item(
            current_user,
            collection,
            ContentDraft(
                title=request.title,
                body=request.body,
                category=request.category,
                targeting=_selection(request.targeting),
            ),
        )
        return PostResponse.from_record(item)

    @router.put("/{content_id}/targeting", response_model=PostResponse)
    async def replace_post_targeting(
        content_id: UUID,
        request: TargetingRequest,
        current_user: CurrentUser,
        authoring_service: ContentAuthoringService = Depends(get_authoring_service),
    ):
        """Replace the post's targeting (admin only)."""
        item = await authoring_service.replace_targeting(
            current_user, content_id, _selection(request), collection
        )
        return PostResponse.from_record(item)

    return router


router = create_posts_router(ContentCollection.EDUCATION)

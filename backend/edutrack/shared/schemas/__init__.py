"""
Pydantic Schemas

Typed records for the engine plus request and response models for the API.

Schema Categories:
==================
- common: Base schemas, error and health responses
- entities: Frozen row types and derived values used by the engine
- content: Post request/response bodies
- progress: Progress response bodies

Usage:
======
    from edutrack.shared.schemas.entities import ContentItemRecord, VisiblePost
    from edutrack.shared.schemas.content import CreatePostRequest, PostListResponse
"""

from edutrack.shared.schemas.common import (
    BaseSchema,
    RecordSchema,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from edutrack.shared.schemas.entities import (
    UserRecord,
    GroupRecord,
    MembershipRecord,
    ContentItemRecord,
    TargetGroupRecord,
    TargetUserRecord,
    ReadStateRecord,
    ReadMark,
    UNREAD,
    VisiblePost,
    ProgressStat,
    CategoryProgress,
    ProgressReport,
    ManagerProgress,
)
from edutrack.shared.schemas.content import (
    TargetingRequest,
    CreatePostRequest,
    PostResponse,
    VisiblePostResponse,
    PostListResponse,
    ReviewQueueResponse,
)
from edutrack.shared.schemas.progress import (
    ProgressStatResponse,
    CategoryProgressResponse,
    ProgressResponse,
    ManagerProgressResponse,
    ProgressOverviewResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "RecordSchema",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Entities
    "UserRecord",
    "GroupRecord",
    "MembershipRecord",
    "ContentItemRecord",
    "TargetGroupRecord",
    "TargetUserRecord",
    "ReadStateRecord",
    "ReadMark",
    "UNREAD",
    "VisiblePost",
    "ProgressStat",
    "CategoryProgress",
    "ProgressReport",
    "ManagerProgress",
    # Content
    "TargetingRequest",
    "CreatePostRequest",
    "PostResponse",
    "VisiblePostResponse",
    "PostListResponse",
    "ReviewQueueResponse",
    # Progress
    "ProgressStatResponse",
    "CategoryProgressResponse",
    "ProgressResponse",
    "ManagerProgressResponse",
    "ProgressOverviewResponse",
]

"""
Progress Schemas

Response bodies of the progress endpoints.
"""

from typing import Optional
from uuid import UUID

from edutrack.shared.models.enums import ContentCollection
from edutrack.shared.schemas.common import BaseSchema
from edutrack.shared.schemas.entities import ManagerProgress, ProgressReport


class ProgressStatResponse(BaseSchema):
    read: int
    total: int
    percentage: int


class CategoryProgressResponse(ProgressStatResponse):
    category: str


class ProgressResponse(BaseSchema):
    """
    Progress of the caller.

    Example:
        {
            "collection": "education",
            "overall": {"read": 2, "total": 5, "percentage": 40},
            "per_category": [
                {"category": "여자_매니저_소개", "read": 1, "total": 4, "percentage": 25},
                {"category": "개인_피드백", "read": 1, "total": 1, "percentage": 100}
            ]
        }
    """

    collection: ContentCollection
    overall: ProgressStatResponse
    per_category: list[CategoryProgressResponse]

    @classmethod
    def from_report(cls, collection: ContentCollection, report: ProgressReport) -> "ProgressResponse":
        return cls(
            collection=collection,
            overall=ProgressStatResponse.model_validate(report.overall),
            per_category=[
                CategoryProgressResponse.model_validate(row) for row in report.per_category
            ],
        )


class ManagerProgressResponse(BaseSchema):
    user_id: UUID
    username: str
    nickname: Optional[str] = None
    read: int
    total: int
    unread: int
    percentage: int


class ProgressOverviewResponse(BaseSchema):
    """Admin dashboard: one row per manager, ordered by username."""

    collection: ContentCollection
    managers: list[ManagerProgressResponse]

    @classmethod
    def from_rows(
        cls,
        collection: ContentCollection,
        rows: list[ManagerProgress],
    ) -> "ProgressOverviewResponse":
        return cls(
            collection=collection,
            managers=[ManagerProgressResponse.model_validate(row) for row in rows],
        )

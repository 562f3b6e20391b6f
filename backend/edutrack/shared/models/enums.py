"""
Enums used across the application.
"""

from enum import Enum


class UserRole(str, Enum):
    """Staff account role."""

    ADMIN = "admin"
    MANAGER = "manager"


class ContentCollection(str, Enum):
    """
    Logical content collection.

    Educational posts and best-practice posts live side by side and share
    the same targeting shape; only educational posts go through approval.
    """

    EDUCATION = "education"
    BEST_PRACTICE = "best_practice"


class TargetingType(str, Enum):
    """Audience selection mode of a content item."""

    GROUP = "group"
    INDIVIDUAL = "individual"


class ApprovalStatus(str, Enum):
    """Approval lifecycle of staff-authored content."""

    PENDING = "pending"
    APPROVED = "approved"


class ContentCategory(str, Enum):
    """
    Categories of educational posts.

    PERSONAL_FEEDBACK doubles as the progress bucket for items that carry
    no category at all.
    """

    MALE_MANAGER_TALK = "남자_매니저_대화"
    FEMALE_MANAGER_TALK = "여자_매니저_대화"
    FEMALE_MANAGER_INTRO = "여자_매니저_소개"
    EXTRA_SERVICE_RULES = "추가_서비스_규칙"
    PERSONAL_FEEDBACK = "개인_피드백"

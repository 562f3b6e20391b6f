"""
Content Authoring Service

The write boundary for posts: creation, retargeting, approval and deletion.

APPROVAL RULES:
- Admin-authored education posts are created APPROVED
- Manager-authored education posts are created PENDING and wait in the
  review queue (only while ALLOW_MANAGER_AUTHORING is on)
- Best-practice posts are admin-only and always APPROVED
- PENDING → APPROVED is the only transition; rejection is deletion

TARGETING RULES:
- group       → at least one group name, no user ids
- individual  → at least one user id, no group names
An empty group selection is rejected here because the resolver reads a
group-targeted item without rows as open to everyone.

Usage:
======
    service = ContentAuthoringService(source)
    item = await service.create_item(actor, ContentCollection.EDUCATION, draft)
    await service.approve(admin, item.id)
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence
from uuid import UUID

from edutrack.config.settings import settings
from edutrack.shared.core.exceptions import (
    AuthorizationError,
    ConflictError,
    ContentNotFoundError,
    TargetingValidationError,
    ValidationError,
)
from edutrack.shared.core.logging import get_logger
from edutrack.shared.models.enums import (
    ApprovalStatus,
    ContentCategory,
    ContentCollection,
    TargetingType,
)
from edutrack.shared.repositories.data_source import ContentStore
from edutrack.shared.schemas.entities import ContentItemRecord, UserRecord


logger = get_logger("authoring")

EDUCATION_CATEGORIES = frozenset(category.value for category in ContentCategory)


@dataclass
class TargetingSelection:
    """Targeting configuration as submitted by an author."""

    targeting_type: TargetingType
    group_names: Sequence[str] = field(default_factory=list)
    user_ids: Sequence[UUID] = field(default_factory=list)


@dataclass
class ContentDraft:
    """A post as submitted by an author."""

    title: str
    body: str
    targeting: TargetingSelection
    category: Optional[str] = None


def validate_targeting(selection: TargetingSelection) -> TargetingSelection:
    """
    Check a targeting selection and return it normalized.

    Group names are stripped; blanks and duplicates are dropped, keeping
    first-seen order.

    Raises:
        TargetingValidationError: If the selection is empty or carries rows
            of the other targeting type
    """
    group_names = list(
        dict.fromkeys(name.strip() for name in selection.group_names if name.strip())
    )
    user_ids = list(dict.fromkeys(selection.user_ids))
    targeting_type = selection.targeting_type.value

    if selection.targeting_type == TargetingType.GROUP:
        if not group_names:
            raise TargetingValidationError(
                "Group targeting requires at least one group", targeting_type
            )
        if user_ids:
            raise TargetingValidationError(
                "Group targeting must not list individual users", targeting_type
            )
    else:
        if not user_ids:
            raise TargetingValidationError(
                "Individual targeting requires at least one user", targeting_type
            )
        if group_names:
            raise TargetingValidationError(
                "Individual targeting must not list groups", targeting_type
            )

    return TargetingSelection(
        targeting_type=selection.targeting_type,
        group_names=group_names,
        user_ids=user_ids,
    )


def _require_admin(actor: UserRecord, action: str) -> None:
    if not actor.is_admin:
        raise AuthorizationError(
            f"Only admins can {action}",
            details={"role": actor.role.value},
        )


class ContentAuthoringService:
    """
    Authoring operations over a ContentStore.

    Every method takes the acting user and enforces role rules itself.
    """

    def __init__(
        self,
        store: ContentStore,
        allow_manager_authoring: Optional[bool] = None,
    ) -> None:
        """
        Initialize ContentAuthoringService.

        Args:
            store: Repository boundary for content writes
            allow_manager_authoring: Let managers submit education posts
                (defaults to settings.ALLOW_MANAGER_AUTHORING)
        """
        self.store = store
        self.allow_manager_authoring = (
            settings.ALLOW_MANAGER_AUTHORING
            if allow_manager_authoring is None
            else allow_manager_authoring
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    def _approval_status_for(
        self,
        actor: UserRecord,
        collection: ContentCollection,
    ) -> ApprovalStatus:
        if collection == ContentCollection.BEST_PRACTICE:
            _require_admin(actor, "author best-practice posts")
            return ApprovalStatus.APPROVED

        if actor.is_admin:
            return ApprovalStatus.APPROVED

        if not self.allow_manager_authoring:
            raise AuthorizationError(
                "Manager authoring is disabled",
                details={"role": actor.role.value},
            )
        return ApprovalStatus.PENDING

    @staticmethod
    def _normalize_category(
        collection: ContentCollection,
        category: Optional[str],
    ) -> Optional[str]:
        category = (category or "").strip() or None
        if (
            category is not None
            and collection == ContentCollection.EDUCATION
            and category not in EDUCATION_CATEGORIES
        ):
            raise ValidationError(
                f"Unknown category '{category}'",
                details={"allowed": sorted(EDUCATION_CATEGORIES)},
            )
        return category

    async def create_item(
        self,
        actor: UserRecord,
        collection: ContentCollection,
        draft: ContentDraft,
    ) -> ContentItemRecord:
        """
        Create a post with its targeting rows in one transaction.

        Args:
            actor: Authoring user
            collection: education or best_practice
            draft: Title, body, optional category and targeting

        Returns:
            The stored post

        Raises:
            AuthorizationError: If the actor may not author in `collection`
            ValidationError: If the title is blank or the category unknown
            TargetingValidationError: If the targeting selection is invalid
        """
        approval_status = self._approval_status_for(actor, collection)

        title = draft.title.strip()
        if not title:
            raise ValidationError("Title is required")

        category = self._normalize_category(collection, draft.category)
        targeting = validate_targeting(draft.targeting)

        item = await self.store.create_content_item(
            collection=collection,
            title=title,
            body=draft.body,
            category=category,
            targeting_type=targeting.targeting_type,
            approval_status=approval_status,
            author_id=actor.id,
            group_names=targeting.group_names,
            user_ids=targeting.user_ids,
        )

        logger.info(
            "Content created",
            content_id=str(item.id),
            collection=collection.value,
            author_id=str(actor.id),
            approval_status=approval_status.value,
            targeting_type=targeting.targeting_type.value,
        )
        return item

    # ═══════════════════════════════════════════════════════════════════════════
    # EDIT
    # ═══════════════════════════════════════════════════════════════════════════

    async def replace_targeting(
        self,
        actor: UserRecord,
        content_id: UUID,
        selection: TargetingSelection,
        collection: Optional[ContentCollection] = None,
    ) -> ContentItemRecord:
        """
        Replace a post's targeting (delete-then-insert of all target rows).

        Args:
            actor: Acting user
            content_id: Post to retarget
            selection: New targeting
            collection: When given, the post must belong to it

        Raises:
            AuthorizationError: If the actor is not an admin
            TargetingValidationError: If the selection is invalid
            ContentNotFoundError: If the post does not exist
        """
        _require_admin(actor, "change targeting")
        targeting = validate_targeting(selection)

        if collection is not None:
            if await self.store.get_content_item(content_id, collection) is None:
                raise ContentNotFoundError(str(content_id))

        item = await self.store.replace_targeting(
            content_id,
            targeting.targeting_type,
            targeting.group_names,
            targeting.user_ids,
        )

        logger.info(
            "Targeting replaced",
            content_id=str(content_id),
            targeting_type=targeting.targeting_type.value,
            groups=len(targeting.group_names),
            users=len(targeting.user_ids),
        )
        return item

    async def approve(self, actor: UserRecord, content_id: UUID) -> ContentItemRecord:
        """
        Approve a pending education post.

        Raises:
            AuthorizationError: If the actor is not an admin
            ContentNotFoundError: If the post does not exist
            ConflictError: If the post is not pending
        """
        _require_admin(actor, "approve content")

        item = await self.store.get_content_item(content_id, ContentCollection.EDUCATION)
        if item is None:
            raise ContentNotFoundError(str(content_id))
        if not item.is_pending:
            raise ConflictError(
                "Content is not pending review",
                details={"approval_status": item.approval_status.value},
            )

        approved = await self.store.set_approval_status(content_id, ApprovalStatus.APPROVED)
        if approved is None:
            raise ContentNotFoundError(str(content_id))

        logger.info("Content approved", content_id=str(content_id), admin_id=str(actor.id))
        return approved

    async def delete_item(self, actor: UserRecord, content_id: UUID) -> None:
        """
        Delete a post with its target rows and read states.

        Deleting a pending post is how a submission is rejected.

        Raises:
            AuthorizationError: If the actor is not an admin
            ContentNotFoundError: If the post does not exist
        """
        _require_admin(actor, "delete content")

        if not await self.store.delete_content_item(content_id):
            raise ContentNotFoundError(str(content_id))

        logger.info("Content deleted", content_id=str(content_id), admin_id=str(actor.id))

"""
Audience Service

Answers "which posts may this user see, and how far along are they" by
loading rows from an AudienceDataSource and running them through the pure
engine in `edutrack.shared.engine`.

FAIL-CLOSED LOADING:
- Independent fetches (items, groups, memberships, target rows, read
  states) run concurrently with asyncio.gather()
- If ANY of them fails, the whole operation raises AudienceResolutionError
  naming the failed sources; it never returns a listing computed from a
  partial snapshot
- Only the page-view acknowledgment (mark_read) is best-effort

Usage:
======
    from edutrack.shared.services.audience_service import AudienceService

    service = AudienceService(source)
    posts = await service.resolve_visible_posts(user_id, UserRole.MANAGER)
    report = await service.compute_progress(user_id)
"""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from edutrack.config.settings import settings
from edutrack.shared.core.exceptions import (
    AudienceResolutionError,
    ContentNotFoundError,
    UserNotFoundError,
)
from edutrack.shared.core.logging import get_logger
from edutrack.shared.engine import (
    TargetingIndex,
    aggregate,
    attach_read_marks,
    build_membership_index,
    filter_visible,
    select_pending_for_review,
)
from edutrack.shared.engine.membership import MembershipIndex
from edutrack.shared.models.enums import ApprovalStatus, ContentCollection, UserRole
from edutrack.shared.repositories.data_source import AudienceDataSource
from edutrack.shared.schemas.entities import (
    ContentItemRecord,
    ManagerProgress,
    ProgressReport,
    ReadMark,
    ReadStateRecord,
    UserRecord,
    VisiblePost,
)
from edutrack.shared.services.read_state_service import ReadStateTracker, build_read_map


logger = get_logger("audience")


@dataclass
class AudienceSnapshot:
    """Everything the engine needs to resolve one listing."""

    items: list[ContentItemRecord]
    membership_index: MembershipIndex
    targeting: TargetingIndex
    read_map: dict[UUID, ReadMark] = field(default_factory=dict)


async def gather_sources(sources: Mapping[str, Awaitable[Any]]) -> dict[str, Any]:
    """
    Await named fetches concurrently.

    Args:
        sources: source name → awaitable

    Returns:
        source name → result

    Raises:
        AudienceResolutionError: If any fetch raised; lists every failed name
    """
    names = list(sources)
    results = await asyncio.gather(*sources.values(), return_exceptions=True)

    failed = []
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            failed.append(name)
            logger.error(
                "Audience source failed",
                source=name,
                error=str(result),
                error_type=type(result).__name__,
            )

    if failed:
        raise AudienceResolutionError(failed_sources=failed)

    return dict(zip(names, results))


class AudienceService:
    """
    Visibility, review queue, read tracking and progress.

    Handles:
    - Visible post listings per collection (with or without read marks)
    - A single visible post (hidden and missing are indistinguishable)
    - The admin review queue of pending education posts
    - Best-effort read acknowledgment on page view
    - Per-user progress and the admin per-manager overview
    """

    def __init__(
        self,
        source: AudienceDataSource,
        tracker: Optional[ReadStateTracker] = None,
        uncategorized_bucket: Optional[str] = None,
        read_state_write_attempts: Optional[int] = None,
        read_state_retry_delay: Optional[float] = None,
    ) -> None:
        """
        Initialize AudienceService.

        Args:
            source: Repository boundary
            tracker: Read-state tracker (defaults to one over `source`)
            uncategorized_bucket: Progress bucket for items without category
            read_state_write_attempts: Tries for a best-effort acknowledgment
            read_state_retry_delay: Base backoff between those tries (0 disables)
        """
        self.source = source
        self.tracker = tracker or ReadStateTracker(source)
        self.uncategorized_bucket = uncategorized_bucket or settings.UNCATEGORIZED_BUCKET
        self.read_state_write_attempts = max(
            1, read_state_write_attempts or settings.READ_STATE_WRITE_ATTEMPTS
        )
        self.read_state_retry_delay = (
            settings.READ_STATE_RETRY_DELAY
            if read_state_retry_delay is None
            else read_state_retry_delay
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # LOADING
    # ═══════════════════════════════════════════════════════════════════════════

    def _snapshot_sources(
        self,
        user_id: UUID,
        collection: ContentCollection,
        with_read_states: bool = False,
    ) -> dict[str, Awaitable[Any]]:
        """
        Named fetches making up one user's audience snapshot of a collection.

        Individual target rows are fetched for `user_id` only; an
        individual item whose rows name other users then has no row for
        this user and resolves to hidden, which is the correct answer for
        this user.
        """
        sources: dict[str, Awaitable[Any]] = {
            "content_items": self.source.list_content_items(collection),
            "groups": self.source.list_groups(),
            "memberships": self.source.list_memberships(user_id),
            "target_groups": self.source.list_target_groups(collection),
            "target_users": self.source.list_target_users(collection, user_id=user_id),
        }
        if with_read_states:
            sources["read_states"] = self.source.get_read_states(
                user_id=user_id, collection=collection
            )
        return sources

    @staticmethod
    def _build_snapshot(loaded: Mapping[str, Any]) -> AudienceSnapshot:
        return AudienceSnapshot(
            items=loaded["content_items"],
            membership_index=build_membership_index(loaded["memberships"], loaded["groups"]),
            targeting=TargetingIndex.from_rows(loaded["target_groups"], loaded["target_users"]),
            read_map=build_read_map(loaded.get("read_states", [])),
        )

    async def _load_snapshot(
        self,
        user_id: UUID,
        collection: ContentCollection,
        with_read_states: bool = False,
    ) -> AudienceSnapshot:
        loaded = await gather_sources(
            self._snapshot_sources(user_id, collection, with_read_states)
        )
        return self._build_snapshot(loaded)

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def resolve_visible_posts(
        self,
        user_id: UUID,
        role: UserRole,
        collection: ContentCollection = ContentCollection.EDUCATION,
    ) -> list[ContentItemRecord]:
        """
        Posts of `collection` visible to the user, newest first.

        Pending items are excluded for every role, admins included.

        Raises:
            AudienceResolutionError: If any source could not be loaded
        """
        snapshot = await self._load_snapshot(user_id, collection)
        user = UserRecord(id=user_id, role=role)
        visible = filter_visible(snapshot.items, user, snapshot.membership_index, snapshot.targeting)
        logger.debug(
            "Visible posts resolved",
            user_id=str(user_id),
            collection=collection.value,
            candidates=len(snapshot.items),
            visible=len(visible),
        )
        return visible

    async def list_visible_posts(
        self,
        user_id: UUID,
        role: UserRole,
        collection: ContentCollection = ContentCollection.EDUCATION,
    ) -> list[VisiblePost]:
        """Same as resolve_visible_posts, joined with the user's read marks."""
        snapshot = await self._load_snapshot(user_id, collection, with_read_states=True)
        user = UserRecord(id=user_id, role=role)
        visible = filter_visible(
            snapshot.items, user, snapshot.membership_index, snapshot.targeting
        )
        return attach_read_marks(visible, snapshot.read_map)

    @staticmethod
    def count_unread(posts: Sequence[VisiblePost]) -> int:
        """Number of posts in a listing the user has not acknowledged."""
        return sum(1 for post in posts if not post.is_read)

    async def get_visible_post(
        self,
        user_id: UUID,
        role: UserRole,
        content_id: UUID,
        collection: ContentCollection = ContentCollection.EDUCATION,
    ) -> VisiblePost:
        """
        One post, provided the user may see it.

        Raises:
            ContentNotFoundError: If the post is missing, pending, in another
                collection, or targeted away from the user
            AudienceResolutionError: If any source could not be loaded
        """
        loaded = await gather_sources(
            {
                "content_items": self.source.get_content_item(content_id, collection),
                "groups": self.source.list_groups(),
                "memberships": self.source.list_memberships(user_id),
                "target_groups": self.source.list_target_groups(collection, content_id),
                "target_users": self.source.list_target_users(
                    collection, content_id=content_id
                ),
                "read_states": self.source.get_read_states(
                    user_id=user_id, collection=collection
                ),
            }
        )

        item: Optional[ContentItemRecord] = loaded["content_items"]
        if item is None:
            raise ContentNotFoundError(str(content_id))

        visible = filter_visible(
            [item],
            UserRecord(id=user_id, role=role),
            build_membership_index(loaded["memberships"], loaded["groups"]),
            TargetingIndex.from_rows(loaded["target_groups"], loaded["target_users"]),
        )
        if not visible:
            raise ContentNotFoundError(str(content_id))

        read_map = build_read_map(loaded["read_states"], [content_id])
        return attach_read_marks(visible, read_map)[0]

    async def list_pending_for_review(self) -> list[ContentItemRecord]:
        """
        Every pending education post, newest first, without targeting filter.

        Callers restrict this to admins.
        """
        items = await gather_sources(
            {
                "content_items": self.source.list_content_items(
                    ContentCollection.EDUCATION, ApprovalStatus.PENDING
                )
            }
        )
        return select_pending_for_review(items["content_items"])

    # ═══════════════════════════════════════════════════════════════════════════
    # READ TRACKING
    # ═══════════════════════════════════════════════════════════════════════════

    async def mark_read(self, user_id: UUID, content_id: UUID) -> None:
        """
        Best-effort acknowledgment of a page view.

        The upsert is retried up to `read_state_write_attempts` times with
        exponential backoff and jitter. An IntegrityError (unknown user or
        content row) is not retried. A final failure is logged and
        swallowed: the page must still render and the read state simply
        does not advance.
        """
        for attempt in range(1, self.read_state_write_attempts + 1):
            try:
                await self.tracker.mark_read(user_id, content_id)
                return
            except IntegrityError as e:
                logger.error(
                    "Read state rejected",
                    user_id=str(user_id),
                    content_id=str(content_id),
                    error=str(e.orig),
                )
                return
            except Exception as e:
                logger.warning(
                    "Read state write failed",
                    user_id=str(user_id),
                    content_id=str(content_id),
                    attempt=attempt,
                    max_attempts=self.read_state_write_attempts,
                    error=str(e),
                )

            if attempt < self.read_state_write_attempts:
                delay = min(
                    settings.READ_STATE_RETRY_MAX_DELAY,
                    self.read_state_retry_delay * (2 ** (attempt - 1)),
                )
                if delay:
                    await asyncio.sleep(delay + random.uniform(0, delay / 2))

        logger.error(
            "Read state not recorded",
            user_id=str(user_id),
            content_id=str(content_id),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROGRESS
    # ═══════════════════════════════════════════════════════════════════════════

    async def compute_progress(
        self,
        user_id: UUID,
        collection: ContentCollection = ContentCollection.EDUCATION,
    ) -> ProgressReport:
        """
        Overall and per-category progress of one user.

        Raises:
            UserNotFoundError: If the user does not exist
            AudienceResolutionError: If any source could not be loaded
        """
        sources = self._snapshot_sources(user_id, collection, with_read_states=True)
        sources["user"] = self.source.get_user(user_id)
        loaded = await gather_sources(sources)

        user: Optional[UserRecord] = loaded["user"]
        if user is None:
            raise UserNotFoundError(str(user_id))

        snapshot = self._build_snapshot(loaded)
        visible = filter_visible(snapshot.items, user, snapshot.membership_index, snapshot.targeting)
        return aggregate(visible, snapshot.read_map, self.uncategorized_bucket)

    async def compute_progress_overview(
        self,
        collection: ContentCollection = ContentCollection.EDUCATION,
    ) -> list[ManagerProgress]:
        """
        Progress of every manager, ordered by username.

        Each manager's figures use that manager's own visibility, so a post
        targeted elsewhere never counts against them.
        """
        loaded = await gather_sources(
            {
                "users": self.source.list_users(UserRole.MANAGER),
                "content_items": self.source.list_content_items(collection),
                "groups": self.source.list_groups(),
                "memberships": self.source.list_memberships(),
                "target_groups": self.source.list_target_groups(collection),
                "target_users": self.source.list_target_users(collection),
                "read_states": self.source.get_read_states(collection=collection),
            }
        )

        membership_index = build_membership_index(loaded["memberships"], loaded["groups"])
        targeting = TargetingIndex.from_rows(loaded["target_groups"], loaded["target_users"])

        states_by_user: dict[UUID, list[ReadStateRecord]] = {}
        for row in loaded["read_states"]:
            states_by_user.setdefault(row.user_id, []).append(row)

        overview = []
        for user in sorted(loaded["users"], key=lambda u: u.username):
            visible = filter_visible(loaded["content_items"], user, membership_index, targeting)
            report = aggregate(
                visible,
                build_read_map(states_by_user.get(user.id, [])),
                self.uncategorized_bucket,
            )
            overview.append(
                ManagerProgress(
                    user_id=user.id,
                    username=user.username,
                    nickname=user.nickname,
                    read=report.overall.read,
                    total=report.overall.total,
                    unread=report.overall.total - report.overall.read,
                    percentage=report.overall.percentage,
                )
            )

        return overview

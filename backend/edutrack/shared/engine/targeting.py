"""
Targeting Resolver

Turns one item's targeting configuration into a predicate over users.

Rules:
======
    individual  → user.id ∈ target users of the item
                  (no target users → visible to nobody)
    group       → no target groups      → visible to everyone (legacy-open)
                  otherwise             → groups(user) ∩ target groups ≠ ∅

Rows of the other targeting type are ignored. Role never matters here;
any admin bypass belongs to the caller, so the resolver stays pure set
membership.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping
from uuid import UUID

from edutrack.shared.engine.membership import MembershipIndex, groups_of
from edutrack.shared.models.enums import TargetingType
from edutrack.shared.schemas.entities import (
    ContentItemRecord,
    TargetGroupRecord,
    TargetUserRecord,
    UserRecord,
)


AudiencePredicate = Callable[[UserRecord], bool]

_EMPTY: frozenset = frozenset()


def _everyone(_user: UserRecord) -> bool:
    return True


def _nobody(_user: UserRecord) -> bool:
    return False


@dataclass(frozen=True)
class TargetingIndex:
    """
    Target rows bucketed by content id.

    Built once per request so that resolving N items costs O(rows + N)
    instead of rescanning every row for every item.
    """

    groups_by_content: Mapping[UUID, frozenset[str]] = field(default_factory=dict)
    users_by_content: Mapping[UUID, frozenset[UUID]] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        target_groups: Iterable[TargetGroupRecord],
        target_users: Iterable[TargetUserRecord],
    ) -> "TargetingIndex":
        groups: dict[UUID, set[str]] = {}
        for row in target_groups:
            groups.setdefault(row.content_id, set()).add(row.group_name)

        users: dict[UUID, set[UUID]] = {}
        for row in target_users:
            users.setdefault(row.content_id, set()).add(row.user_id)

        return cls(
            groups_by_content={k: frozenset(v) for k, v in groups.items()},
            users_by_content={k: frozenset(v) for k, v in users.items()},
        )

    def groups_for(self, content_id: UUID) -> frozenset[str]:
        return self.groups_by_content.get(content_id, _EMPTY)

    def users_for(self, content_id: UUID) -> frozenset[UUID]:
        return self.users_by_content.get(content_id, _EMPTY)


def audience_predicate(
    item: ContentItemRecord,
    targeting: TargetingIndex,
    membership_index: MembershipIndex,
) -> AudiencePredicate:
    """
    Predicate for `item` using pre-bucketed target rows.

    Args:
        item: The content item
        targeting: Target rows bucketed by content id
        membership_index: user id → group names

    Returns:
        Callable that answers "may this user see the item"
    """
    if item.targeting_type == TargetingType.INDIVIDUAL:
        allowed_users = targeting.users_for(item.id)
        if not allowed_users:
            return _nobody
        return lambda user: user.id in allowed_users

    allowed_groups = targeting.groups_for(item.id)
    if not allowed_groups:
        # Legacy content predating per-item targeting is open to everyone
        return _everyone
    return lambda user: not allowed_groups.isdisjoint(groups_of(membership_index, user.id))


def resolve_audience_predicate(
    item: ContentItemRecord,
    target_groups: Iterable[TargetGroupRecord],
    target_users: Iterable[TargetUserRecord],
    membership_index: MembershipIndex,
) -> AudiencePredicate:
    """
    Predicate for a single item from raw target rows.

    Rows belonging to other items are ignored, so callers may pass the
    full target tables.

    Example:
        can_see = resolve_audience_predicate(item, group_rows, user_rows, index)
        visible_to = [u for u in users if can_see(u)]
    """
    targeting = TargetingIndex.from_rows(
        (row for row in target_groups if row.content_id == item.id),
        (row for row in target_users if row.content_id == item.id),
    )
    return audience_predicate(item, targeting, membership_index)

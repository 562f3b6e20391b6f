"""
Membership Index

Maps each user to the set of group NAMES they belong to. Targeting rows
reference groups by name, so ids are resolved here once per request.
"""

from typing import Iterable, Mapping
from uuid import UUID

from edutrack.shared.schemas.entities import GroupRecord, MembershipRecord


MembershipIndex = Mapping[UUID, frozenset[str]]


def build_membership_index(
    memberships: Iterable[MembershipRecord],
    groups: Iterable[GroupRecord],
) -> dict[UUID, frozenset[str]]:
    """
    Build the user → group-name index.

    Every user appearing in `memberships` gets an entry, even when none of
    its group ids resolve to a known group (empty set). Users that do not
    appear at all simply have no groups; callers use `.get(user_id)`.

    Args:
        memberships: Membership edges (user_id, group_id)
        groups: Known groups, used to translate ids to names

    Returns:
        Dict of user id to frozenset of group names
    """
    names_by_id = {group.id: group.name for group in groups}

    index: dict[UUID, set[str]] = {}
    for membership in memberships:
        names = index.setdefault(membership.user_id, set())
        name = names_by_id.get(membership.group_id)
        if name is not None:
            names.add(name)

    return {user_id: frozenset(names) for user_id, names in index.items()}


def groups_of(index: MembershipIndex, user_id: UUID) -> frozenset[str]:
    """Group names of `user_id`; empty when the user has no memberships."""
    return index.get(user_id, frozenset())

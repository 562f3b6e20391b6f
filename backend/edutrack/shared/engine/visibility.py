"""
Visibility Filter

Applies the approval gate and the audience predicates to a listing for one
requesting user.

Algorithm:
==========
    1. drop every pending item (general listings never show them, for any role)
    2. keep items whose audience predicate accepts the requesting user
    3. keep input order; an id seen twice is kept once (first occurrence)

Malformed targeting, e.g. an individual item without target users, resolves
to "visible to nobody". The admin review queue is a separate entry point
(`select_pending_for_review`) that applies no targeting at all.
"""

from typing import Iterable, Mapping
from uuid import UUID

from edutrack.shared.engine.membership import MembershipIndex
from edutrack.shared.engine.targeting import TargetingIndex, audience_predicate
from edutrack.shared.schemas.entities import (
    UNREAD,
    ContentItemRecord,
    ReadMark,
    UserRecord,
    VisiblePost,
)


def filter_visible(
    items: Iterable[ContentItemRecord],
    requesting_user: UserRecord,
    membership_index: MembershipIndex,
    targeting: TargetingIndex,
) -> list[ContentItemRecord]:
    """
    Visible subset of `items` for `requesting_user`.

    The user's role travels on the record but is deliberately not consulted:
    admins get the same audience rules as everyone else on this path.

    Returns:
        Ordered, de-duplicated list of visible items
    """
    seen: set[UUID] = set()
    visible: list[ContentItemRecord] = []

    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)

        if item.is_pending:
            continue

        if audience_predicate(item, targeting, membership_index)(requesting_user):
            visible.append(item)

    return visible


def select_pending_for_review(items: Iterable[ContentItemRecord]) -> list[ContentItemRecord]:
    """Every pending item, in input order, with no targeting filter."""
    seen: set[UUID] = set()
    pending: list[ContentItemRecord] = []
    for item in items:
        if item.id in seen or not item.is_pending:
            continue
        seen.add(item.id)
        pending.append(item)
    return pending


def attach_read_marks(
    items: Iterable[ContentItemRecord],
    read_map: Mapping[UUID, ReadMark],
) -> list[VisiblePost]:
    """Join visible items with read marks; a missing mark means unread."""
    posts = []
    for item in items:
        mark = read_map.get(item.id, UNREAD)
        posts.append(VisiblePost(item=item, is_read=mark.is_read, read_at=mark.read_at))
    return posts

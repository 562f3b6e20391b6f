"""
Tests for the membership index and the targeting resolver.
"""

import pytest

from edutrack.shared.engine import (
    TargetingIndex,
    audience_predicate,
    build_membership_index,
    groups_of,
    resolve_audience_predicate,
)
from edutrack.shared.models.enums import TargetingType, UserRole
from edutrack.shared.schemas.entities import MembershipRecord
from tests.factories import (
    make_group,
    make_item,
    make_user,
    memberships_for,
    target_groups,
    target_users,
)


# =============================================================================
# Membership index
# =============================================================================


def test_membership_index_maps_users_to_group_names():
    a, b = make_group("A"), make_group("B")
    u1, u2 = make_user(), make_user()

    index = build_membership_index(
        memberships_for(u1, a, b) + memberships_for(u2, b),
        [a, b],
    )

    assert index[u1.id] == frozenset({"A", "B"})
    assert index[u2.id] == frozenset({"B"})


def test_membership_index_keeps_user_whose_group_is_unknown():
    user = make_user()
    orphan = make_group("deleted")

    index = build_membership_index(memberships_for(user, orphan), groups=[])

    assert index[user.id] == frozenset()


def test_groups_of_user_without_memberships_is_empty():
    assert groups_of({}, make_user().id) == frozenset()


def test_membership_index_ignores_duplicate_edges():
    a = make_group("A")
    user = make_user()
    edge = MembershipRecord(user_id=user.id, group_id=a.id)

    index = build_membership_index([edge, edge], [a])

    assert index[user.id] == frozenset({"A"})


# =============================================================================
# Group targeting
# =============================================================================


def test_group_item_without_target_groups_is_open_to_everyone():
    """Scenario C: no TargetGroup rows → every user sees the item."""
    a = make_group("A")
    grouped, ungrouped = make_user(), make_user()
    item = make_item(TargetingType.GROUP)
    index = build_membership_index(memberships_for(grouped, a), [a])

    can_see = resolve_audience_predicate(item, [], [], index)

    assert can_see(grouped)
    assert can_see(ungrouped)
    assert can_see(make_user(UserRole.ADMIN))


def test_group_item_hidden_from_user_outside_target_groups():
    """Scenario A: U ∈ {A}, item targets {B, C} → hidden."""
    a, b = make_group("A"), make_group("B")
    user = make_user()
    item = make_item(TargetingType.GROUP)
    index = build_membership_index(memberships_for(user, a), [a, b])

    can_see = resolve_audience_predicate(item, target_groups(item, "B", "C"), [], index)

    assert not can_see(user)


def test_group_item_visible_on_any_shared_group():
    a, b, c = make_group("A"), make_group("B"), make_group("C")
    user = make_user()
    item = make_item(TargetingType.GROUP)
    index = build_membership_index(memberships_for(user, a, c), [a, b, c])

    can_see = resolve_audience_predicate(item, target_groups(item, "B", "C"), [], index)

    assert can_see(user)


@pytest.mark.parametrize(
    "user_groups,targets,expected",
    [
        (set(), {"A"}, False),
        ({"A"}, {"A"}, True),
        ({"A", "B"}, {"C"}, False),
        ({"B"}, {"A", "B", "C"}, True),
    ],
)
def test_group_visibility_is_set_intersection(user_groups, targets, expected):
    groups = {name: make_group(name) for name in {"A", "B", "C"}}
    user = make_user()
    item = make_item(TargetingType.GROUP)
    index = build_membership_index(
        memberships_for(user, *(groups[name] for name in user_groups)),
        groups.values(),
    )

    can_see = resolve_audience_predicate(item, target_groups(item, *targets), [], index)

    assert can_see(user) is expected


def test_group_item_ignores_stray_user_rows():
    item = make_item(TargetingType.GROUP)
    outsider = make_user()
    other = make_user()

    can_see = resolve_audience_predicate(
        item, target_groups(item, "A"), target_users(item, other.id), {}
    )

    assert not can_see(outsider)
    assert not can_see(other)


# =============================================================================
# Individual targeting
# =============================================================================


def test_individual_item_visible_only_to_listed_users():
    """Scenario B: item targets {u1, u2}; u3 in an eligible group → hidden."""
    a = make_group("A")
    u1, u2, u3 = make_user(), make_user(), make_user()
    item = make_item(TargetingType.INDIVIDUAL)
    index = build_membership_index(memberships_for(u3, a), [a])

    can_see = resolve_audience_predicate(
        item, target_groups(item, "A"), target_users(item, u1.id, u2.id), index
    )

    assert can_see(u1)
    assert can_see(u2)
    assert not can_see(u3)


def test_individual_item_without_target_users_is_visible_to_nobody():
    item = make_item(TargetingType.INDIVIDUAL)

    can_see = resolve_audience_predicate(item, [], [], {})

    assert not can_see(make_user())
    assert not can_see(make_user(UserRole.ADMIN))


def test_rows_of_other_items_are_ignored():
    user = make_user()
    item, other = make_item(TargetingType.INDIVIDUAL), make_item(TargetingType.INDIVIDUAL)

    can_see = resolve_audience_predicate(item, [], target_users(other, user.id), {})

    assert not can_see(user)


def test_targeting_index_buckets_rows_by_item():
    first, second = make_item(), make_item(TargetingType.INDIVIDUAL)
    user = make_user()

    targeting = TargetingIndex.from_rows(
        target_groups(first, "A", "B", "A"),
        target_users(second, user.id),
    )

    assert targeting.groups_for(first.id) == frozenset({"A", "B"})
    assert targeting.groups_for(second.id) == frozenset()
    assert targeting.users_for(second.id) == frozenset({user.id})
    assert audience_predicate(second, targeting, {})(user)

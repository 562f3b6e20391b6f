"""
Tests for the visibility filter and the review queue selector.
"""

from edutrack.shared.engine import (
    TargetingIndex,
    attach_read_marks,
    build_membership_index,
    filter_visible,
    select_pending_for_review,
)
from edutrack.shared.models.enums import ApprovalStatus, TargetingType, UserRole
from tests.factories import (
    make_group,
    make_item,
    make_user,
    memberships_for,
    read,
    target_groups,
    target_users,
)


def test_pending_items_are_hidden_for_every_role():
    pending = make_item(approval_status=ApprovalStatus.PENDING)
    approved = make_item()

    for role in UserRole:
        visible = filter_visible([pending, approved], make_user(role), {}, TargetingIndex())
        assert visible == [approved]


def test_pending_item_hidden_even_when_user_is_targeted():
    user = make_user()
    pending = make_item(TargetingType.INDIVIDUAL, approval_status=ApprovalStatus.PENDING)
    targeting = TargetingIndex.from_rows([], target_users(pending, user.id))

    assert filter_visible([pending], user, {}, targeting) == []


def test_admin_gets_no_targeting_bypass():
    admin = make_user(UserRole.ADMIN)
    item = make_item()
    targeting = TargetingIndex.from_rows(target_groups(item, "B"), [])

    assert filter_visible([item], admin, {}, targeting) == []


def test_visible_items_keep_input_order():
    a = make_group("A")
    user = make_user()
    index = build_membership_index(memberships_for(user, a), [a])
    newest, hidden, middle, oldest = make_item(), make_item(), make_item(), make_item()
    targeting = TargetingIndex.from_rows(
        target_groups(newest, "A") + target_groups(hidden, "B") + target_groups(middle, "A"),
        [],
    )

    visible = filter_visible([newest, hidden, middle, oldest], user, index, targeting)

    assert [item.id for item in visible] == [newest.id, middle.id, oldest.id]


def test_duplicate_items_are_returned_once():
    item = make_item()

    visible = filter_visible([item, item, item], make_user(), {}, TargetingIndex())

    assert visible == [item]


def test_mixed_targeting_listing():
    a = make_group("A")
    user, other = make_user(), make_user()
    index = build_membership_index(memberships_for(user, a), [a])
    open_item = make_item()
    group_item = make_item()
    mine = make_item(TargetingType.INDIVIDUAL)
    theirs = make_item(TargetingType.INDIVIDUAL)
    targeting = TargetingIndex.from_rows(
        target_groups(group_item, "A"),
        target_users(mine, user.id) + target_users(theirs, other.id),
    )

    visible = filter_visible([open_item, group_item, mine, theirs], user, index, targeting)

    assert visible == [open_item, group_item, mine]


def test_review_queue_lists_only_pending_without_targeting():
    pending_hidden = make_item(TargetingType.INDIVIDUAL, approval_status=ApprovalStatus.PENDING)
    approved = make_item()
    pending_open = make_item(approval_status=ApprovalStatus.PENDING)

    queue = select_pending_for_review([pending_hidden, approved, pending_open, pending_open])

    assert queue == [pending_hidden, pending_open]


def test_attach_read_marks_defaults_to_unread():
    seen, unseen = make_item(), make_item()
    mark = read()

    posts = attach_read_marks([seen, unseen], {seen.id: mark})

    assert posts[0].item == seen
    assert posts[0].is_read is True
    assert posts[0].read_at == mark.read_at
    assert posts[1].is_read is False
    assert posts[1].read_at is None

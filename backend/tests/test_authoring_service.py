"""
Tests for ContentAuthoringService: approval rules, targeting validation,
retargeting, approval and deletion.
"""

from uuid import uuid4

import pytest

from edutrack.shared.core.exceptions import (
    AuthorizationError,
    ConflictError,
    ContentNotFoundError,
    TargetingValidationError,
    ValidationError,
)
from edutrack.shared.models.enums import (
    ApprovalStatus,
    ContentCategory,
    ContentCollection,
    TargetingType,
)
from edutrack.shared.services.authoring_service import (
    ContentAuthoringService,
    ContentDraft,
    TargetingSelection,
    validate_targeting,
)


INTRO = ContentCategory.FEMALE_MANAGER_INTRO.value


def group_draft(*groups: str, title: str = "Welcome", category=None) -> ContentDraft:
    return ContentDraft(
        title=title,
        body="Read this first.",
        category=category,
        targeting=TargetingSelection(TargetingType.GROUP, group_names=list(groups)),
    )


# =============================================================================
# Targeting validation
# =============================================================================


def test_validate_targeting_normalizes_group_names():
    selection = TargetingSelection(TargetingType.GROUP, group_names=[" A ", "B", "A", "  "])

    assert validate_targeting(selection).group_names == ["A", "B"]


def test_validate_targeting_dedupes_user_ids():
    user_id = uuid4()
    selection = TargetingSelection(TargetingType.INDIVIDUAL, user_ids=[user_id, user_id])

    assert validate_targeting(selection).user_ids == [user_id]


@pytest.mark.parametrize(
    "selection",
    [
        TargetingSelection(TargetingType.GROUP),
        TargetingSelection(TargetingType.GROUP, group_names=["   "]),
        TargetingSelection(TargetingType.INDIVIDUAL),
        TargetingSelection(TargetingType.GROUP, group_names=["A"], user_ids=[uuid4()]),
        TargetingSelection(TargetingType.INDIVIDUAL, group_names=["A"], user_ids=[uuid4()]),
    ],
)
def test_validate_targeting_rejects_empty_or_mixed(selection):
    with pytest.raises(TargetingValidationError) as exc_info:
        validate_targeting(selection)

    assert exc_info.value.status_code == 400
    assert exc_info.value.details["targeting_type"] == selection.targeting_type.value


# =============================================================================
# Create
# =============================================================================


@pytest.mark.asyncio
async def test_admin_post_is_approved(source, authoring_service, admin):
    item = await authoring_service.create_item(
        admin, ContentCollection.EDUCATION, group_draft("A", category=INTRO)
    )

    assert item.approval_status == ApprovalStatus.APPROVED
    assert item.author_id == admin.id
    assert item.category == INTRO
    assert [row.group_name for row in source.target_groups] == ["A"]


@pytest.mark.asyncio
async def test_manager_post_is_pending(authoring_service, manager):
    item = await authoring_service.create_item(
        manager, ContentCollection.EDUCATION, group_draft("A")
    )

    assert item.approval_status == ApprovalStatus.PENDING
    assert item.is_pending


@pytest.mark.asyncio
async def test_manager_authoring_can_be_disabled(source, manager):
    service = ContentAuthoringService(source, allow_manager_authoring=False)

    with pytest.raises(AuthorizationError):
        await service.create_item(manager, ContentCollection.EDUCATION, group_draft("A"))

    assert source.items == {}


@pytest.mark.asyncio
async def test_best_practice_is_admin_only(source, authoring_service, admin, manager):
    with pytest.raises(AuthorizationError):
        await authoring_service.create_item(
            manager, ContentCollection.BEST_PRACTICE, group_draft("A")
        )

    item = await authoring_service.create_item(
        admin, ContentCollection.BEST_PRACTICE, group_draft("A", category="onboarding")
    )
    assert item.approval_status == ApprovalStatus.APPROVED
    assert item.category == "onboarding"


@pytest.mark.asyncio
async def test_individual_post_stores_user_rows(source, authoring_service, admin, manager):
    draft = ContentDraft(
        title="For you",
        body="Personal note.",
        targeting=TargetingSelection(TargetingType.INDIVIDUAL, user_ids=[manager.id]),
    )

    item = await authoring_service.create_item(admin, ContentCollection.EDUCATION, draft)

    assert item.targeting_type == TargetingType.INDIVIDUAL
    assert [row.user_id for row in source.target_users] == [manager.id]
    assert source.target_groups == []


@pytest.mark.asyncio
async def test_empty_group_selection_is_rejected(source, authoring_service, admin):
    with pytest.raises(TargetingValidationError):
        await authoring_service.create_item(admin, ContentCollection.EDUCATION, group_draft())

    assert source.items == {}


@pytest.mark.asyncio
async def test_unknown_education_category_is_rejected(authoring_service, admin):
    with pytest.raises(ValidationError) as exc_info:
        await authoring_service.create_item(
            admin, ContentCollection.EDUCATION, group_draft("A", category="기타")
        )

    assert INTRO in exc_info.value.details["allowed"]


@pytest.mark.asyncio
async def test_blank_title_is_rejected(authoring_service, admin):
    with pytest.raises(ValidationError):
        await authoring_service.create_item(
            admin, ContentCollection.EDUCATION, group_draft("A", title="   ")
        )


# =============================================================================
# Retarget
# =============================================================================


@pytest.mark.asyncio
async def test_replace_targeting_swaps_rows(source, authoring_service, admin, manager):
    item = source.add_item("intro", groups=["A", "B"])
    selection = TargetingSelection(TargetingType.INDIVIDUAL, user_ids=[manager.id])

    updated = await authoring_service.replace_targeting(admin, item.id, selection)

    assert updated.targeting_type == TargetingType.INDIVIDUAL
    assert source.target_groups == []
    assert [row.user_id for row in source.target_users] == [manager.id]


@pytest.mark.asyncio
async def test_replace_targeting_requires_admin(source, authoring_service, manager):
    item = source.add_item("intro", groups=["A"])
    selection = TargetingSelection(TargetingType.GROUP, group_names=["B"])

    with pytest.raises(AuthorizationError):
        await authoring_service.replace_targeting(manager, item.id, selection)

    assert [row.group_name for row in source.target_groups] == ["A"]


@pytest.mark.asyncio
async def test_replace_targeting_checks_collection(source, authoring_service, admin):
    tip = source.add_item("tip", collection=ContentCollection.BEST_PRACTICE)
    selection = TargetingSelection(TargetingType.GROUP, group_names=["A"])

    with pytest.raises(ContentNotFoundError):
        await authoring_service.replace_targeting(
            admin, tip.id, selection, ContentCollection.EDUCATION
        )


# =============================================================================
# Approve / delete
# =============================================================================


@pytest.mark.asyncio
async def test_approve_pending_post(source, authoring_service, admin, manager):
    pending = await authoring_service.create_item(
        manager, ContentCollection.EDUCATION, group_draft("A")
    )

    approved = await authoring_service.approve(admin, pending.id)

    assert approved.approval_status == ApprovalStatus.APPROVED
    assert source.items[pending.id].approval_status == ApprovalStatus.APPROVED


@pytest.mark.asyncio
async def test_approve_already_approved_conflicts(source, authoring_service, admin):
    item = source.add_item("published")

    with pytest.raises(ConflictError) as exc_info:
        await authoring_service.approve(admin, item.id)

    assert exc_info.value.details["approval_status"] == ApprovalStatus.APPROVED.value


@pytest.mark.asyncio
async def test_approve_ignores_best_practice_posts(source, authoring_service, admin):
    tip = source.add_item(
        "tip", collection=ContentCollection.BEST_PRACTICE, approval_status=ApprovalStatus.PENDING
    )

    with pytest.raises(ContentNotFoundError):
        await authoring_service.approve(admin, tip.id)


@pytest.mark.asyncio
async def test_manager_cannot_approve(source, authoring_service, manager):
    item = source.add_item("draft", approval_status=ApprovalStatus.PENDING)

    with pytest.raises(AuthorizationError):
        await authoring_service.approve(manager, item.id)


@pytest.mark.asyncio
async def test_delete_cascades_to_targets_and_read_states(
    source, authoring_service, audience_service, admin, manager
):
    item = source.add_item("intro", groups=["A"])
    kept = source.add_item("other", targeting_type=TargetingType.INDIVIDUAL, users=[manager.id])
    await audience_service.mark_read(manager.id, item.id)
    await audience_service.mark_read(manager.id, kept.id)

    await authoring_service.delete_item(admin, item.id)

    assert item.id not in source.items
    assert source.target_groups == []
    assert [row.content_id for row in source.target_users] == [kept.id]
    assert list(source.read_states) == [(manager.id, kept.id)]


@pytest.mark.asyncio
async def test_delete_missing_post(authoring_service, admin):
    with pytest.raises(ContentNotFoundError):
        await authoring_service.delete_item(admin, uuid4())

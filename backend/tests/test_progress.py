"""
Tests for the progress aggregator.
"""

import pytest

from edutrack.shared.engine import aggregate, percentage
from edutrack.shared.models.enums import ContentCategory
from tests.factories import make_item, read


INTRO = ContentCategory.FEMALE_MANAGER_INTRO.value
TALK = ContentCategory.MALE_MANAGER_TALK.value
FEEDBACK = ContentCategory.PERSONAL_FEEDBACK.value


@pytest.mark.parametrize(
    "done,total,expected",
    [
        (0, 0, 0),
        (3, 5, 60),
        (1, 4, 25),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (1, 200, 1),
        (4, 4, 100),
    ],
)
def test_percentage_rounds_half_up(done, total, expected):
    assert percentage(done, total) == expected


def test_empty_listing_reports_zero():
    report = aggregate([], {})

    assert report.overall.read == 0
    assert report.overall.total == 0
    assert report.overall.percentage == 0
    assert report.per_category == []


def test_category_with_one_of_four_read():
    """Scenario D: 4 visible 여자_매니저_소개 items, 1 read → 1/4, 25%."""
    items = [make_item(category=INTRO) for _ in range(4)]

    report = aggregate(items, {items[2].id: read()})

    assert len(report.per_category) == 1
    entry = report.per_category[0]
    assert (entry.category, entry.read, entry.total, entry.percentage) == (INTRO, 1, 4, 25)


def test_overall_three_of_five():
    items = [make_item(category=TALK) for _ in range(5)]
    read_map = {item.id: read() for item in items[:3]}

    report = aggregate(items, read_map)

    assert report.overall.read == 3
    assert report.overall.total == 5
    assert report.overall.percentage == 60


def test_uncategorized_items_count_under_personal_feedback():
    items = [make_item(category=None), make_item(category=TALK), make_item(category=None)]

    report = aggregate(items, {items[0].id: read()})

    buckets = {entry.category: (entry.read, entry.total) for entry in report.per_category}
    assert buckets == {FEEDBACK: (1, 2), TALK: (0, 1)}
    assert report.overall.total == 3


def test_custom_uncategorized_bucket():
    report = aggregate([make_item(category=None)], {}, uncategorized_bucket="기타")

    assert [entry.category for entry in report.per_category] == ["기타"]


def test_categories_listed_in_first_appearance_order():
    items = [
        make_item(category=TALK),
        make_item(category=None),
        make_item(category=INTRO),
        make_item(category=TALK),
    ]

    report = aggregate(items, {})

    assert [entry.category for entry in report.per_category] == [TALK, FEEDBACK, INTRO]


def test_read_marks_of_items_outside_the_listing_are_ignored():
    listed = make_item(category=TALK)
    not_listed = make_item(category=TALK)

    report = aggregate([listed], {not_listed.id: read()})

    assert report.overall.read == 0
    assert report.overall.total == 1


def test_category_totals_add_up_to_overall():
    items = [make_item(category=cat) for cat in (TALK, INTRO, None, INTRO, TALK, TALK)]
    read_map = {items[i].id: read() for i in (0, 3, 5)}

    report = aggregate(items, read_map)

    assert sum(entry.total for entry in report.per_category) == report.overall.total
    assert sum(entry.read for entry in report.per_category) == report.overall.read
    for entry in report.per_category:
        assert 0 <= entry.read <= entry.total

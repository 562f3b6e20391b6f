"""
Progress Aggregator

Combines the visible items of one user with that user's read map into
overall and per-category completion figures.

The aggregator trusts its input: it only ever receives items the
Visibility Filter already approved and never re-derives visibility.
"""

from typing import Iterable, Mapping
from uuid import UUID

from edutrack.shared.models.enums import ContentCategory
from edutrack.shared.schemas.entities import (
    UNREAD,
    CategoryProgress,
    ContentItemRecord,
    ProgressReport,
    ProgressStat,
    ReadMark,
)


DEFAULT_UNCATEGORIZED_BUCKET = ContentCategory.PERSONAL_FEEDBACK.value


def percentage(read: int, total: int) -> int:
    """
    Whole-number completion percentage, rounding halves up.

    >>> percentage(3, 5)
    60
    >>> percentage(1, 8)
    13
    >>> percentage(0, 0)
    0
    """
    if total <= 0:
        return 0
    return (read * 200 + total) // (total * 2)


def aggregate(
    visible_items: Iterable[ContentItemRecord],
    read_map: Mapping[UUID, ReadMark],
    uncategorized_bucket: str = DEFAULT_UNCATEGORIZED_BUCKET,
) -> ProgressReport:
    """
    Aggregate read progress.

    Items without a category are counted under `uncategorized_bucket`
    instead of being dropped. Buckets are listed in the order their first
    item appears in `visible_items`.

    Args:
        visible_items: Items visible to the user (already filtered)
        read_map: content id → read mark; missing ids count as unread
        uncategorized_bucket: Bucket name for items with no category

    Returns:
        ProgressReport with overall and per-category stats
    """
    buckets: dict[str, list[int]] = {}
    total_read = 0
    total = 0

    for item in visible_items:
        is_read = read_map.get(item.id, UNREAD).is_read
        bucket = buckets.setdefault(item.category or uncategorized_bucket, [0, 0])
        bucket[1] += 1
        total += 1
        if is_read:
            bucket[0] += 1
            total_read += 1

    return ProgressReport(
        overall=ProgressStat(
            read=total_read,
            total=total,
            percentage=percentage(total_read, total),
        ),
        per_category=[
            CategoryProgress(
                category=category,
                read=read,
                total=count,
                percentage=percentage(read, count),
            )
            for category, (read, count) in buckets.items()
        ],
    )

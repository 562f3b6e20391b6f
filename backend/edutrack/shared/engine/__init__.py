"""
Audience & Read-State Engine

Pure functions over typed rows. Nothing in this package performs I/O or
keeps state between calls.

Pipeline:
=========
    memberships + groups ──► build_membership_index ─┐
    target rows ──────────► TargetingIndex.from_rows ┼─► filter_visible ─► aggregate
    content items ───────────────────────────────────┘          ▲
    read rows ──────────────────────────────────► build_read_map ┘

Usage:
======
    from edutrack.shared.engine import build_membership_index, filter_visible

    index = build_membership_index(memberships, groups)
    targeting = TargetingIndex.from_rows(target_groups, target_users)
    visible = filter_visible(items, user, index, targeting)
"""

from edutrack.shared.engine.membership import build_membership_index, groups_of
from edutrack.shared.engine.targeting import (
    AudiencePredicate,
    TargetingIndex,
    audience_predicate,
    resolve_audience_predicate,
)
from edutrack.shared.engine.visibility import (
    attach_read_marks,
    filter_visible,
    select_pending_for_review,
)
from edutrack.shared.engine.progress import aggregate, percentage

__all__ = [
    "build_membership_index",
    "groups_of",
    "AudiencePredicate",
    "TargetingIndex",
    "audience_predicate",
    "resolve_audience_predicate",
    "filter_visible",
    "select_pending_for_review",
    "attach_read_marks",
    "aggregate",
    "percentage",
]

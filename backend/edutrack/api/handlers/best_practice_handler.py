"""
Best Practice Handler

Best-practice posts: the same endpoint set as education posts, bound to the
best_practice collection. Authoring here is admin-only and never goes
through review.
"""

from edutrack.api.handlers.posts_handler import create_posts_router
from edutrack.shared.models.enums import ContentCollection


router = create_posts_router(ContentCollection.BEST_PRACTICE)

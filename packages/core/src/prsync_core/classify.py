"""Entity kind detection from GitHub node id prefixes.

GitHub encodes the object type in the prefix of its node ids. Only the
prefixes listed here are relied on; they are GitHub's convention, not ours.
"""

from __future__ import annotations

from enum import Enum

THREAD_PREFIX = "PRRT_"
REVIEW_PREFIX = "PRR_"
# Shared by every pull-request-review object (reviews, threads, review comments).
_REVIEW_FAMILY_PREFIX = "PRR"


class EntityKind(str, Enum):
    THREAD = "thread"
    REVIEW = "review"
    ISSUE_COMMENT = "issue_comment"
    UNKNOWN = "unknown"


def classify(entity_id: str) -> EntityKind:
    """Return the kind of entity an output identifier refers to."""
    if entity_id.startswith(THREAD_PREFIX):
        return EntityKind.THREAD
    if entity_id.startswith(REVIEW_PREFIX):
        return EntityKind.REVIEW
    if not entity_id.startswith(_REVIEW_FAMILY_PREFIX):
        return EntityKind.ISSUE_COMMENT
    return EntityKind.UNKNOWN

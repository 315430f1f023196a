"""Recover commit ids for threads from the flat REST review-comment list."""

from __future__ import annotations

from typing import Sequence

from prsync_core.models import ReviewComment, ThreadComment


def find_review_comment(comment_id: int, review_comments: Sequence[ReviewComment]) -> ReviewComment | None:
    for comment in review_comments:
        if comment.id == comment_id:
            return comment
    return None


def commit_for_thread(
    comments: Sequence[ThreadComment],
    review_comments: Sequence[ReviewComment],
) -> str | None:
    """Return the commit id of the thread's first comment, or None.

    The thread source only carries node ids ("PRRC_..."), while the flat list
    is keyed by numeric ids. Node-form ids are never correlated; there is no
    secondary lookup.
    """
    if not comments:
        return None
    first_id = comments[0].id
    if "_" in first_id:
        return None
    try:
        numeric_id = int(first_id)
    except ValueError:
        return None
    if not numeric_id:
        return None
    match = find_review_comment(numeric_id, review_comments)
    if match is None:
        return None
    return match.commit_id or None

"""Merge the fetched sources into one ordered entity stream.

Output order is fixed: review threads, then reviews, then issue comments,
each in source order. Only container reviews (COMMENTED with an empty body)
are dropped; nothing is deduplicated.
"""

from __future__ import annotations

import json
import logging

from prsync_core.actions import issue_comment_action, review_action, thread_action
from prsync_core.correlate import commit_for_thread
from prsync_core.models import (
    EntityComment,
    Entity,
    FetchedData,
    IssueComment,
    IssueCommentEntity,
    Review,
    ReviewComment,
    ReviewEntity,
    ReviewThread,
    ThreadEntity,
    entity_from_dict,
)

logger = logging.getLogger(__name__)


def _thread_entity(thread: ReviewThread, review_comments: list[ReviewComment]) -> ThreadEntity:
    return ThreadEntity(
        id=thread.id,
        action=thread_action(thread),
        commit=commit_for_thread(thread.comments, review_comments),
        path=thread.path,
        line=thread.line,
        is_resolved=thread.is_resolved,
        comments=tuple(
            EntityComment(id=c.id, author=c.author, body=c.body, created_at=c.created_at) for c in thread.comments
        ),
    )


def _review_entity(review: Review) -> ReviewEntity:
    return ReviewEntity(
        id=review.id,
        action=review_action(review),
        commit=review.commit,
        author=review.author,
        state=review.state,
        body=review.body or "",
    )


def _issue_comment_entity(comment: IssueComment) -> IssueCommentEntity:
    # The node id is the only key that can be resolved back to the comment later.
    return IssueCommentEntity(
        id=comment.node_id,
        action=issue_comment_action(comment),
        author=comment.author,
        body=comment.body,
    )


def transform(data: FetchedData) -> list[Entity]:
    """Build the output entities for one pull request snapshot."""
    entities: list[Entity] = []

    for thread in data.threads:
        entities.append(_thread_entity(thread, data.review_comments))

    for review in data.reviews:
        if review.is_container:
            logger.debug("Skipping container review %s", review.id)
            continue
        entities.append(_review_entity(review))

    for comment in data.issue_comments:
        entities.append(_issue_comment_entity(comment))

    return entities


def to_jsonl(entities: list[Entity]) -> str:
    """One compact JSON record per entity, newline separated, no trailing newline."""
    return "\n".join(json.dumps(e.to_dict(), separators=(",", ":"), ensure_ascii=False) for e in entities)


def from_jsonl(text: str) -> list[Entity]:
    # Records end at "\n" only. Bodies are written unescaped and may hold U+2028 or U+0085.
    return [entity_from_dict(json.loads(line)) for line in text.split("\n") if line.strip()]

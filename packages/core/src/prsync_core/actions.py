"""Derive an entity's lifecycle status from its resolved flag or reactions."""

from __future__ import annotations

from typing import Iterable

from prsync_core.models import Action, IssueComment, Review, ReviewThread

# Keys are lower-case reaction contents.
REACTION_ACTIONS: dict[str, Action] = {
    "+1": Action.DONE,
    "-1": Action.SKIP,
    "eyes": Action.IN_PROGRESS,
    "hooray": Action.DONE,
    "rocket": Action.IN_PROGRESS,
}


def action_from_reactions(reactions: Iterable[str] | None) -> Action | None:
    """Return the action of the first recognised reaction, in source order."""
    if not reactions:
        return None
    for content in reactions:
        action = REACTION_ACTIONS.get(content.lower())
        if action is not None:
            return action
    return None


def thread_action(thread: ReviewThread) -> Action:
    """Resolved threads are done; otherwise the first comment's reactions decide."""
    if thread.is_resolved:
        return Action.DONE
    if thread.comments:
        action = action_from_reactions(thread.comments[0].reactions)
        if action is not None:
            return action
    return Action.PENDING


def issue_comment_action(comment: IssueComment) -> Action:
    return action_from_reactions(comment.reactions) or Action.PENDING


def review_action(review: Review) -> Action:
    # Reviews have no reaction surface, so they never leave pending.
    return Action.PENDING

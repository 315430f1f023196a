"""Tests for lifecycle status derivation."""

import pytest

from prsync_core.actions import (
    REACTION_ACTIONS,
    action_from_reactions,
    issue_comment_action,
    review_action,
    thread_action,
)
from prsync_core.models import Action, IssueComment, Review, ReviewThread, ThreadComment


def _thread(is_resolved=False, reactions=None, with_comment=True):
    comments = []
    if with_comment:
        comments.append(
            ThreadComment(id="PRRC_1", body="x", author="alice", created_at="2024-01-01T00:00:00Z", reactions=reactions)
        )
    return ReviewThread(id="PRRT_1", is_resolved=is_resolved, path="a.py", line=1, comments=comments)


def _issue_comment(reactions=None):
    return IssueComment(
        id="1", node_id="IC_1", author="bob", body="hi", created_at="2024-01-01T00:00:00Z", reactions=reactions
    )


class TestActionFromReactions:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("+1", Action.DONE),
            ("-1", Action.SKIP),
            ("eyes", Action.IN_PROGRESS),
            ("hooray", Action.DONE),
            ("rocket", Action.IN_PROGRESS),
        ],
    )
    def test_mapping(self, content, expected):
        assert action_from_reactions([content]) is expected

    def test_case_insensitive(self):
        assert action_from_reactions(["EYES"]) is Action.IN_PROGRESS

    def test_first_recognised_reaction_wins(self):
        assert action_from_reactions(["ROCKET", "+1"]) is Action.IN_PROGRESS

    def test_unrecognised_reactions_skipped(self):
        assert action_from_reactions(["heart", "laugh", "-1"]) is Action.SKIP

    @pytest.mark.parametrize("reactions", [None, [], ["heart", "confused"]])
    def test_no_match_returns_none(self, reactions):
        assert action_from_reactions(reactions) is None

    def test_mapping_never_yields_reserved_fix(self):
        assert Action.FIX not in REACTION_ACTIONS.values()


class TestThreadAction:
    def test_resolved_is_done_regardless_of_reactions(self):
        assert thread_action(_thread(is_resolved=True, reactions=["-1"])) is Action.DONE

    def test_unresolved_uses_first_comment_reactions(self):
        assert thread_action(_thread(reactions=["eyes"])) is Action.IN_PROGRESS

    def test_unresolved_without_reactions_is_pending(self):
        assert thread_action(_thread(reactions=None)) is Action.PENDING

    def test_unresolved_without_comments_is_pending(self):
        assert thread_action(_thread(with_comment=False)) is Action.PENDING

    def test_later_comment_reactions_ignored(self):
        thread = _thread(reactions=[])
        thread.comments.append(
            ThreadComment(id="PRRC_2", body="y", author="bob", created_at="2024-01-02T00:00:00Z", reactions=["+1"])
        )
        assert thread_action(thread) is Action.PENDING


class TestOtherActions:
    def test_issue_comment_uses_own_reactions(self):
        assert issue_comment_action(_issue_comment(["-1"])) is Action.SKIP

    def test_issue_comment_defaults_to_pending(self):
        assert issue_comment_action(_issue_comment()) is Action.PENDING

    def test_review_is_always_pending(self):
        review = Review(id="PRR_1", author="carol", state="APPROVED", body="LGTM")
        assert review_action(review) is Action.PENDING

"""Tests for building source records from API payloads and entity (de)serialization."""

import dataclasses

import pytest

from prsync_core.models import (
    Action,
    EntityComment,
    IssueComment,
    IssueCommentEntity,
    Review,
    ReviewComment,
    ReviewThread,
    ThreadEntity,
    entity_from_dict,
)


class TestFromApi:
    def test_thread_unwraps_comment_nodes(self):
        thread = ReviewThread.from_api(
            {
                "id": "PRRT_1",
                "isResolved": True,
                "path": "a.py",
                "line": None,
                "comments": {
                    "nodes": [
                        {
                            "id": "PRRC_1",
                            "body": "nit",
                            "author": {"login": "alice"},
                            "createdAt": "2024-01-01T00:00:00Z",
                            "reactions": {"nodes": [{"content": "eyes"}, {"content": "+1"}]},
                        },
                        {"id": "PRRC_2", "body": "ok", "author": None, "createdAt": "2024-01-02T00:00:00Z"},
                    ]
                },
            }
        )
        assert thread.is_resolved is True
        assert thread.line is None
        assert [c.id for c in thread.comments] == ["PRRC_1", "PRRC_2"]
        assert thread.comments[0].reactions == ["eyes", "+1"]
        assert thread.comments[1].author is None
        assert thread.comments[1].reactions is None

    def test_review_commit_and_null_body(self):
        review = Review.from_api(
            {"id": "PRR_1", "author": {"login": "bob"}, "state": "APPROVED", "body": None, "commit": {"oid": "abc"}}
        )
        assert review.body == ""
        assert review.commit == "abc"

    def test_review_without_commit(self):
        review = Review.from_api({"id": "PRR_1", "author": None, "state": "PENDING", "body": "", "commit": None})
        assert review.commit is None
        assert review.author is None

    @pytest.mark.parametrize(
        "state, body, expected",
        [("COMMENTED", "", True), ("COMMENTED", "   ", True), ("COMMENTED", "x", False), ("APPROVED", "", False)],
    )
    def test_review_is_container(self, state, body, expected):
        assert Review(id="PRR_1", author=None, state=state, body=body).is_container is expected

    def test_issue_comment_keeps_both_ids(self):
        comment = IssueComment.from_api(
            {"id": 42, "node_id": "IC_42", "author": {"login": "c"}, "body": "hi", "createdAt": "t"}
        )
        assert comment.id == "42"
        assert comment.node_id == "IC_42"

    def test_review_comment_from_rest_payload(self):
        comment = ReviewComment.from_api(
            {
                "id": 99,
                "node_id": "PRRC_99",
                "user": {"login": "dana"},
                "body": "typo",
                "path": "README.md",
                "line": 3,
                "commit_id": "deadbeef",
                "original_commit_id": "cafebabe",
                "pull_request_review_id": 7,
                "in_reply_to_id": None,
                "created_at": "2024-01-01T00:00:00Z",
                "html_url": "https://github.com/o/r/pull/1#discussion_r99",
            }
        )
        assert comment.id == 99
        assert comment.user == "dana"
        assert comment.commit_id == "deadbeef"


class TestEntities:
    def test_entities_are_immutable(self):
        entity = IssueCommentEntity(id="IC_1", action=Action.PENDING, author="a", body="b")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entity.action = Action.DONE

    def test_type_tag(self):
        assert ThreadEntity(id="PRRT_1", action=Action.PENDING).type == "thread"

    def test_from_dict_thread(self):
        record = {
            "id": "PRRT_1",
            "type": "thread",
            "commit": None,
            "path": "a.py",
            "line": 4,
            "is_resolved": False,
            "action": "in_progress",
            "comments": [{"id": "PRRC_1", "author": None, "body": "x", "created_at": "t"}],
        }
        entity = entity_from_dict(record)
        assert entity == ThreadEntity(
            id="PRRT_1",
            action=Action.IN_PROGRESS,
            path="a.py",
            line=4,
            comments=(EntityComment(id="PRRC_1", author=None, body="x", created_at="t"),),
        )
        assert entity.to_dict() == record

    def test_from_dict_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown entity type"):
            entity_from_dict({"id": "x", "type": "commit", "action": "pending"})

"""Source records fetched from GitHub and the entities emitted from them.

Source records (ReviewThread, Review, IssueComment, ReviewComment) mirror the
payloads returned by the GraphQL and REST APIs and are built with
``from_api``. Output entities form a tagged union: every variant shares
``id``, ``type`` and ``action`` and adds its own fields. They are frozen so a
sync run can never mutate entities it has already emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class Action(str, Enum):
    """Lifecycle status attached to every output entity."""

    PENDING = "pending"
    DONE = "done"
    SKIP = "skip"
    IN_PROGRESS = "in_progress"
    FIX = "fix"  # reserved legacy value, never produced


def _login(author: dict | None) -> str | None:
    if not author:
        return None
    return author.get("login") or None


def _reaction_contents(raw: dict | list | None) -> list[str] | None:
    """Accept either ``{"nodes": [{"content": ...}]}`` or a plain list of contents."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        raw = raw.get("nodes") or []
    contents = []
    for item in raw:
        if isinstance(item, dict):
            content = item.get("content")
            if content:
                contents.append(content)
        elif item:
            contents.append(item)
    return contents


# --------------------------------------------------------------------------- #
# Source records                                                               #
# --------------------------------------------------------------------------- #


@dataclass
class ThreadComment:
    id: str
    body: str
    author: str | None
    created_at: str
    reactions: list[str] | None = None

    @classmethod
    def from_api(cls, d: dict) -> ThreadComment:
        return cls(
            id=str(d.get("id", "")),
            body=d.get("body") or "",
            author=_login(d.get("author")),
            created_at=d.get("createdAt", ""),
            reactions=_reaction_contents(d.get("reactions")),
        )


@dataclass
class ReviewThread:
    """An inline discussion anchored to a file and line."""

    id: str
    is_resolved: bool
    path: str | None = None
    line: int | None = None
    comments: list[ThreadComment] = field(default_factory=list)

    @classmethod
    def from_api(cls, d: dict) -> ReviewThread:
        comments = d.get("comments") or []
        # GraphQL wraps connections in {"nodes": [...]}
        if isinstance(comments, dict):
            comments = comments.get("nodes") or []
        return cls(
            id=d["id"],
            is_resolved=bool(d.get("isResolved", False)),
            path=d.get("path"),
            line=d.get("line"),
            comments=[ThreadComment.from_api(c) for c in comments],
        )


@dataclass
class Review:
    """A top-level verdict on the pull request."""

    id: str
    author: str | None
    state: str
    body: str = ""
    commit: str | None = None
    submitted_at: str | None = None

    @property
    def is_container(self) -> bool:
        """True for a COMMENTED review with no body.

        GitHub creates these to group inline comments, which are already
        represented by their threads.
        """
        return self.state == "COMMENTED" and not (self.body or "").strip()

    @classmethod
    def from_api(cls, d: dict) -> Review:
        commit = d.get("commit") or {}
        return cls(
            id=d["id"],
            author=_login(d.get("author")),
            state=d.get("state", ""),
            body=d.get("body") or "",
            commit=commit.get("oid") or None,
            submitted_at=d.get("submittedAt"),
        )


@dataclass
class IssueComment:
    """A PR-level comment. ``node_id`` is the stable key used in output."""

    id: str
    node_id: str
    author: str | None
    body: str
    created_at: str
    reactions: list[str] | None = None

    @classmethod
    def from_api(cls, d: dict) -> IssueComment:
        return cls(
            id=str(d.get("id", "")),
            node_id=d["node_id"],
            author=_login(d.get("author")),
            body=d.get("body") or "",
            created_at=d.get("createdAt", ""),
            reactions=_reaction_contents(d.get("reactions")),
        )


@dataclass
class ReviewComment:
    """Flat REST view of an inline comment, used only to look up commit ids."""

    id: int
    node_id: str
    user: str | None
    body: str
    path: str
    line: int | None
    start_line: int | None
    commit_id: str
    original_commit_id: str
    pull_request_review_id: int | None
    in_reply_to_id: int | None
    created_at: str
    html_url: str

    @classmethod
    def from_api(cls, d: dict) -> ReviewComment:
        return cls(
            id=int(d["id"]),
            node_id=d.get("node_id", ""),
            user=_login(d.get("user")),
            body=d.get("body") or "",
            path=d.get("path", ""),
            line=d.get("line"),
            start_line=d.get("start_line"),
            commit_id=d.get("commit_id") or "",
            original_commit_id=d.get("original_commit_id") or "",
            pull_request_review_id=d.get("pull_request_review_id"),
            in_reply_to_id=d.get("in_reply_to_id"),
            created_at=d.get("created_at", ""),
            html_url=d.get("html_url", ""),
        )


@dataclass
class PRMeta:
    number: int
    title: str
    state: str
    head_ref: str
    base_ref: str
    head_sha: str

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "title": self.title,
            "state": self.state,
            "headRefName": self.head_ref,
            "baseRefName": self.base_ref,
            "headRefOid": self.head_sha,
        }


@dataclass
class FetchedData:
    """Snapshot of every source fetched for one pull request."""

    meta: PRMeta | None = None
    threads: list[ReviewThread] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    issue_comments: list[IssueComment] = field(default_factory=list)
    review_comments: list[ReviewComment] = field(default_factory=list)


# --------------------------------------------------------------------------- #
# Output entities                                                              #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class EntityComment:
    id: str
    author: str | None
    body: str
    created_at: str

    def to_dict(self) -> dict:
        return {"id": self.id, "author": self.author, "body": self.body, "created_at": self.created_at}


@dataclass(frozen=True)
class BaseEntity:
    TYPE: ClassVar[str] = ""

    id: str
    action: Action

    @property
    def type(self) -> str:
        return self.TYPE


@dataclass(frozen=True)
class ThreadEntity(BaseEntity):
    TYPE: ClassVar[str] = "thread"

    commit: str | None = None
    path: str | None = None
    line: int | None = None
    is_resolved: bool = False
    comments: tuple[EntityComment, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.TYPE,
            "commit": self.commit,
            "path": self.path,
            "line": self.line,
            "is_resolved": self.is_resolved,
            "action": self.action.value,
            "comments": [c.to_dict() for c in self.comments],
        }


@dataclass(frozen=True)
class ReviewEntity(BaseEntity):
    TYPE: ClassVar[str] = "review"

    commit: str | None = None
    author: str | None = None
    state: str = ""
    body: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.TYPE,
            "commit": self.commit,
            "author": self.author,
            "state": self.state,
            "body": self.body,
            "action": self.action.value,
        }


@dataclass(frozen=True)
class IssueCommentEntity(BaseEntity):
    TYPE: ClassVar[str] = "issue_comment"

    author: str | None = None
    body: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.TYPE,
            "author": self.author,
            "body": self.body,
            "action": self.action.value,
        }


Entity = Union[ThreadEntity, ReviewEntity, IssueCommentEntity]


def entity_from_dict(d: dict) -> Entity:
    """Rebuild an entity from its JSONL record, dispatching on ``type``."""
    entity_type = d.get("type")
    action = Action(d.get("action", Action.PENDING.value))
    if entity_type == ThreadEntity.TYPE:
        return ThreadEntity(
            id=d["id"],
            action=action,
            commit=d.get("commit"),
            path=d.get("path"),
            line=d.get("line"),
            is_resolved=bool(d.get("is_resolved", False)),
            comments=tuple(
                EntityComment(
                    id=c["id"],
                    author=c.get("author"),
                    body=c.get("body", ""),
                    created_at=c.get("created_at", ""),
                )
                for c in d.get("comments", [])
            ),
        )
    if entity_type == ReviewEntity.TYPE:
        return ReviewEntity(
            id=d["id"],
            action=action,
            commit=d.get("commit"),
            author=d.get("author"),
            state=d.get("state", ""),
            body=d.get("body", ""),
        )
    if entity_type == IssueCommentEntity.TYPE:
        return IssueCommentEntity(id=d["id"], action=action, author=d.get("author"), body=d.get("body", ""))
    raise ValueError(f"Unknown entity type: {entity_type!r}")

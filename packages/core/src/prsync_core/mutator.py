"""Write a local status decision back to GitHub.

A status is encoded as a reaction on the entity's backing comment: the first
comment of a review thread, or the issue comment itself. Output entities only
carry node ids, so every write is preceded by a GraphQL lookup of the numeric
database id the REST reaction endpoints expect.

Every step blocks and the first failure aborts the call. A reply is only
attempted once the reaction has been applied, and a failed reply does not
roll the reaction back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prsync_core.classify import EntityKind, classify
from prsync_core.errors import RemoteCallError, ReplyError, UnresolvedReferenceError, UnsupportedEntityError
from prsync_core.gh.client import GitHubClient, remote_call
from prsync_core.models import Action

logger = logging.getLogger(__name__)

STATUS_REACTIONS: dict[Action, str] = {
    Action.DONE: "+1",
    Action.SKIP: "-1",
    Action.IN_PROGRESS: "eyes",
}

RESOLVABLE_STATUSES = tuple(a.value for a in STATUS_REACTIONS)

_THREAD_FIRST_COMMENT_QUERY = """
query($threadId: ID!) {
  node(id: $threadId) {
    ... on PullRequestReviewThread {
      comments(first: 1) {
        nodes { databaseId }
      }
    }
  }
}
"""

_ISSUE_COMMENT_QUERY = """
query($nodeId: ID!) {
  node(id: $nodeId) {
    ... on IssueComment {
      id
      databaseId
    }
  }
}
"""

_THREAD_PULL_REQUEST_QUERY = """
query($threadId: ID!) {
  node(id: $threadId) {
    ... on PullRequestReviewThread {
      pullRequest { number }
    }
  }
}
"""

_ISSUE_COMMENT_ISSUE_QUERY = """
query($nodeId: ID!) {
  node(id: $nodeId) {
    ... on IssueComment {
      issue { number }
    }
  }
}
"""

_THREAD_REPLY_MUTATION = """
mutation($threadId: ID!, $body: String!) {
  addPullRequestReviewThreadReply(input: {pullRequestReviewThreadId: $threadId, body: $body}) {
    comment { id }
  }
}
"""


@dataclass
class ResolveResult:
    entry_id: str
    kind: EntityKind
    status: Action
    reaction: str
    database_id: int
    replied: bool = False


def reaction_for_status(status: str | Action) -> str:
    try:
        action = Action(status)
    except ValueError:
        action = None
    if action not in STATUS_REACTIONS:
        raise ValueError(f"Invalid status: {status}. Must be one of: {', '.join(RESOLVABLE_STATUSES)}")
    return STATUS_REACTIONS[action]


# --------------------------------------------------------------------------- #
# Lookups                                                                      #
# --------------------------------------------------------------------------- #


def thread_first_comment_id(client: GitHubClient, thread_id: str) -> int:
    data = client.graphql(
        _THREAD_FIRST_COMMENT_QUERY,
        {"threadId": thread_id},
        context=f"Looking up first comment of thread {thread_id}",
    )
    nodes = (((data.get("node") or {}).get("comments")) or {}).get("nodes") or []
    database_id = nodes[0].get("databaseId") if nodes and nodes[0] else None
    if not database_id:
        raise UnresolvedReferenceError(thread_id, f"Could not find comments in thread: {thread_id}")
    return int(database_id)


def issue_comment_database_id(client: GitHubClient, node_id: str) -> int:
    data = client.graphql(
        _ISSUE_COMMENT_QUERY,
        {"nodeId": node_id},
        context=f"Looking up issue comment {node_id}",
    )
    database_id = (data.get("node") or {}).get("databaseId")
    if not database_id:
        raise UnresolvedReferenceError(node_id, f"Could not find issue comment with node_id: {node_id}")
    return int(database_id)


def thread_pull_request_number(client: GitHubClient, thread_id: str) -> int:
    data = client.graphql(
        _THREAD_PULL_REQUEST_QUERY,
        {"threadId": thread_id},
        context=f"Looking up pull request of thread {thread_id}",
    )
    number = ((data.get("node") or {}).get("pullRequest") or {}).get("number")
    if not number:
        raise UnresolvedReferenceError(thread_id, f"Could not find pull request for thread: {thread_id}")
    return int(number)


def issue_comment_issue_number(client: GitHubClient, node_id: str) -> int:
    data = client.graphql(
        _ISSUE_COMMENT_ISSUE_QUERY,
        {"nodeId": node_id},
        context=f"Looking up issue of comment {node_id}",
    )
    number = ((data.get("node") or {}).get("issue") or {}).get("number")
    if not number:
        raise UnresolvedReferenceError(node_id, f"Could not find issue for comment: {node_id}")
    return int(number)


# --------------------------------------------------------------------------- #
# Writes                                                                       #
# --------------------------------------------------------------------------- #


def add_review_comment_reaction(repo_obj, comment_id: int, reaction: str) -> None:
    with remote_call(f"Adding reaction {reaction} to review comment {comment_id}"):
        repo_obj.get_pulls_comment(comment_id).create_reaction(reaction)


def add_issue_comment_reaction(repo_obj, comment_id: int, reaction: str) -> None:
    with remote_call(f"Adding reaction {reaction} to issue comment {comment_id}"):
        repo_obj.get_issues_comment(comment_id).create_reaction(reaction)


def reply_to_thread(client: GitHubClient, thread_id: str, body: str) -> None:
    # The lookup confirms the thread belongs to a pull request before posting.
    pr_number = thread_pull_request_number(client, thread_id)
    client.graphql(
        _THREAD_REPLY_MUTATION,
        {"threadId": thread_id, "body": body},
        context=f"Replying to thread {thread_id} on PR #{pr_number}",
    )


def reply_to_issue_comment(client: GitHubClient, repo_obj, node_id: str, body: str) -> None:
    issue_number = issue_comment_issue_number(client, node_id)
    with remote_call(f"Commenting on PR #{issue_number}"):
        repo_obj.get_issue(issue_number).create_comment(body)


def resolve_entry(
    client: GitHubClient,
    owner: str,
    repo: str,
    entry_id: str,
    status: str | Action,
    comment: str | None = None,
) -> ResolveResult:
    """Mark a synced entry with ``status`` and optionally reply to it."""
    kind = classify(entry_id)
    if kind is EntityKind.REVIEW:
        raise UnsupportedEntityError(f"Reviews cannot be resolved directly (entry: {entry_id})")
    if kind is EntityKind.UNKNOWN:
        raise UnsupportedEntityError(f"Cannot determine the entry type of {entry_id}")

    reaction = reaction_for_status(status)
    logger.info("Resolving %s %s as %s", kind.value, entry_id, Action(status).value)

    repo_obj = client.get_repo(owner, repo, lazy=True)
    if kind is EntityKind.THREAD:
        database_id = thread_first_comment_id(client, entry_id)
        add_review_comment_reaction(repo_obj, database_id, reaction)
    else:
        database_id = issue_comment_database_id(client, entry_id)
        add_issue_comment_reaction(repo_obj, database_id, reaction)
    logger.info("Added reaction: %s", reaction)

    result = ResolveResult(
        entry_id=entry_id,
        kind=kind,
        status=Action(status),
        reaction=reaction,
        database_id=database_id,
    )

    if comment:
        try:
            if kind is EntityKind.THREAD:
                reply_to_thread(client, entry_id, comment)
            else:
                reply_to_issue_comment(client, repo_obj, entry_id, comment)
        except RemoteCallError as exc:
            raise ReplyError(exc.context, f"{exc.detail} (reaction {reaction} was already applied)") from exc
        except UnresolvedReferenceError as exc:
            raise ReplyError(
                f"Replying to {entry_id}", f"{exc} (reaction {reaction} was already applied)"
            ) from exc
        result.replied = True
        logger.info("Comment added")

    return result

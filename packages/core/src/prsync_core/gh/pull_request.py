"""Fetch the five raw sources that make up a pull request's review conversation.

Each source is a single fixed-size page: 100 threads of up to 50 comments,
100 reviews, 100 issue comments and 100 flat review comments.
"""

from __future__ import annotations

import logging
from typing import Callable

from prsync_core.errors import RemoteCallError
from prsync_core.gh.client import GitHubClient, remote_call
from prsync_core.models import FetchedData, IssueComment, PRMeta, Review, ReviewComment, ReviewThread

logger = logging.getLogger(__name__)

THREAD_LIMIT = 100
THREAD_COMMENT_LIMIT = 50
REACTION_LIMIT = 20
REVIEW_LIMIT = 100
ISSUE_COMMENT_LIMIT = 100
REVIEW_COMMENT_PAGE_SIZE = 100

_THREADS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      reviewThreads(first: %d) {
        nodes {
          id
          isResolved
          path
          line
          comments(first: %d) {
            nodes {
              id
              body
              author { login }
              createdAt
              reactions(first: %d) { nodes { content } }
            }
          }
        }
      }
    }
  }
}
""" % (THREAD_LIMIT, THREAD_COMMENT_LIMIT, REACTION_LIMIT)

_REVIEWS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      reviews(first: %d) {
        nodes {
          id
          author { login }
          state
          body
          commit { oid }
          submittedAt
        }
      }
    }
  }
}
""" % REVIEW_LIMIT

_ISSUE_COMMENTS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      comments(first: %d) {
        nodes {
          id
          databaseId
          author { login }
          body
          createdAt
          reactions(first: %d) { nodes { content } }
        }
      }
    }
  }
}
""" % (ISSUE_COMMENT_LIMIT, REACTION_LIMIT)

# GraphQL reports reactions as enum names; REST uses these short tokens.
_GRAPHQL_REACTIONS = {
    "THUMBS_UP": "+1",
    "THUMBS_DOWN": "-1",
}


def normalize_reaction(content: str) -> str:
    return _GRAPHQL_REACTIONS.get(content, content.lower())


def _normalized_reactions(node: dict) -> dict | None:
    reactions = node.get("reactions")
    if reactions is None:
        return None
    return {"nodes": [{"content": normalize_reaction(r["content"])} for r in reactions.get("nodes") or [] if r]}


def _pull_request_node(data: dict, context: str) -> dict:
    pull = (data.get("repository") or {}).get("pullRequest")
    if pull is None:
        raise RemoteCallError(context, "pull request not found")
    return pull


def _variables(owner: str, repo: str, pr_number: int) -> dict:
    return {"owner": owner, "repo": repo, "number": pr_number}


def fetch_pr_meta(client: GitHubClient, owner: str, repo: str, pr_number: int) -> PRMeta:
    repo_obj = client.get_repo(owner, repo)
    with remote_call(f"Fetching PR #{pr_number} metadata"):
        pr = repo_obj.get_pull(pr_number)
        return PRMeta(
            number=pr.number,
            title=pr.title or "",
            state="MERGED" if pr.merged else (pr.state or "").upper(),
            head_ref=pr.head.ref,
            base_ref=pr.base.ref,
            head_sha=pr.head.sha,
        )


def fetch_review_threads(client: GitHubClient, owner: str, repo: str, pr_number: int) -> list[ReviewThread]:
    context = f"Fetching review threads for PR #{pr_number}"
    data = client.graphql(_THREADS_QUERY, _variables(owner, repo, pr_number), context)
    nodes = (_pull_request_node(data, context).get("reviewThreads") or {}).get("nodes") or []

    threads = []
    for node in nodes:
        comments = [
            {**c, "reactions": _normalized_reactions(c)} for c in (node.get("comments") or {}).get("nodes") or []
        ]
        threads.append(ReviewThread.from_api({**node, "comments": comments}))
    return threads


def fetch_reviews(client: GitHubClient, owner: str, repo: str, pr_number: int) -> list[Review]:
    context = f"Fetching reviews for PR #{pr_number}"
    data = client.graphql(_REVIEWS_QUERY, _variables(owner, repo, pr_number), context)
    nodes = (_pull_request_node(data, context).get("reviews") or {}).get("nodes") or []
    return [Review.from_api(n) for n in nodes]


def fetch_issue_comments(client: GitHubClient, owner: str, repo: str, pr_number: int) -> list[IssueComment]:
    context = f"Fetching issue comments for PR #{pr_number}"
    data = client.graphql(_ISSUE_COMMENTS_QUERY, _variables(owner, repo, pr_number), context)
    nodes = (_pull_request_node(data, context).get("comments") or {}).get("nodes") or []
    return [
        IssueComment.from_api(
            {
                **n,
                "id": n.get("databaseId") or "",
                "node_id": n["id"],
                "reactions": _normalized_reactions(n),
            }
        )
        for n in nodes
    ]


def fetch_review_comments(client: GitHubClient, owner: str, repo: str, pr_number: int) -> list[ReviewComment]:
    payload = client.rest(
        "GET",
        f"/repos/{owner}/{repo}/pulls/{pr_number}/comments",
        context=f"Fetching review comments for PR #{pr_number}",
        parameters={"per_page": REVIEW_COMMENT_PAGE_SIZE},
    )
    return [ReviewComment.from_api(c) for c in payload or []]


def fetch_all(
    client: GitHubClient,
    owner: str,
    repo: str,
    pr_number: int,
    progress: Callable[[str], None] | None = None,
) -> FetchedData:
    """Fetch every source, one call after another."""
    report = progress or logger.info

    report("Fetching PR metadata...")
    meta = fetch_pr_meta(client, owner, repo, pr_number)

    report("Fetching review threads...")
    threads = fetch_review_threads(client, owner, repo, pr_number)

    report("Fetching reviews...")
    reviews = fetch_reviews(client, owner, repo, pr_number)

    report("Fetching issue comments...")
    issue_comments = fetch_issue_comments(client, owner, repo, pr_number)

    report("Fetching review comments...")
    review_comments = fetch_review_comments(client, owner, repo, pr_number)

    return FetchedData(
        meta=meta,
        threads=threads,
        reviews=reviews,
        issue_comments=issue_comments,
        review_comments=review_comments,
    )

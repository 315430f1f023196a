"""Thin gateway over PyGithub used by the fetcher and the status mutator.

All GitHub failures leave this module as RemoteCallError, tagged with a short
description of the operation that was running.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import requests
from github import Auth, Github, GithubException

from prsync_core.errors import RemoteCallError

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


def _describe(exc: Exception) -> str:
    if isinstance(exc, GithubException):
        data = exc.data if isinstance(exc.data, dict) else {}
        message = data.get("message") or exc.message or str(exc)
        return f"{exc.status} {message}" if exc.status else str(message)
    return str(exc)


@contextmanager
def remote_call(context: str) -> Iterator[None]:
    """Translate PyGithub and transport errors raised inside the block."""
    try:
        yield
    except (GithubException, requests.RequestException) as exc:
        raise RemoteCallError(context, _describe(exc)) from exc


def _check_graphql_errors(payload: dict, context: str) -> None:
    errors = payload.get("errors")
    if errors:
        first = errors[0]
        message = first.get("message", errors) if isinstance(first, dict) else first
        raise RemoteCallError(context, f"GraphQL error: {message}")


class GitHubClient:
    """Authenticated access to the GraphQL and REST APIs.

    ``github`` may be passed in directly (tests, or callers that already hold
    a configured client); otherwise one is built from ``token``.
    """

    def __init__(self, token: str | None = None, per_page: int = DEFAULT_PER_PAGE, github: Github | None = None):
        if github is None:
            if not token:
                raise ValueError("A GitHub token is required.")
            github = Github(auth=Auth.Token(token), per_page=per_page)
        self._gh = github

    @property
    def github(self) -> Github:
        return self._gh

    def graphql(self, query: str, variables: dict[str, Any], context: str) -> dict:
        """Run a GraphQL query or mutation and return its ``data`` object."""
        logger.debug("GraphQL: %s %s", context, variables)
        with remote_call(context):
            _, payload = self._gh.requester.graphql_query(query, variables)
        payload = payload or {}
        _check_graphql_errors(payload, context)
        return payload.get("data") or {}

    def rest(
        self,
        verb: str,
        path: str,
        context: str,
        parameters: dict | None = None,
        input: dict | None = None,
    ) -> Any:
        """Call a REST endpoint (path relative to the API root) and return the JSON body."""
        logger.debug("REST: %s %s (%s)", verb, path, context)
        with remote_call(context):
            _, payload = self._gh.requester.requestJsonAndCheck(verb, path, parameters=parameters, input=input)
        return payload

    def get_repo(self, owner: str, repo: str, lazy: bool = False):
        with remote_call(f"Loading repository {owner}/{repo}"):
            return self._gh.get_repo(f"{owner}/{repo}", lazy=lazy)

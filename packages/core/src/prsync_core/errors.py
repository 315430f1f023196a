"""Exception hierarchy shared by the sync and resolve paths.

Every failure the CLI reports derives from PRSyncError so a single except
clause at the command boundary can turn it into an exit code.
"""

from __future__ import annotations


class PRSyncError(Exception):
    """Base class for all prsync failures."""


class InvalidPRReferenceError(PRSyncError, ValueError):
    """A PR reference (number, slug, or URL) could not be parsed."""


class RemoteCallError(PRSyncError):
    """A GitHub API call failed. The message names the operation that triggered it."""

    def __init__(self, context: str, detail: str):
        self.context = context
        self.detail = detail
        super().__init__(f"{context} failed: {detail}")


class ReplyError(RemoteCallError):
    """Posting a reply failed after the status reaction was already applied."""


class UnresolvedReferenceError(PRSyncError):
    """A lookup returned no backing database id for an identifier."""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        super().__init__(message)


class UnsupportedEntityError(PRSyncError):
    """The identifier names an entity kind that cannot be resolved."""

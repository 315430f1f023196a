"""Parse the ways a user can point at a pull request.

Accepted forms:
  123
  owner/repo#123
  owner/repo/123
  https://github.com/owner/repo/pull/123  (also without the scheme, or with
                                            a trailing /files, /commits, ...)
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from prsync_core.errors import InvalidPRReferenceError

_PR_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/pull/(\d+)")
_SLUG_PR_RE = re.compile(r"^([^/]+)/([^/#]+)[#/](\d+)$")
_TRAILING_TAB_RE = re.compile(r"/(files|commits|checks|conflicts)/?$")


@dataclass(frozen=True)
class PRRef:
    owner: str
    repo: str
    number: int

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def output_dir(self, root: str) -> str:
        return os.path.join(root, self.owner, self.repo, "pr", str(self.number))

    def __str__(self) -> str:
        return f"{self.slug}#{self.number}"


def parse_pr_url(url: str) -> PRRef:
    clean = re.sub(r"^https?://", "", url.strip())
    clean = _TRAILING_TAB_RE.sub("", clean)
    match = _PR_URL_RE.search(clean)
    if not match:
        raise InvalidPRReferenceError(f"Invalid PR URL: {url}")
    return PRRef(owner=match.group(1), repo=match.group(2), number=int(match.group(3)))


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Split ``owner/repo`` into its parts."""
    parts = slug.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidPRReferenceError(f"Invalid repository: {slug!r}. Expected OWNER/REPO.")
    return parts[0], parts[1]


def parse_pr_reference(ref: str, default_repo: str | None = None) -> PRRef:
    """Turn any accepted PR reference into a PRRef.

    A bare number needs ``default_repo`` (OWNER/REPO) to be meaningful.
    """
    ref = ref.strip()
    if ref.startswith("http") or "github.com" in ref:
        return parse_pr_url(ref)

    if "/" in ref:
        match = _SLUG_PR_RE.match(ref)
        if not match:
            raise InvalidPRReferenceError(f"Invalid PR format: {ref}")
        return PRRef(owner=match.group(1), repo=match.group(2), number=int(match.group(3)))

    if not ref.isdigit():
        raise InvalidPRReferenceError(f"Invalid PR format: {ref}")
    if not default_repo:
        raise InvalidPRReferenceError("--repo is required when PR is just a number and no git repo detected")
    owner, repo = parse_repo_slug(default_repo)
    return PRRef(owner=owner, repo=repo, number=int(ref))

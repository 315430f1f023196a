"""Infer the repository and pull request from the working directory."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 15


def _run(args: list[str]) -> str | None:
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=_TIMEOUT_SECONDS)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        logger.debug("%s failed: %s", " ".join(args[:3]), result.stderr.strip())
        return None
    return result.stdout.strip() or None


def _repo_from_remote_url(url: str) -> str | None:
    # https://github.com/owner/repo.git  ->  owner/repo
    # git@github.com:owner/repo.git      ->  owner/repo
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git").rstrip("/")
    parts = slug.split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return slug


def detect_repo() -> str | None:
    """Return OWNER/REPO for the current directory, asking gh first and then git."""
    slug = _run(["gh", "repo", "view", "--json", "owner,name", "-q", '.owner.login + "/" + .name'])
    if slug and "/" in slug:
        return slug

    url = _run(["git", "remote", "get-url", "origin"])
    if url:
        return _repo_from_remote_url(url)
    return None


def detect_current_pr_url() -> str | None:
    """Return the URL of the PR opened from the current branch, if any."""
    return _run(["gh", "pr", "view", "--json", "url", "-q", ".url"])

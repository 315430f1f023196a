"""Sync output records.

Decoupled from prsync_core: the CLI renders entities to JSONL and hands the
store plain data, so the store layer has no knowledge of entity types.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SyncRecord:
    """Everything one sync run persists for a pull request."""

    owner: str
    repo: str
    pr_number: int
    meta: dict = field(default_factory=dict)
    entries_jsonl: str = ""  # newline-delimited entity records, no trailing newline

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.owner, self.repo, self.pr_number)

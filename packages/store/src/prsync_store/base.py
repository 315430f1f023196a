"""Abstract store interface.

The CLI depends on BaseStore rather than a concrete backend, so where sync
output lands can change without touching command code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prsync_store.models import SyncRecord


class BaseStore(ABC):
    """Persistence for sync output, keyed by owner/repo/PR number.

    Concurrent saves for the same key are not coordinated: the last writer wins.
    """

    @abstractmethod
    def save(self, record: SyncRecord) -> str:
        """Persist a sync record and return where it was written."""

    @abstractmethod
    def load_entries(self, owner: str, repo: str, pr_number: int) -> list[dict]:
        """Return the entity records of the last sync, or an empty list."""

    def close(self) -> None:
        """Release any resources held by the store. Default is a no-op."""

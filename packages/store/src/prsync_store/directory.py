"""DirectoryStore writes sync output as plain files.

Layout under the configured root:

    <root>/<owner>/<repo>/pr/<number>/pr-meta.json   pretty-printed PR metadata
    <root>/<owner>/<repo>/pr/<number>/reviews.jsonl  one entity per line
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from prsync_store.base import BaseStore
from prsync_store.models import SyncRecord

logger = logging.getLogger(__name__)

META_FILENAME = "pr-meta.json"
ENTRIES_FILENAME = "reviews.jsonl"


class DirectoryStore(BaseStore):
    def __init__(self, root: str):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, owner: str, repo: str, pr_number: int) -> Path:
        return self._root / owner / repo / "pr" / str(pr_number)

    def save(self, record: SyncRecord) -> str:
        out_dir = self.path_for(*record.key)
        out_dir.mkdir(parents=True, exist_ok=True)

        meta_path = out_dir / META_FILENAME
        meta_path.write_text(json.dumps(record.meta, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %s", meta_path)

        entries_path = out_dir / ENTRIES_FILENAME
        entries_path.write_text(record.entries_jsonl, encoding="utf-8")
        logger.info("Wrote %s", entries_path)

        return str(out_dir)

    def load_entries(self, owner: str, repo: str, pr_number: int) -> list[dict]:
        entries_path = self.path_for(owner, repo, pr_number) / ENTRIES_FILENAME
        if not entries_path.exists():
            return []
        text = entries_path.read_text(encoding="utf-8")
        return [json.loads(line) for line in text.split("\n") if line.strip()]

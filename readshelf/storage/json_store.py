from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from ..utils.logging import get_logger
from .base import StoreError
from .memory import InMemoryDocumentStore

logger = get_logger("rs.storage.json")


class JsonFileDocumentStore(InMemoryDocumentStore):
    """File-backed document store.

    The whole store lives in one JSON file of the form
    ``{"collections": {name: {id: document}}}``. Every mutation rewrites the
    file through a temp file and ``os.replace`` so a write either lands
    completely or not at all.
    """

    def __init__(self, path: Path | str = ".data/readshelf.json") -> None:
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Cannot read store file %s: %s", self.path, exc)
            raise StoreError(f"Cannot read store file {self.path}: {exc}") from exc

        collections = data.get("collections") if isinstance(data, dict) else None
        if not isinstance(collections, dict):
            raise StoreError(f"Unexpected store file format in {self.path}")
        self._collections = {str(name): dict(docs) for name, docs in collections.items()}
        logger.debug("Loaded store %s (%d collections)", self.path, len(self._collections))

    def _changed(self) -> None:
        payload = json.dumps({"collections": self._collections}, ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Cannot write store file {self.path}: {exc}") from exc

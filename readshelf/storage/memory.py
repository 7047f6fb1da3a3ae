from __future__ import annotations

import copy
import uuid
from typing import Any, Dict, List, Optional

from ..processors.normalize import utc_now_iso
from .base import SERVER_TIMESTAMP, Document, DocumentStore


def _new_id() -> str:
    return uuid.uuid4().hex[:20]


def _resolve_server_values(data: Document) -> Document:
    now = None
    resolved: Document = {}
    for key, val in data.items():
        if val is SERVER_TIMESTAMP:
            now = now or utc_now_iso()
            resolved[key] = now
        else:
            resolved[key] = copy.deepcopy(val)
    resolved.pop("id", None)
    return resolved


class InMemoryDocumentStore(DocumentStore):
    """Process-local store. Also the in-memory image of ``JsonFileDocumentStore``."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    def _changed(self) -> None:
        """Hook called after every mutation."""

    @staticmethod
    def _with_id(doc_id: str, data: Document) -> Document:
        out = copy.deepcopy(data)
        out["id"] = doc_id
        return out

    def _commit(self, collection: str, doc_id: str, data: Optional[Document]) -> None:
        """Apply one document change, undoing it if ``_changed`` fails.

        ``data`` of ``None`` removes the document.
        """
        docs = self._collection(collection)
        snapshot = dict(docs)
        if data is None:
            docs.pop(doc_id, None)
        else:
            docs[doc_id] = data
        try:
            self._changed()
        except Exception:
            docs.clear()
            docs.update(snapshot)
            raise

    def add(self, collection: str, data: Document) -> str:
        doc_id = _new_id()
        self._commit(collection, doc_id, _resolve_server_values(data))
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self._commit(collection, doc_id, _resolve_server_values(data))

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        data = self._collection(collection).get(doc_id)
        return None if data is None else self._with_id(doc_id, data)

    def update(self, collection: str, doc_id: str, data: Document) -> None:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise KeyError(doc_id)
        self._commit(collection, doc_id, _resolve_server_values(data))

    def delete(self, collection: str, doc_id: str) -> bool:
        if doc_id not in self._collection(collection):
            return False
        self._commit(collection, doc_id, None)
        return True

    def query(
        self,
        collection: str,
        *,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Document]:
        items = [(k, v) for k, v in self._collection(collection).items() if v.get(field) == value]
        if order_by is not None:
            if descending:
                items.reverse()
            # sort is stable, so equal keys keep the order set above
            items.sort(key=lambda kv: ("" if kv[1].get(order_by) is None else str(kv[1].get(order_by))), reverse=descending)
        return [self._with_id(k, v) for k, v in items]

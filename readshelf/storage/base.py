from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class StoreError(Exception):
    """Raised when the backing store cannot be read or written."""


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


# Placeholder resolved by the store to its own current time on write
SERVER_TIMESTAMP = _ServerTimestamp()

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Collections of JSON-compatible documents keyed by store-assigned ids.

    Returned documents are copies carrying their id under ``"id"``; the id is
    never part of the stored payload. Each write replaces a whole document.
    """

    @abstractmethod
    def add(self, collection: str, data: Document) -> str:
        """Insert ``data`` under a new id and return the id."""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Document) -> None:
        """Create or replace the document ``doc_id``."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or ``None``."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: Document) -> None:
        """Replace an existing document; ``KeyError`` if it does not exist."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Remove the document; return whether it existed."""

    @abstractmethod
    def query(
        self,
        collection: str,
        *,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Document]:
        """Return documents where ``field == value``.

        Without ``order_by`` results come in insertion order. With it, ties
        keep insertion order (newest first when ``descending``).
        """

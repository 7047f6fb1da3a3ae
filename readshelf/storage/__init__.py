"""Document store backends for articles, feeds and reading profiles."""

from __future__ import annotations

from .base import SERVER_TIMESTAMP, DocumentStore, StoreError
from .json_store import JsonFileDocumentStore
from .memory import InMemoryDocumentStore


def create_store(*, backend: str = "json", path: str | None = None) -> DocumentStore:
    selected = (backend or "json").strip().lower()
    if selected == "memory":
        return InMemoryDocumentStore()
    if selected == "json":
        return JsonFileDocumentStore(path) if path else JsonFileDocumentStore()
    raise ValueError(f"Unsupported store backend '{selected}'. Use 'json' or 'memory'.")


__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentStore",
    "StoreError",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "create_store",
]

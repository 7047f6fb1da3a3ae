from __future__ import annotations

import uuid
from typing import Iterable, List

from ..models import Tag


def new_tag(name: str) -> Tag:
    return Tag(id=uuid.uuid4().hex[:12], name=name.strip())


def add_tag(tags: Iterable[Tag], name: str) -> List[Tag]:
    """Append a tag named ``name`` unless one already exists (case-insensitive).

    Blank names are ignored. Order of existing tags is preserved.
    """
    current = list(tags)
    clean = (name or "").strip()
    if not clean:
        return current
    if any(t.name.lower() == clean.lower() for t in current):
        return current
    return current + [new_tag(clean)]


def remove_tag(tags: Iterable[Tag], key: str) -> List[Tag]:
    """Drop tags whose id equals ``key`` or whose name matches it case-insensitively."""
    wanted = (key or "").strip().lower()
    return [t for t in tags if t.id != key and t.name.lower() != wanted]

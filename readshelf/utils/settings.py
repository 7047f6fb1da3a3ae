from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_READING_HISTORY = (
    "The user has shown interest in articles about web development, artificial "
    "intelligence, large language models, and productivity techniques. They prefer "
    "in-depth technical content and practical guides."
)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class AppSettings:
    """Runtime settings read from the environment at construction time."""

    store_backend: str = field(default_factory=lambda: os.getenv("READSHELF_STORE_BACKEND", "json"))
    store_path: str = field(default_factory=lambda: os.getenv("READSHELF_STORE_PATH", ".data/readshelf.json"))
    user_id: str = field(default_factory=lambda: os.getenv("READSHELF_USER_ID", ""))
    fetch_pages: bool = field(default_factory=lambda: _env_flag("READSHELF_FETCH_PAGES", True))
    default_reading_history: str = field(
        default_factory=lambda: os.getenv("READSHELF_READING_HISTORY") or DEFAULT_READING_HISTORY
    )

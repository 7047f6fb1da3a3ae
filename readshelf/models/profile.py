from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ReadingProfile:
    user_id: str
    reading_history: str
    display_name: Optional[str] = None
    email: Optional[str] = None

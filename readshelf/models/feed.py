from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class FeedSubscription:
    """An RSS/Atom feed the user subscribed to. Feeds are stored, not polled."""

    name: str
    url: str
    user_id: str
    id: Optional[str] = None
    last_fetched: Optional[str] = None

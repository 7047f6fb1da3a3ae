from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Tag:
    id: str
    name: str


@dataclass(slots=True)
class RelevanceAssessment:
    """Score in [0, 1] plus the model's reasoning for it."""

    score: float
    reasoning: str = ""


@dataclass(slots=True)
class AiRelevance:
    score: float
    reasoning: str = ""
    # UI-only; never written to the store
    is_loading: bool = False


@dataclass(slots=True)
class ExtractedArticle:
    """Normalized output of the extraction call."""

    title: str
    summary: str
    image_url: Optional[str]
    data_ai_hint: str


@dataclass(slots=True)
class Article:
    title: str
    summary: str
    url: str
    user_id: str
    data_ai_hint: str
    image_url: Optional[str] = None
    source_name: Optional[str] = None
    content: Optional[str] = None
    tags: List[Tag] = field(default_factory=list)
    is_read: bool = False

    # Assigned by the store
    id: Optional[str] = None
    date_added: Optional[str] = None

    # AI-derived fields
    ai_relevance: Optional[AiRelevance] = None

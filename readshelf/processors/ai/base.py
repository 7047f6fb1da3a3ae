from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class AIClient(ABC):
    """Abstract AI client interface for article extraction and relevance scoring."""

    @abstractmethod
    def extract_article_info(self, article_url: str, *, page_text: str = "") -> Dict[str, Any]:
        """Return the raw extraction object (title, summary, imageUrl, dataAiHint)."""

    @abstractmethod
    def predict_relevance(self, article_content: str, user_reading_history: str) -> Dict[str, Any]:
        """Return the raw relevance object (relevanceScore, reasoning)."""

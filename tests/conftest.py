from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from readshelf.library import Library
from readshelf.processors.ai import AIClient
from readshelf.storage import InMemoryDocumentStore


class FakeAIClient(AIClient):
    """Returns canned payloads (or raises canned errors) and records calls."""

    def __init__(
        self,
        *,
        extraction: Optional[Dict[str, Any]] = None,
        relevance: Optional[Dict[str, Any]] = None,
        extraction_error: Optional[Exception] = None,
        relevance_error: Optional[Exception] = None,
    ) -> None:
        self.extraction = extraction
        self.relevance = relevance
        self.extraction_error = extraction_error
        self.relevance_error = relevance_error
        self.extract_calls: List[tuple] = []
        self.relevance_calls: List[tuple] = []

    def extract_article_info(self, article_url: str, *, page_text: str = "") -> Dict[str, Any]:
        self.extract_calls.append((article_url, page_text))
        if self.extraction_error is not None:
            raise self.extraction_error
        return self.extraction

    def predict_relevance(self, article_content: str, user_reading_history: str) -> Dict[str, Any]:
        self.relevance_calls.append((article_content, user_reading_history))
        if self.relevance_error is not None:
            raise self.relevance_error
        return self.relevance


GOOD_EXTRACTION = {
    "title": "Real Title",
    "summary": "Real summary.",
    "imageUrl": "https://x.com/a.png",
    "dataAiHint": "mountains",
}


@pytest.fixture
def fake_ai() -> FakeAIClient:
    return FakeAIClient(
        extraction=dict(GOOD_EXTRACTION),
        relevance={"relevanceScore": 0.8, "reasoning": "Matches interest in web development."},
    )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def library(store, fake_ai) -> Library:
    return Library(store=store, user_id="user-1", ai=fake_ai)

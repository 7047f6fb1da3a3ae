"""Mapping between models and the persisted camelCase document shape."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import AiRelevance, Article, FeedSubscription, ReadingProfile, Tag
from ..processors.normalize import to_iso_timestamp
from .base import SERVER_TIMESTAMP, Document


def _relevance_to_document(relevance: Optional[AiRelevance]) -> Optional[Dict[str, Any]]:
    if relevance is None:
        return None
    # is_loading is deliberately left out
    return {"score": float(relevance.score), "reasoning": relevance.reasoning}


def article_to_document(article: Article, *, new: bool = False) -> Document:
    """Build the stored form of ``article``.

    ``new`` documents get a store-assigned ``dateAdded``; existing ones keep
    the value they were read back with.
    """
    return {
        "userId": article.user_id,
        "title": article.title,
        "summary": article.summary,
        "url": article.url,
        "imageUrl": article.image_url or None,
        "dataAiHint": article.data_ai_hint,
        "sourceName": article.source_name,
        "content": article.content,
        "tags": [{"id": t.id, "name": t.name} for t in article.tags],
        "dateAdded": SERVER_TIMESTAMP if new else article.date_added,
        "isRead": bool(article.is_read),
        "aiRelevance": _relevance_to_document(article.ai_relevance),
    }


def document_to_article(doc: Document) -> Article:
    relevance_raw = doc.get("aiRelevance")
    relevance = None
    if isinstance(relevance_raw, dict) and relevance_raw.get("score") is not None:
        relevance = AiRelevance(
            score=float(relevance_raw["score"]),
            reasoning=str(relevance_raw.get("reasoning") or ""),
            is_loading=False,
        )

    return Article(
        id=doc.get("id"),
        user_id=doc["userId"],
        title=doc.get("title") or "",
        summary=doc.get("summary") or "",
        url=doc.get("url") or "",
        image_url=doc.get("imageUrl") or None,
        data_ai_hint=doc.get("dataAiHint") or "",
        source_name=doc.get("sourceName"),
        content=doc.get("content"),
        tags=[Tag(id=str(t.get("id", "")), name=str(t.get("name", ""))) for t in doc.get("tags") or [] if isinstance(t, dict)],
        date_added=to_iso_timestamp(doc.get("dateAdded")),
        is_read=bool(doc.get("isRead", False)),
        ai_relevance=relevance,
    )


def feed_to_document(feed: FeedSubscription) -> Document:
    return {
        "userId": feed.user_id,
        "name": feed.name,
        "url": feed.url,
        "lastFetched": feed.last_fetched,
        "dateAdded": SERVER_TIMESTAMP,
    }


def document_to_feed(doc: Document) -> FeedSubscription:
    return FeedSubscription(
        id=doc.get("id"),
        user_id=doc["userId"],
        name=doc.get("name") or "",
        url=doc.get("url") or "",
        last_fetched=to_iso_timestamp(doc.get("lastFetched")),
    )


def profile_to_document(profile: ReadingProfile) -> Document:
    return {
        "userId": profile.user_id,
        "displayName": profile.display_name,
        "email": profile.email,
        "readingHistory": profile.reading_history,
    }


def document_to_profile(doc: Document) -> ReadingProfile:
    return ReadingProfile(
        user_id=doc["userId"],
        display_name=doc.get("displayName"),
        email=doc.get("email"),
        reading_history=doc.get("readingHistory") or "",
    )

"""Typed models used across the application."""

from .article import AiRelevance, Article, ExtractedArticle, RelevanceAssessment, Tag
from .feed import FeedSubscription
from .profile import ReadingProfile

__all__ = [
    "AiRelevance",
    "Article",
    "ExtractedArticle",
    "FeedSubscription",
    "ReadingProfile",
    "RelevanceAssessment",
    "Tag",
]

from __future__ import annotations

from typing import List, Sequence

from ..models import Article, FeedSubscription
from ..processors.extraction import title_indicates_failure
from ..processors.normalize import clean_html_to_text, parse_iso_timestamp

NO_CONTENT_NOTE = "No content available for this article. You can view it at the original source."
EXTRACTION_NOTE = "AI had trouble extracting all info. Review the added article."


def format_date_added(article: Article) -> str:
    parsed = parse_iso_timestamp(article.date_added)
    if parsed is None:
        return "Date not available"
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_relevance(article: Article) -> str | None:
    rel = article.ai_relevance
    if rel is None:
        return None
    if rel.is_loading:
        return "Predicting relevance..."
    line = f"AI Relevance: {rel.score:.2f} / 1.0"
    return f"{line} - {rel.reasoning}" if rel.reasoning else line


def format_tags(article: Article) -> str:
    return ", ".join(t.name for t in article.tags)


def format_article_card(article: Article) -> str:
    """One library entry: heading line, source, summary, relevance, tags."""
    marker = " " if article.is_read else "*"
    lines: List[str] = [f"{marker} [{article.id}] {article.title}"]
    if article.source_name:
        lines.append(f"    From: {article.source_name}")
    lines.append(f"    {article.summary}")
    relevance = format_relevance(article)
    if relevance:
        lines.append(f"    {relevance}")
    if article.tags:
        lines.append(f"    Tags: {format_tags(article)}")
    lines.append(f"    Added: {format_date_added(article)} | {article.url}")
    return "\n".join(lines)


def format_library(articles: Sequence[Article]) -> str:
    if not articles:
        return "Your library is empty. Add some articles or RSS feeds to get started!"
    return "\n\n".join(format_article_card(a) for a in articles)


def _body_text(article: Article) -> str:
    content = (article.content or "").strip()
    if content:
        if content.startswith("<"):
            return clean_html_to_text(content, keep_paragraphs=True) or NO_CONTENT_NOTE
        return content
    if article.summary:
        return article.summary
    return NO_CONTENT_NOTE


def format_reader_view(article: Article) -> str:
    """Render the full reading view of a saved article as plain text."""
    header: List[str] = [article.title, "=" * min(len(article.title), 78)]
    meta = []
    if article.source_name:
        meta.append(f"From: {article.source_name}")
    meta.append(f"Added: {format_date_added(article)}")
    header.append(" | ".join(meta))
    if article.tags:
        header.append(f"Tags: {format_tags(article)}")
    if article.image_url:
        header.append(f"Image: {article.image_url} ({article.data_ai_hint})")
    if title_indicates_failure(article.title):
        header.append(f"Note: {EXTRACTION_NOTE}")

    return (
        "\n".join(header)
        + "\n\n"
        + _body_text(article)
        + "\n\n"
        + f"View original source: {article.url}\n"
    )


def format_feeds(feeds: Sequence[FeedSubscription]) -> str:
    if not feeds:
        return "No feeds yet."
    return "\n".join(f"[{f.id}] {f.name} - {f.url}" for f in feeds)

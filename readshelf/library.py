from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .fetchers import PageContent, is_http_url, page_prompt_text
from .models import AiRelevance, Article, FeedSubscription, ReadingProfile, Tag
from .processors import RelevanceError, add_tag, extract_article, predict_relevance, remove_tag
from .processors.ai import AIClient, create_ai_client
from .processors.extraction import title_indicates_failure
from .storage import DocumentStore
from .storage.serialization import (
    article_to_document,
    document_to_article,
    document_to_feed,
    document_to_profile,
    feed_to_document,
    profile_to_document,
)
from .utils.config_loader import load_feeds_config
from .utils.logging import get_logger
from .utils.settings import DEFAULT_READING_HISTORY

logger = get_logger("rs.library")

ARTICLES = "articles"
FEEDS = "feeds"
PROFILES = "profiles"

PageFetcher = Callable[[str], PageContent]


class LibraryError(Exception):
    """Base class for library operation failures."""


class NotFoundError(LibraryError, LookupError):
    pass


class ArticleNotFoundError(NotFoundError):
    pass


class FeedNotFoundError(NotFoundError):
    pass


class AccessDeniedError(LibraryError, PermissionError):
    pass


class Library:
    """One user's view of the archive.

    Every read and write is scoped to ``user_id``. The AI client, page fetcher
    and store are injected; ``ai_factory`` is only called the first time an
    AI-backed operation runs.
    """

    def __init__(
        self,
        *,
        store: DocumentStore,
        user_id: str,
        ai: AIClient | None = None,
        ai_factory: Callable[[], AIClient] = create_ai_client,
        page_fetcher: PageFetcher | None = None,
        default_reading_history: str = DEFAULT_READING_HISTORY,
    ) -> None:
        if not user_id or not user_id.strip():
            raise ValueError("You must be logged in: a user id is required")
        self.store = store
        self.user_id = user_id.strip()
        self._ai = ai
        self._ai_factory = ai_factory
        self.page_fetcher = page_fetcher
        self.default_reading_history = default_reading_history

    @property
    def ai(self) -> AIClient:
        if self._ai is None:
            self._ai = self._ai_factory()
        return self._ai

    # ---------------- Articles -----------------
    def _fetch_page(self, url: str) -> Optional[PageContent]:
        if self.page_fetcher is None:
            return None
        try:
            return self.page_fetcher(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not fetch page %s: %s", url, exc)
            return None

    def add_article(self, url: str, *, tags: Iterable[str] = ()) -> Article:
        """Extract ``url`` with the AI backend and save it to the library.

        Extraction problems never fail this call; they show up as a failure
        title on the saved article.
        """
        url = (url or "").strip()
        if not is_http_url(url):
            raise ValueError("Please enter a valid URL.")

        page = self._fetch_page(url)
        extracted = extract_article(url, ai=self.ai, page_text=page_prompt_text(page))

        tag_list: List[Tag] = []
        for name in tags:
            tag_list = add_tag(tag_list, name)

        article = Article(
            title=extracted.title,
            summary=extracted.summary,
            url=url,
            user_id=self.user_id,
            image_url=extracted.image_url,
            data_ai_hint=extracted.data_ai_hint,
            source_name=page.site_name if page else None,
            content=page.text if page else None,
            tags=tag_list,
        )
        doc_id = self.store.add(ARTICLES, article_to_document(article, new=True))
        if title_indicates_failure(article.title):
            logger.warning("Saved article %s with extraction failure: %s", doc_id, article.title)
        else:
            logger.info("Saved article %s: %s", doc_id, article.title)
        return self.get_article(doc_id)

    def list_articles(self) -> List[Article]:
        """Newest first."""
        docs = self.store.query(ARTICLES, field="userId", value=self.user_id, order_by="dateAdded", descending=True)
        return [document_to_article(d) for d in docs]

    def get_article(self, article_id: str) -> Article:
        doc = self.store.get(ARTICLES, article_id)
        if doc is None:
            raise ArticleNotFoundError(f"Article not found: {article_id}")
        if doc.get("userId") != self.user_id:
            raise AccessDeniedError(f"You do not have permission to access article {article_id}")
        return document_to_article(doc)

    def _save(self, article: Article) -> Article:
        try:
            self.store.update(ARTICLES, article.id, article_to_document(article))
        except KeyError as exc:
            raise ArticleNotFoundError(f"Article not found: {article.id}") from exc
        return article

    def set_read(self, article_id: str, is_read: bool = True) -> Article:
        article = self.get_article(article_id)
        article.is_read = is_read
        return self._save(article)

    def toggle_read(self, article_id: str) -> Article:
        article = self.get_article(article_id)
        return self.set_read(article_id, not article.is_read)

    def update_tags(self, article_id: str, tags: Sequence[Tag]) -> Article:
        article = self.get_article(article_id)
        article.tags = list(tags)
        return self._save(article)

    def add_tag(self, article_id: str, name: str) -> Article:
        article = self.get_article(article_id)
        return self.update_tags(article_id, add_tag(article.tags, name))

    def remove_tag(self, article_id: str, key: str) -> Article:
        article = self.get_article(article_id)
        return self.update_tags(article_id, remove_tag(article.tags, key))

    def predict_relevance(self, article_id: str, *, reading_history: str | None = None) -> Article:
        """Score the article against the reading profile and store the result.

        On ``RelevanceError`` nothing is written, so any earlier score stays.
        """
        article = self.get_article(article_id)
        history = reading_history or self.reading_history()
        try:
            assessment = predict_relevance(article.summary or article.title, history, ai=self.ai)
        except RelevanceError as exc:
            logger.warning("Relevance prediction failed for %s: %s", article_id, exc)
            raise

        article.ai_relevance = AiRelevance(score=assessment.score, reasoning=assessment.reasoning)
        logger.info("Relevance for %s: %.2f", article_id, assessment.score)
        return self._save(article)

    def delete_article(self, article_id: str) -> Article:
        article = self.get_article(article_id)
        self.store.delete(ARTICLES, article_id)
        logger.info("Deleted article %s", article_id)
        return article

    # ---------------- Feeds -----------------
    def add_feed(self, name: str, url: str) -> FeedSubscription:
        name = (name or "").strip()
        url = (url or "").strip()
        if not name:
            raise ValueError("Please enter a name for the RSS feed.")
        if not is_http_url(url):
            raise ValueError("Please enter a valid RSS feed URL.")
        feed = FeedSubscription(name=name, url=url, user_id=self.user_id)
        feed.id = self.store.add(FEEDS, feed_to_document(feed))
        logger.info("Added feed %s: %s", feed.id, url)
        return feed

    def list_feeds(self) -> List[FeedSubscription]:
        docs = self.store.query(FEEDS, field="userId", value=self.user_id, order_by="dateAdded", descending=True)
        return [document_to_feed(d) for d in docs]

    def remove_feed(self, feed_id: str) -> FeedSubscription:
        doc = self.store.get(FEEDS, feed_id)
        if doc is None:
            raise FeedNotFoundError(f"Feed not found: {feed_id}")
        if doc.get("userId") != self.user_id:
            raise AccessDeniedError(f"You do not have permission to access feed {feed_id}")
        self.store.delete(FEEDS, feed_id)
        return document_to_feed(doc)

    def import_feeds(self, path: Path | str) -> List[FeedSubscription]:
        """Add every feed from a YAML file, skipping URLs already subscribed."""
        known = {f.url for f in self.list_feeds()}
        added: List[FeedSubscription] = []
        for name, url in load_feeds_config(path):
            if url in known:
                logger.info("Skipping already subscribed feed %s", url)
                continue
            added.append(self.add_feed(name, url))
            known.add(url)
        return added

    # ---------------- Profile -----------------
    def get_profile(self) -> ReadingProfile:
        doc = self.store.get(PROFILES, self.user_id)
        if doc is None:
            return ReadingProfile(user_id=self.user_id, reading_history=self.default_reading_history)
        return document_to_profile(doc)

    def save_profile(
        self,
        *,
        reading_history: str | None = None,
        display_name: str | None = None,
        email: str | None = None,
    ) -> ReadingProfile:
        profile = self.get_profile()
        if reading_history is not None:
            profile.reading_history = reading_history.strip()
        if display_name is not None:
            profile.display_name = display_name.strip() or None
        if email is not None:
            profile.email = email.strip() or None
        self.store.set(PROFILES, self.user_id, profile_to_document(profile))
        return profile

    def reading_history(self) -> str:
        return self.get_profile().reading_history or self.default_reading_history

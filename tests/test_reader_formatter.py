from readshelf.models import AiRelevance, Article, FeedSubscription, Tag
from readshelf.output.reader_formatter import (
    EXTRACTION_NOTE,
    NO_CONTENT_NOTE,
    format_article_card,
    format_date_added,
    format_feeds,
    format_library,
    format_reader_view,
    format_relevance,
)


def _article(**overrides):
    data = dict(
        id="a1",
        title="Understanding Large Language Models",
        summary="A guide to LLMs.",
        url="https://example.com/llms",
        user_id="u",
        data_ai_hint="artificial intelligence",
        date_added="2023-12-01T09:30:00+00:00",
    )
    data.update(overrides)
    return Article(**data)


def test_format_date_added():
    assert format_date_added(_article()) == "December 1, 2023"
    assert format_date_added(_article(date_added=None)) == "Date not available"


def test_format_relevance():
    assert format_relevance(_article()) is None
    scored = _article(ai_relevance=AiRelevance(score=0.856, reasoning="Matches AI interest."))
    assert format_relevance(scored) == "AI Relevance: 0.86 / 1.0 - Matches AI interest."
    loading = _article(ai_relevance=AiRelevance(score=0.2, is_loading=True))
    assert format_relevance(loading) == "Predicting relevance..."


def test_article_card_marks_unread_and_lists_tags():
    card = format_article_card(_article(source_name="AI Insights", tags=[Tag(id="t", name="Machine Learning")]))
    lines = card.splitlines()
    assert lines[0] == "* [a1] Understanding Large Language Models"
    assert "    From: AI Insights" in lines
    assert "    Tags: Machine Learning" in lines
    assert lines[-1] == "    Added: December 1, 2023 | https://example.com/llms"


def test_empty_library_message():
    assert "empty" in format_library([])


def test_reader_view_prefers_content():
    text = format_reader_view(_article(content="# Heading\n\nBody text."))
    assert text.startswith("Understanding Large Language Models\n")
    assert "Body text." in text
    assert "A guide to LLMs." not in text
    assert text.rstrip().endswith("View original source: https://example.com/llms")


def test_reader_view_renders_html_content_as_text():
    text = format_reader_view(_article(content="<p>First &amp; foremost.</p><p>Second.</p>"))
    assert "First & foremost.\n\nSecond." in text
    assert "<p>" not in text


def test_reader_view_falls_back_to_summary_then_note():
    assert "A guide to LLMs." in format_reader_view(_article())
    assert NO_CONTENT_NOTE in format_reader_view(_article(summary=""))


def test_reader_view_shows_image_and_failure_note():
    with_image = format_reader_view(_article(image_url="https://x.com/a.png"))
    assert "Image: https://x.com/a.png (artificial intelligence)" in with_image

    failed = format_reader_view(_article(title="Extraction Failed: URL Inaccessible"))
    assert EXTRACTION_NOTE in failed


def test_format_feeds():
    feeds = [FeedSubscription(id="f1", name="Blog", url="https://b.example.com/rss", user_id="u")]
    assert format_feeds(feeds) == "[f1] Blog - https://b.example.com/rss"
    assert format_feeds([]) == "No feeds yet."

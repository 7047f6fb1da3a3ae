"""Tests for normalization of AI extraction payloads."""

import pytest

from readshelf.models import ExtractedArticle
from readshelf.processors.extraction import DEGRADED_EXTRACTION
from readshelf.processors.extraction import ERROR_HINT
from readshelf.processors.extraction import GENERIC_HINT
from readshelf.processors.extraction import MAX_HINT_LENGTH
from readshelf.processors.extraction import SUMMARY_FAILURE
from readshelf.processors.extraction import TITLE_FAILURE
from readshelf.processors.extraction import extract_article
from readshelf.processors.extraction import normalize_extraction
from readshelf.processors.extraction import title_indicates_failure

from .conftest import FakeAIClient


def _payload(**overrides):
    base = {
        "title": "Real Title",
        "summary": "Real summary.",
        "imageUrl": "https://x.com/a.png",
        "dataAiHint": "mountains",
    }
    base.update(overrides)
    return base


def test_well_formed_payload_is_unchanged():
    result = normalize_extraction(_payload())
    assert result == ExtractedArticle(
        title="Real Title",
        summary="Real summary.",
        image_url="https://x.com/a.png",
        data_ai_hint="mountains",
    )


def test_empty_title_triggers_failure_cross_fixup():
    result = normalize_extraction(
        {"title": "", "summary": "ok", "imageUrl": "not-a-url", "dataAiHint": ""}
    )
    assert result.title == TITLE_FAILURE
    assert result.summary == "ok"
    assert result.image_url is None
    assert result.data_ai_hint == ERROR_HINT


@pytest.mark.parametrize(
    "image_value", ["", "   ", "not-a-url", "/relative/path.png", None, 42, "http://"]
)
def test_malformed_image_url_collapses_to_none(image_value):
    assert normalize_extraction(_payload(imageUrl=image_value)).image_url is None


def test_missing_image_url_collapses_to_none():
    payload = _payload()
    del payload["imageUrl"]
    assert normalize_extraction(payload).image_url is None


def test_valid_image_url_is_kept_verbatim():
    url = "https://cdn.example.com/img/Hero%20Shot.PNG?w=600&h=400#frag"
    assert normalize_extraction(_payload(imageUrl=url)).image_url == url


@pytest.mark.parametrize(
    "title",
    [
        "Extraction Failed: URL Inaccessible",
        "EXTRACTION FAILED",
        "Sorry, extraction failed for this page",
    ],
)
def test_failure_title_forces_null_image(title):
    assert normalize_extraction(_payload(title=title)).image_url is None


def test_failure_title_keeps_explicit_hint():
    result = normalize_extraction(
        _payload(title="Extraction Failed: Content Unsuitable", dataAiHint="paywall")
    )
    assert result.data_ai_hint == "paywall"


def test_failure_title_replaces_generic_hint_from_model():
    result = normalize_extraction(
        _payload(title="Extraction Failed: Model Error", dataAiHint=GENERIC_HINT)
    )
    assert result.data_ai_hint == ERROR_HINT


@pytest.mark.parametrize("hint", [None, "", "   ", 7])
def test_missing_hint_uses_generic_fallback(hint):
    assert normalize_extraction(_payload(dataAiHint=hint)).data_ai_hint == GENERIC_HINT


def test_long_hint_is_truncated():
    hint = "a very long descriptive hint about snowy mountain landscapes at dawn"
    result = normalize_extraction(_payload(dataAiHint=hint))
    assert len(result.data_ai_hint) <= MAX_HINT_LENGTH
    assert hint.startswith(result.data_ai_hint)


@pytest.mark.parametrize("field", ["title", "summary"])
def test_missing_text_fields_get_distinct_sentinels(field):
    payload = _payload()
    del payload[field]
    result = normalize_extraction(payload)
    assert result.title == (TITLE_FAILURE if field == "title" else "Real Title")
    assert result.summary == (SUMMARY_FAILURE if field == "summary" else "Real summary.")
    assert TITLE_FAILURE != SUMMARY_FAILURE


def test_wrong_typed_title_uses_sentinel():
    result = normalize_extraction(_payload(title=["not", "a", "string"]))
    assert result.title == TITLE_FAILURE
    assert result.image_url is None


@pytest.mark.parametrize("payload", [None, {}, [], "raw text"])
def test_absent_payload_returns_degraded_record(payload):
    assert normalize_extraction(payload) == DEGRADED_EXTRACTION
    assert DEGRADED_EXTRACTION.image_url is None
    assert DEGRADED_EXTRACTION.data_ai_hint == ERROR_HINT
    assert title_indicates_failure(DEGRADED_EXTRACTION.title)


@pytest.mark.parametrize(
    "payload",
    [
        _payload(),
        {"title": "", "summary": "ok", "imageUrl": "not-a-url", "dataAiHint": ""},
        _payload(dataAiHint="x" * 49 + " trailing words that get cut"),
        _payload(title="Extraction Failed: URL Inaccessible", dataAiHint="paywall"),
        _payload(title="  Padded Title  ", summary="\n  padded  "),
        None,
    ],
)
def test_normalization_is_idempotent(payload):
    once = normalize_extraction(payload)
    twice = normalize_extraction(
        {
            "title": once.title,
            "summary": once.summary,
            "imageUrl": once.image_url,
            "dataAiHint": once.data_ai_hint,
        }
    )
    assert twice == once


def test_extract_article_absorbs_client_errors():
    ai = FakeAIClient(extraction_error=ConnectionError("backend down"))
    assert extract_article("https://example.com/a", ai=ai) == DEGRADED_EXTRACTION


def test_extract_article_absorbs_non_json_reply():
    ai = FakeAIClient(extraction_error=ValueError("No JSON object found in AI response"))
    assert extract_article("https://example.com/a", ai=ai) == DEGRADED_EXTRACTION


def test_extract_article_passes_page_text_to_client():
    ai = FakeAIClient(extraction=_payload())
    result = extract_article("https://example.com/a", ai=ai, page_text="Body text")
    assert ai.extract_calls == [("https://example.com/a", "Body text")]
    assert result.title == "Real Title"


def test_image_url_loses_only_surrounding_whitespace():
    url = "https://cdn.example.com/a b.png"
    assert normalize_extraction(_payload(imageUrl=f"  {url}\n")).image_url == url

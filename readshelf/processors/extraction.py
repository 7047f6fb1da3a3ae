"""Normalization of AI extraction output into storage-safe article fields.

The extraction model is an untrusted source: fields may be missing, wrongly
typed, or violate their constraints. ``normalize_extraction`` reconciles any
payload into an ``ExtractedArticle`` whose fields always satisfy:

- ``title`` and ``summary`` are non-empty
- ``image_url`` is an absolute URL or ``None``
- ``data_ai_hint`` is non-empty and at most ``MAX_HINT_LENGTH`` characters
- a title carrying ``FAILURE_MARKER`` never comes with an image or a topical
  fallback hint

It never raises.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from ..models import ExtractedArticle
from ..utils.logging import get_logger
from .ai import AIClient, create_ai_client

logger = get_logger("rs.processors.extraction")

FAILURE_MARKER = "extraction failed"

TITLE_FAILURE = "Extraction Failed: No Title Returned"
SUMMARY_FAILURE = "Extraction Failed: No summary was returned for this URL."

MODEL_ERROR_TITLE = "Extraction Failed: Model Error"
MODEL_ERROR_SUMMARY = "The AI model encountered an error and could not process the URL."

ERROR_HINT = "extraction error"
GENERIC_HINT = "general content"

MAX_HINT_LENGTH = 50

DEGRADED_EXTRACTION = ExtractedArticle(
    title=MODEL_ERROR_TITLE,
    summary=MODEL_ERROR_SUMMARY,
    image_url=None,
    data_ai_hint=ERROR_HINT,
)


def title_indicates_failure(title: str | None) -> bool:
    return bool(title) and FAILURE_MARKER in title.lower()


def _text_or(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


def _absolute_url_or_none(value: Any) -> Optional[str]:
    """Return ``value`` without surrounding whitespace if it is an absolute URL.

    The URL itself is never re-serialized, so escapes, case and fragments
    come back exactly as the model sent them.
    """
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return candidate


def _hint_or_fallback(value: Any, *, failed: bool) -> str:
    if isinstance(value, str) and value.strip():
        # re-strip so a cut landing on whitespace stays stable on re-normalization
        return value.strip()[:MAX_HINT_LENGTH].rstrip()
    return ERROR_HINT if failed else GENERIC_HINT


def normalize_extraction(payload: Mapping[str, Any] | None) -> ExtractedArticle:
    """Return a valid ``ExtractedArticle`` for any model payload.

    An absent, empty, or non-mapping payload yields ``DEGRADED_EXTRACTION``.
    Fields are resolved in order title, summary, image, hint; the title is
    then re-checked for the failure marker, which drops the image and swaps
    a generic hint for the error hint.
    """
    if not payload or not isinstance(payload, Mapping):
        return DEGRADED_EXTRACTION

    title = _text_or(payload.get("title"), TITLE_FAILURE)
    summary = _text_or(payload.get("summary"), SUMMARY_FAILURE)
    image_url = _absolute_url_or_none(payload.get("imageUrl"))
    failed = title_indicates_failure(title)
    hint = _hint_or_fallback(payload.get("dataAiHint"), failed=failed)

    if failed:
        image_url = None
        if hint == GENERIC_HINT:
            hint = ERROR_HINT

    return ExtractedArticle(
        title=title,
        summary=summary,
        image_url=image_url,
        data_ai_hint=hint,
    )


def extract_article(
    article_url: str,
    *,
    ai: AIClient | None = None,
    page_text: str = "",
) -> ExtractedArticle:
    """Run the extraction call for ``article_url`` and normalize its result.

    Client errors (unreachable backend, non-JSON reply) are absorbed here and
    produce the degraded record.
    """
    if ai is None:
        ai = create_ai_client()

    try:
        payload = ai.extract_article_info(article_url, page_text=page_text)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Extraction call failed for %s: %s", article_url, exc)
        payload = None

    result = normalize_extraction(payload)
    if title_indicates_failure(result.title):
        logger.info("Extraction reported failure for %s: %s", article_url, result.title)
    return result

"""Processing: AI output normalization, relevance scoring, text cleanup, tags."""

from .normalize import clean_html_to_text, normalize_plain_text, parse_iso_timestamp, to_iso_timestamp, utc_now_iso
from .extraction import extract_article, normalize_extraction, title_indicates_failure
from .relevance import RelevanceError, normalize_relevance, predict_relevance
from .tags import add_tag, remove_tag

__all__ = [
    "clean_html_to_text",
    "normalize_plain_text",
    "parse_iso_timestamp",
    "to_iso_timestamp",
    "utc_now_iso",
    "extract_article",
    "normalize_extraction",
    "title_indicates_failure",
    "RelevanceError",
    "normalize_relevance",
    "predict_relevance",
    "add_tag",
    "remove_tag",
]

from __future__ import annotations

import html
import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup

_whitespace_re = re.compile(r"\s+")
_blank_lines_re = re.compile(r"\n{3,}")
_control_chars_re = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F]")

_PUNCT_TRANSLATION = {
    ord("\u2018"): "'",  # left single quote
    ord("\u2019"): "'",  # right single quote
    ord("\u201C"): '"',  # left double quote
    ord("\u201D"): '"',  # right double quote
    ord("\u2013"): "-",  # en dash
    ord("\u2014"): "-",  # em dash
    ord("\u00A0"): " ",  # non-breaking space
}


def clean_html_to_text(raw_html: str | None, *, keep_paragraphs: bool = False) -> str:
    """Strip tags and entities from HTML.

    With ``keep_paragraphs`` block boundaries survive as blank lines, which
    is what the reader view wants; otherwise all whitespace collapses.
    """
    if not raw_html:
        return ""

    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = html.unescape(soup.get_text("\n"))
    if not keep_paragraphs:
        return _whitespace_re.sub(" ", text).strip()

    lines = [_whitespace_re.sub(" ", ln).strip() for ln in text.splitlines()]
    text = "\n\n".join(ln for ln in lines if ln)
    return _blank_lines_re.sub("\n\n", text).strip()


def normalize_plain_text(text: str | None) -> str:
    """Normalize plain text before it is sent to a model.

    - Strip BOM
    - Replace curly quotes/dashes and non-breaking spaces
    - Unicode normalize (NFKC)
    - Remove control characters and collapse whitespace
    """
    if not text:
        return ""

    if text.startswith("\ufeff"):
        text = text.lstrip("\ufeff")

    text = text.translate(_PUNCT_TRANSLATION)
    text = unicodedata.normalize("NFKC", text)
    text = _control_chars_re.sub(" ", text)
    return _whitespace_re.sub(" ", text).strip()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_iso_timestamp(value: str | datetime | None) -> Optional[str]:
    """Render a stored timestamp as an ISO-8601 string.

    Naive datetimes are taken to be UTC. Strings are returned as stored.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def parse_iso_timestamp(value: str | None) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

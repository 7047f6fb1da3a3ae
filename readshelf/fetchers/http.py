from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from ..processors.normalize import normalize_plain_text
from ..utils.logging import get_logger

logger = get_logger("rs.fetchers.http")


@dataclass(slots=True)
class PageContent:
    url: str
    title: Optional[str]
    description: Optional[str]
    site_name: Optional[str]
    image_url: Optional[str]
    text: Optional[str]


_DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/127.0.0.0 Safari/537.36"
    )
}


def is_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _meta_content(soup: BeautifulSoup, **attrs: str) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        value = tag["content"].strip()
        return value or None
    return None


def parse_page(url: str, html_text: str) -> PageContent:
    soup = BeautifulSoup(html_text, "html.parser")

    title = _meta_content(soup, property="og:title")
    if not title and soup.title and soup.title.string:
        title = soup.title.string.strip() or None
    description = _meta_content(soup, name="description") or _meta_content(soup, property="og:description")
    site_name = _meta_content(soup, property="og:site_name")

    image_url = _meta_content(soup, property="og:image")
    if image_url:
        # og:image is sometimes site-relative
        image_url = urljoin(url, image_url)

    for tag in soup(["script", "style", "noscript", "nav", "footer"]):
        tag.decompose()
    main = soup.find("article") or soup.find("main") or soup.body
    text = main.get_text("\n", strip=True) if main else None

    return PageContent(
        url=url,
        title=title,
        description=description,
        site_name=site_name,
        image_url=image_url,
        text=text or None,
    )


def fetch_page(url: str, *, timeout: int = 30) -> PageContent:
    """Download ``url`` and pull out the readable text and page metadata."""
    if not is_http_url(url):
        raise ValueError(f"Invalid URL for HTTP fetch: {url}")

    logger.debug("Fetching page %s", url)
    resp = requests.get(url, headers=_DEFAULT_HEADERS, timeout=timeout)
    if resp.status_code >= 400:
        logger.warning("Page fetch failed (%s): %s", resp.status_code, url)
        resp.raise_for_status()

    page = parse_page(url, resp.text)
    logger.info("Fetched page %s (%d chars)", url, len(page.text or ""))
    return page


def page_prompt_text(page: PageContent | None) -> str:
    """Flatten page metadata and body into the text handed to the model."""
    if page is None:
        return ""
    parts = []
    if page.title:
        parts.append(f"Title: {page.title}")
    if page.description:
        parts.append(f"Description: {page.description}")
    if page.image_url:
        parts.append(f"Image: {page.image_url}")
    if page.text:
        parts.append(normalize_plain_text(page.text))
    return "\n".join(parts)

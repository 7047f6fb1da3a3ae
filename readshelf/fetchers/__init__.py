"""Article page fetching."""

from .http import PageContent, fetch_page, is_http_url, page_prompt_text, parse_page

__all__ = ["PageContent", "fetch_page", "is_http_url", "page_prompt_text", "parse_page"]

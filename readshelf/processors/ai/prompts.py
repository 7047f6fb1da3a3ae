from __future__ import annotations

import os


def _truncate_words(text: str, max_words: int) -> str:
    words = text.split()
    return " ".join(words[:max_words]) if len(words) > max_words else text


def build_extraction_prompt(article_url: str, page_text: str = "") -> str:
    page_block = ""
    if page_text:
        # Keep the prompt small for local models
        max_words = int(os.getenv("AI_INPUT_TRUNCATE_WORDS", "600"))
        if max_words > 0:
            page_text = _truncate_words(page_text, max_words)
        page_block = f"PAGE TEXT:\n{page_text}\n\n"
    return (
        "You are an expert at extracting information from web pages. "
        "Given the article URL (and page text when provided), extract the main title "
        "of the article and write a concise summary (2-3 sentences) of its content.\n\n"
        "Output MUST be a single JSON object with keys: "
        "title (string), summary (string), "
        "imageUrl (string, absolute URL of the main article image, or empty string if none), "
        "dataAiHint (string, one or two keywords describing the image, at most 50 characters).\n"
        "If you cannot access the URL or extract the information, you MUST still provide a title and summary. "
        "In such cases, use a title like \"Extraction Failed: URL Inaccessible\" or "
        "\"Extraction Failed: Content Unsuitable\" and a summary explaining the issue.\n"
        "Do not include markdown, code fences, or extra text.\n\n"
        f"ARTICLE URL: {article_url}\n\n"
        f"{page_block}"
    )


def build_relevance_prompt(article_content: str, user_reading_history: str) -> str:
    return (
        "You are an assistant that predicts the relevance of an article to a user "
        "based on their reading history.\n"
        "Output MUST be a single JSON object with keys: "
        "relevanceScore (number between 0 and 1; 0 means not relevant, 1 means highly relevant), "
        "reasoning (string, short explanation of the score).\n"
        "Do not include markdown, code fences, or extra text.\n\n"
        f"ARTICLE CONTENT:\n{article_content}\n\n"
        f"USER READING HISTORY:\n{user_reading_history}\n"
    )

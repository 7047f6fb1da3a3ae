from __future__ import annotations

import os
from typing import Any, Dict

import requests

from .base import AIClient
from .parsing import parse_json_object
from .prompts import build_extraction_prompt, build_relevance_prompt

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiClient(AIClient):
    """Google AI Studio (Gemini) backend.

    Gemini can usually read a public URL by itself, so extraction still works
    when no page text was fetched.

    Environment:
      - GOOGLE_API_KEY (required)
      - GEMINI_MODEL (default: gemini-1.5-flash)
    """

    def __init__(self, *, timeout: int = 60) -> None:
        self.api_key = os.environ.get("GOOGLE_API_KEY")
        if not self.api_key:
            raise RuntimeError("GOOGLE_API_KEY is required for Gemini backend")
        self.model = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
        self.timeout = timeout

    def _generate_json(self, prompt: str, *, temperature: float = 0.2) -> Dict[str, Any]:
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "responseMimeType": "application/json",
            },
        }
        resp = requests.post(
            GEMINI_ENDPOINT.format(model=self.model),
            json=body,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        # Blocked or empty generations come back without candidates
        candidates = resp.json().get("candidates") or []
        parts = []
        if candidates:
            parts = candidates[0].get("content", {}).get("parts") or []
        return parse_json_object("".join(p.get("text", "") for p in parts))

    def extract_article_info(self, article_url: str, *, page_text: str = "") -> Dict[str, Any]:
        return self._generate_json(build_extraction_prompt(article_url, page_text))

    def predict_relevance(self, article_content: str, user_reading_history: str) -> Dict[str, Any]:
        return self._generate_json(build_relevance_prompt(article_content, user_reading_history))

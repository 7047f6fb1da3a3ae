from __future__ import annotations

import os
from typing import Any, Dict

import requests

from .base import AIClient
from .parsing import parse_json_object
from .prompts import build_extraction_prompt, build_relevance_prompt


class OllamaClient(AIClient):
    """Local Ollama backend (``/api/generate`` in JSON mode).

    A local model cannot browse, so extraction quality depends on the page
    text fetched before the call.

    Environment:
      - OLLAMA_HOST (default: http://localhost:11434)
      - OLLAMA_MODEL (default: llama3.1:8b-instruct)
    """

    def __init__(self, *, timeout: int = 120) -> None:
        self.host = os.environ.get("OLLAMA_HOST", "http://localhost:11434").rstrip("/")
        self.model = os.environ.get("OLLAMA_MODEL", "llama3.1:8b-instruct")
        self.timeout = timeout

    def _generate_json(self, prompt: str, *, temperature: float = 0.2) -> Dict[str, Any]:
        resp = requests.post(
            f"{self.host}/api/generate",
            json={
                "model": self.model,
                "prompt": prompt,
                "stream": False,
                "format": "json",
                "options": {"temperature": temperature},
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return parse_json_object(resp.json().get("response", ""))

    def extract_article_info(self, article_url: str, *, page_text: str = "") -> Dict[str, Any]:
        return self._generate_json(build_extraction_prompt(article_url, page_text))

    def predict_relevance(self, article_content: str, user_reading_history: str) -> Dict[str, Any]:
        return self._generate_json(build_relevance_prompt(article_content, user_reading_history))

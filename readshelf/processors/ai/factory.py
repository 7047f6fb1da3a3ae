from __future__ import annotations

import os
from typing import Optional

from .base import AIClient

SUPPORTED_BACKENDS = ("gemini", "ollama")


def create_ai_client(*, backend: Optional[str] = None) -> AIClient:
    """Build the extraction/relevance client for PROCESSING_BACKEND.

    Gemini is the default since it can read public URLs on its own; Ollama
    relies on the page text fetched beforehand.
    """
    selected = (backend or os.environ.get("PROCESSING_BACKEND") or "gemini").strip().lower()

    if selected == "gemini":
        from .gemini import GeminiClient  # lazy import

        return GeminiClient()
    if selected == "ollama":
        from .ollama import OllamaClient  # lazy import

        return OllamaClient()

    raise ValueError(
        f"Unsupported PROCESSING_BACKEND '{selected}'. Use one of: {', '.join(SUPPORTED_BACKENDS)}."
    )

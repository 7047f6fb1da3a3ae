from __future__ import annotations

import math
from typing import Any, Mapping

from ..models import RelevanceAssessment
from ..utils.logging import get_logger
from .ai import AIClient, create_ai_client

logger = get_logger("rs.processors.relevance")


class RelevanceError(ValueError):
    """Raised when no usable relevance score could be obtained."""


def normalize_relevance(payload: Mapping[str, Any] | None) -> RelevanceAssessment:
    """Validate a model relevance payload.

    Expected object with keys:
      - relevanceScore: number in [0, 1]
      - reasoning: string (optional, defaults to "")

    Scores are never clamped: a missing, non-numeric, or out-of-range score
    raises ``RelevanceError``.
    """
    if not payload or not isinstance(payload, Mapping):
        raise RelevanceError("Empty relevance response")

    score_val = payload.get("relevanceScore")
    if score_val is None:
        raise RelevanceError("'relevanceScore' is missing")
    if isinstance(score_val, bool):
        raise RelevanceError(f"Invalid relevanceScore '{score_val}'")
    try:
        score = float(score_val)
    except (TypeError, ValueError, OverflowError) as exc:
        raise RelevanceError(f"Invalid relevanceScore '{score_val}': {exc}") from exc

    if math.isnan(score) or not (0.0 <= score <= 1.0):
        raise RelevanceError(f"relevanceScore out of range: {score}")

    reasoning_val = payload.get("reasoning")
    reasoning = "" if reasoning_val is None else str(reasoning_val)
    return RelevanceAssessment(score=score, reasoning=reasoning)


def predict_relevance(
    article_content: str,
    user_reading_history: str,
    *,
    ai: AIClient | None = None,
) -> RelevanceAssessment:
    """Score how well ``article_content`` matches ``user_reading_history``.

    Any failure, including the backend being unreachable, is raised as
    ``RelevanceError``; callers keep whatever score they had before.
    """
    if not article_content or not article_content.strip():
        raise RelevanceError("Article content is required for relevance prediction")
    if not user_reading_history or not user_reading_history.strip():
        raise RelevanceError("Reading history is required for relevance prediction")

    if ai is None:
        ai = create_ai_client()

    try:
        payload = ai.predict_relevance(article_content, user_reading_history)
    except RelevanceError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise RelevanceError(f"Relevance call failed: {exc}") from exc

    assessment = normalize_relevance(payload)
    logger.debug("Relevance predicted: %.2f", assessment.score)
    return assessment

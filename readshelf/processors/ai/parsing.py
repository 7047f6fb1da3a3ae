from __future__ import annotations

import json
import re
from typing import Any, Dict

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_json_object(raw: str) -> Dict[str, Any]:
    """Extract the first JSON object from a model reply.

    Tolerates code fences and chatter around the object. Field-level
    validation is left to the normalizers.
    """
    if not raw or not raw.strip():
        raise ValueError("Empty AI response")

    text = _FENCE_RE.sub("", raw)
    match = re.search(r"\{[\s\S]*\}", text)
    if not match:
        raise ValueError("No JSON object found in AI response")

    obj = json.loads(match.group(0))
    if not isinstance(obj, dict):
        raise ValueError("AI response JSON is not an object")
    return obj

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple
from urllib.parse import urlparse

import yaml


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


REQUIRED_FIELDS = {"name", "url"}


def _validate_feed_dict(entry: dict) -> None:
    """Validate a single feed mapping from YAML.

    Required fields: name (non-empty str), url (http/https).
    """
    missing = REQUIRED_FIELDS - set(entry)
    if missing:
        raise ConfigError(f"Missing required fields: {sorted(missing)} in {entry}")

    if not str(entry["name"] or "").strip():
        raise ConfigError(f"Feed name must not be empty in {entry}")

    url_str = str(entry["url"] or "").strip()
    parsed = urlparse(url_str)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid URL '{url_str}'. Must be absolute http(s) URL.")


def load_feeds_config(path: Path | str) -> List[Tuple[str, str]]:
    """Load a feed import file into ``(name, url)`` pairs.

    YAML structure:
      - Top-level mapping
      - Key ``feeds``: list of mappings with fields
          - name: string (required)
          - url: http/https URL (required)

    Unknown top-level keys are ignored for forward compatibility.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Top level of the feeds file must be a mapping")

    feeds_raw: Iterable[dict] = data.get("feeds") or []
    if not isinstance(feeds_raw, list):
        raise ConfigError("'feeds' must be a list in the YAML configuration")

    feeds: List[Tuple[str, str]] = []
    for item in feeds_raw:
        if not isinstance(item, dict):
            raise ConfigError(f"Each feed must be a mapping, got: {type(item)}")
        _validate_feed_dict(item)
        feeds.append((str(item["name"]).strip(), str(item["url"]).strip()))
    return feeds

"""
Discovered URL cache.

Stores the sorted list of pages to export so later runs can skip the crawl.
"""

import json
import os
from typing import List, Optional

from .log import get_logger
from .paths import ensure_parent_dir


logger = get_logger("cache")


class CacheError(Exception):
    """Raised when the URL cache cannot be written."""


def load_url_cache(path: str) -> Optional[List[str]]:
    """
    Load the cached URL list.

    A missing file is a normal first run. An unreadable or malformed file
    is logged and treated as missing so the caller crawls again.

    Args:
        path: Cache file path

    Returns:
        List of URLs, or None if there is no usable cache
    """
    if not os.path.exists(path):
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable URL cache {path}: {e}")
        return None

    if not isinstance(data, list) or not all(isinstance(u, str) for u in data):
        logger.warning(f"Ignoring URL cache {path}: expected a JSON list of URLs")
        return None

    logger.info(f"Loaded {len(data)} URLs from cache.")
    return data


def save_url_cache(path: str, urls: List[str]) -> None:
    """
    Write the URL list as pretty-printed JSON.

    Args:
        path: Cache file path
        urls: URLs to store

    Raises:
        CacheError: If the file cannot be written
    """
    try:
        ensure_parent_dir(path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(list(urls), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise CacheError(f"Cannot write URL cache {path}: {e}") from e

    logger.info(f"Saved {len(urls)} URLs to {path}")

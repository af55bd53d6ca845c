"""
Utility modules for the docs exporter.

Contains logging, configuration, URL/path handling, the URL cache, and constants.
"""

from .log import setup_logger, get_logger
from .paths import (
    normalize_url,
    get_origin,
    is_in_scope,
    sanitize_filename,
    url_to_output_dir,
    get_output_path,
    ensure_dir,
)
from .config import ExportConfig, ConfigError, TraversalPolicy
from .cache import load_url_cache, save_url_cache, CacheError
from .constants import (
    DEFAULT_START_URL,
    DEFAULT_SCOPE_PREFIX,
    DEFAULT_CONCURRENCY,
    DEFAULT_PAUSE_MS,
    MAX_RETRIES,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "normalize_url",
    "get_origin",
    "is_in_scope",
    "sanitize_filename",
    "url_to_output_dir",
    "get_output_path",
    "ensure_dir",
    "ExportConfig",
    "ConfigError",
    "TraversalPolicy",
    "load_url_cache",
    "save_url_cache",
    "CacheError",
    "DEFAULT_START_URL",
    "DEFAULT_SCOPE_PREFIX",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_PAUSE_MS",
    "MAX_RETRIES",
]

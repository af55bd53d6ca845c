"""
Run configuration for the docs exporter.

Values come from environment variables with fixed defaults. Command line
values are passed to from_env() and replace the matching variables before
anything is validated.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional
from urllib.parse import urljoin

from .constants import (
    DEFAULT_CACHE_FILE,
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAUSE_MS,
    DEFAULT_SCOPE_PREFIX,
    DEFAULT_SEED_PATHS,
    DEFAULT_START_URL,
)
from .paths import get_origin, normalize_url


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


class TraversalPolicy(Enum):
    """Which discovered links the crawler follows for further discovery."""

    # Follow every same-origin link, so listing pages outside the scope
    # can still lead to in-scope pages
    SAME_ORIGIN = "same-origin"
    # Stop at the scope boundary
    SCOPE_ONLY = "scope-only"

    @classmethod
    def parse(cls, value: str) -> "TraversalPolicy":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigError(f"Unknown traversal policy {value!r} (expected one of: {choices})")


TRUE_VALUES = ("1", "true", "yes", "on")


def _int_setting(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    return max(minimum, value)


def _bool_setting(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUE_VALUES


@dataclass
class ExportConfig:
    """Settings shared by the crawler, exporter and scheduler."""

    start_url: str = DEFAULT_START_URL
    scope_prefix: str = DEFAULT_SCOPE_PREFIX
    concurrency: int = DEFAULT_CONCURRENCY
    pause_ms: int = DEFAULT_PAUSE_MS
    output_dir: str = DEFAULT_OUTPUT_DIR
    cache_file: str = DEFAULT_CACHE_FILE
    seed_paths: List[str] = field(default_factory=lambda: list(DEFAULT_SEED_PATHS))
    traversal: TraversalPolicy = TraversalPolicy.SAME_ORIGIN
    debug_screenshots: bool = False
    headless: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check the start URL and clamp the numeric settings.

        Raises:
            ConfigError: If the start URL is not an absolute http(s) URL
        """
        normalized = normalize_url(self.start_url, self.start_url)
        if not normalized or not self.start_url.strip().lower().startswith(("http://", "https://")):
            raise ConfigError(f"Invalid start URL: {self.start_url}")
        if not self.scope_prefix.startswith("/"):
            self.scope_prefix = "/" + self.scope_prefix
        self.concurrency = max(1, int(self.concurrency))
        self.pause_ms = max(0, int(self.pause_ms))

    @property
    def origin(self) -> str:
        """Origin every crawled and exported page must share."""
        return get_origin(self.start_url)

    @property
    def output_root(self) -> str:
        return os.path.abspath(self.output_dir)

    @property
    def cache_path(self) -> str:
        return os.path.abspath(self.cache_file)

    def seeds(self) -> List[str]:
        """
        Build the crawl seeds: the start URL plus each seed path resolved
        against the origin, without duplicates and in order.
        """
        seeds: List[str] = []
        for candidate in [self.start_url] + [urljoin(self.origin, p) for p in self.seed_paths]:
            url = normalize_url(candidate, self.origin)
            if url and url not in seeds:
                seeds.append(url)
        return seeds

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ExportConfig":
        """
        Build a configuration from environment variables.

        Fields given in overrides are taken as-is and their environment
        variables are not read, so a bad variable cannot block a value
        supplied on the command line.

        Args:
            environ: Mapping to read from (default: os.environ)
            **overrides: Field values that win over the environment

        Returns:
            ExportConfig instance

        Raises:
            ConfigError: If a value is malformed
        """
        if environ is None:
            environ = os.environ

        def seed_paths():
            if "SEED_PATHS" not in environ:
                return list(DEFAULT_SEED_PATHS)
            return [p.strip() for p in environ["SEED_PATHS"].split(",") if p.strip()]

        readers = {
            'start_url': lambda: environ.get("START_URL") or DEFAULT_START_URL,
            'scope_prefix': lambda: environ.get("SCOPE_PREFIX") or DEFAULT_SCOPE_PREFIX,
            'concurrency': lambda: _int_setting(environ, "CONCURRENCY", DEFAULT_CONCURRENCY, 1),
            'pause_ms': lambda: _int_setting(environ, "PAUSE_MS", DEFAULT_PAUSE_MS, 0),
            'output_dir': lambda: environ.get("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
            'cache_file': lambda: environ.get("URLS_JSON") or DEFAULT_CACHE_FILE,
            'seed_paths': seed_paths,
            'traversal': lambda: TraversalPolicy.parse(
                environ.get("TRAVERSAL") or TraversalPolicy.SAME_ORIGIN.value
            ),
            'debug_screenshots': lambda: _bool_setting(environ, "DEBUG_SCREENSHOTS", False),
            'headless': lambda: _bool_setting(environ, "HEADLESS", True),
        }

        unknown = set(overrides) - set(readers)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        values = {
            name: overrides[name] if name in overrides else read()
            for name, read in readers.items()
        }
        return cls(**values)

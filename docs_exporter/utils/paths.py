"""
Path and URL utilities for the docs exporter.

Provides URL normalization, scope checks, file name sanitizing, and the
mapping from page URLs to PDF output paths.
"""

import os
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from .constants import DEFAULT_FILENAME, MAX_FILENAME_LENGTH


DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters allowed to survive in an output file name
UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9\-_. ]+")
WHITESPACE = re.compile(r"\s+")
REPEATED_DASHES = re.compile(r"-+")


def normalize_url(href: str, base_url: str) -> Optional[str]:
    """
    Resolve a link against a base URL and canonicalize it.

    Fragment and query are dropped, scheme and host are lower-cased and
    the default port is removed, so links that point at the same page
    compare equal.

    Args:
        href: Link target as found in the page (relative or absolute)
        base_url: URL of the page the link was found on

    Returns:
        Normalized absolute URL, or None if the link is not a usable
        http(s) URL
    """
    if not href:
        return None

    href = href.strip()
    if not href:
        return None

    try:
        parsed = urlsplit(urljoin(base_url, href))
        scheme = parsed.scheme.lower()
        host = parsed.hostname
        port = parsed.port
    except ValueError:
        return None

    if scheme not in DEFAULT_PORTS or not host:
        return None

    netloc = host
    if ":" in host:
        # IPv6 literal
        netloc = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"

    return urlunsplit((scheme, netloc, remove_dot_segments(parsed.path), "", ""))


def remove_dot_segments(path: str) -> str:
    """
    Resolve '.' and '..' segments in an absolute URL path.

    urljoin only does this for relative links; absolute links keep their
    path as written, so '/docs/../other' would still look like '/docs/'.

    Args:
        path: URL path (may be empty)

    Returns:
        Path without dot segments, starting with '/'
    """
    segments = path.split("/")
    resolved = [""]
    for segment in segments[1:]:
        if segment == ".":
            continue
        if segment == "..":
            if len(resolved) > 1:
                resolved.pop()
            continue
        resolved.append(segment)

    # a trailing dot segment still names a directory
    if segments[-1] in (".", ".."):
        resolved.append("")

    return "/".join(resolved) or "/"


def get_origin(url: str) -> str:
    """
    Extract the origin (scheme://host[:port]) from a URL.

    Args:
        url: URL to extract the origin from

    Returns:
        Origin string, empty if the URL cannot be parsed
    """
    normalized = normalize_url(url, url)
    if not normalized:
        return ""
    parsed = urlsplit(normalized)
    return f"{parsed.scheme}://{parsed.netloc}"


def get_url_path(url: str) -> str:
    """Get the path component of a URL."""
    return urlsplit(url).path or "/"


def is_in_scope(url: str, origin: str, path_prefix: str) -> bool:
    """
    Check whether a URL is same-origin and under the scope prefix.

    Args:
        url: URL to check
        origin: Origin the URL must belong to
        path_prefix: Path prefix the URL must start with (e.g. '/docs/')

    Returns:
        True if in scope, False otherwise
    """
    normalized = normalize_url(url, url)
    if not normalized or get_origin(normalized) != get_origin(origin):
        return False
    return get_url_path(normalized).startswith(path_prefix)


def sanitize_filename(
    name: Optional[str],
    max_length: int = MAX_FILENAME_LENGTH,
    default: str = DEFAULT_FILENAME
) -> str:
    """
    Turn a page title into a safe file name.

    Args:
        name: Page title (may be empty or None)
        max_length: Maximum length of the result
        default: Name used when nothing usable is left

    Returns:
        Lower-case name made of letters, digits, '-', '_' and '.'
    """
    cleaned = (name or "").lower()
    cleaned = UNSAFE_FILENAME_CHARS.sub("-", cleaned)
    cleaned = WHITESPACE.sub("-", cleaned)
    cleaned = REPEATED_DASHES.sub("-", cleaned).strip("-")
    cleaned = cleaned[:max_length].rstrip("-")
    return cleaned or default


def url_to_output_dir(url: str, output_dir: str) -> str:
    """
    Map a page URL to its PDF directory under the output root.

    '/docs/get-started/intro/' becomes 'docs_get-started_intro'; the site
    root maps to 'index'.

    Args:
        url: Page URL
        output_dir: Output root directory

    Returns:
        Directory path for the page's PDF
    """
    path = get_url_path(url).strip("/")
    folder = path.replace("/", "_") or "index"
    return os.path.join(output_dir, folder)


def get_output_path(url: str, title: Optional[str], output_dir: str) -> str:
    """
    Build the full PDF path for a page.

    Args:
        url: Page URL
        title: Page title used for the file name
        output_dir: Output root directory

    Returns:
        Path of the PDF file
    """
    return os.path.join(
        url_to_output_dir(url, output_dir),
        f"{sanitize_filename(title)}.pdf"
    )


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)

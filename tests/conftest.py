"""
Shared fixtures: an in-memory fake of the Playwright browser surface.

FakeSite holds a small synthetic website; FakeBrowser hands out contexts
and pages that serve it, fail on demand, and record what was called.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from docs_exporter.crawler import PageRenderer


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakeSite:
    """Synthetic website: URL -> (title, list of hrefs)."""

    def __init__(self):
        self.pages: Dict[str, dict] = {}
        self.navigations: List[str] = []
        # URL -> number of navigations that fail before one succeeds
        self.nav_failures: Dict[str, int] = {}
        self.always_fail = set()
        self.idle_timeout = False
        # URL -> number of selector waits that raise a non-timeout error
        self.selector_errors: Dict[str, int] = {}
        self.title_error = False

    def add(self, url: str, links=(), title: Optional[str] = None, status: int = 200):
        self.pages[url] = {"links": list(links), "title": title or "", "status": status}
        return self

    def html(self, url: str) -> str:
        anchors = "".join(f'<a href="{href}">link</a>' for href in self.pages[url]["links"])
        return f"<html><head><title>t</title></head><body><main>{anchors}</main></body></html>"

    def navigate(self, url: str) -> FakeResponse:
        self.navigations.append(url)
        if url in self.always_fail:
            raise PlaywrightTimeout(f"Timeout 60000ms exceeded navigating to {url}")
        remaining = self.nav_failures.get(url, 0)
        if remaining:
            self.nav_failures[url] = remaining - 1
            raise PlaywrightError(f"net::ERR_CONNECTION_RESET at {url}")
        if url not in self.pages:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        return FakeResponse(self.pages[url]["status"])

    def navigation_count(self, url: str) -> int:
        return self.navigations.count(url)


class FakePage:
    def __init__(self, site: FakeSite, context: "FakeContext"):
        self.site = site
        self.context = context
        self.url: Optional[str] = None
        self.styles: List[str] = []
        self.media: Optional[str] = None
        self.pdf_calls: List[dict] = []
        self.screenshots: List[str] = []

    async def goto(self, url, wait_until=None, timeout=None):
        response = self.site.navigate(url)
        self.url = url
        return response

    async def wait_for_load_state(self, state=None, timeout=None):
        if self.site.idle_timeout:
            raise PlaywrightTimeout("Timeout 30000ms exceeded.")

    async def wait_for_selector(self, selector, timeout=None):
        remaining = self.site.selector_errors.get(self.url, 0)
        if remaining:
            self.site.selector_errors[self.url] = remaining - 1
            raise PlaywrightError("Target page, context or browser has been closed")

    async def content(self):
        return self.site.html(self.url)

    async def title(self):
        if self.site.title_error:
            raise PlaywrightError("Execution context was destroyed")
        return self.site.pages[self.url]["title"]

    async def add_style_tag(self, content=None, **kwargs):
        self.styles.append(content)

    async def emulate_media(self, media=None, **kwargs):
        self.media = media

    async def screenshot(self, path=None, full_page=False, **kwargs):
        self.screenshots.append(path)
        Path(path).write_bytes(b"\x89PNG fake")

    async def pdf(self, path=None, **kwargs):
        self.pdf_calls.append(dict(kwargs, path=path))
        Path(path).write_bytes(b"%PDF-1.4 fake")


class FakeContext:
    def __init__(self, browser: "FakeBrowser", options: dict):
        self.browser = browser
        self.options = options
        self.pages: List[FakePage] = []
        self.closed = False

    async def new_page(self):
        page = FakePage(self.browser.site, self)
        self.pages.append(page)
        self.browser.pages.append(page)
        return page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, site: FakeSite):
        self.site = site
        self.contexts: List[FakeContext] = []
        self.pages: List[FakePage] = []
        self.closed = False

    async def new_context(self, **options):
        context = FakeContext(self, options)
        self.contexts.append(context)
        return context

    async def close(self):
        self.closed = True

    @property
    def open_contexts(self) -> int:
        return sum(1 for c in self.contexts if not c.closed)


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
def browser(site):
    return FakeBrowser(site)


@pytest.fixture
def renderer(browser):
    return PageRenderer(browser=browser)


ENV_KEYS = (
    "START_URL", "SCOPE_PREFIX", "CONCURRENCY", "PAUSE_MS", "OUTPUT_DIR",
    "URLS_JSON", "SEED_PATHS", "TRAVERSAL", "DEBUG_SCREENSHOTS", "HEADLESS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch

"""
Documentation link crawler.

Breadth-first discovery of every page under the scope prefix, starting from
one or more seed URLs.
"""

import hashlib
import os
from typing import Iterable, List, Optional, Set

from playwright.async_api import Page

from .extractor import LinkExtractor
from .frontier import Frontier
from .renderer import PageRenderer
from ..utils.config import TraversalPolicy
from ..utils.constants import CONTENT_SELECTOR
from ..utils.log import get_logger
from ..utils.paths import ensure_dir, get_origin, is_in_scope, normalize_url


class LinkCrawler:
    """
    Discovers in-scope documentation pages by following links.

    Pages are visited one at a time so the frontier never sees concurrent
    updates.
    """

    def __init__(
        self,
        renderer: PageRenderer,
        traversal: TraversalPolicy = TraversalPolicy.SAME_ORIGIN,
        content_selector: Optional[str] = CONTENT_SELECTOR,
        screenshot_dir: Optional[str] = None
    ):
        """
        Initialize the crawler.

        Args:
            renderer: Started page renderer
            traversal: Which discovered links are followed further
            content_selector: Marker awaited before reading links; None skips the wait
            screenshot_dir: Directory for per-visit debug screenshots; None disables them
        """
        self.renderer = renderer
        self.traversal = traversal
        self.content_selector = content_selector
        self.screenshot_dir = screenshot_dir
        self.extractor = LinkExtractor()
        self.logger = get_logger("crawler")

        self.frontier = Frontier()
        self._discovered: Set[str] = set()

    @property
    def visited(self):
        """URLs dequeued for link discovery in the last crawl."""
        return self.frontier.visited

    async def crawl(
        self,
        seeds: Iterable[str],
        origin: str,
        scope_prefix: str
    ) -> List[str]:
        """
        Crawl from the seeds and collect every in-scope page.

        Args:
            seeds: Starting URLs
            origin: Origin all followed links must share
            scope_prefix: Path prefix of pages to collect (e.g. '/docs/')

        Returns:
            Sorted list of discovered in-scope URLs
        """
        origin = get_origin(origin)
        self.frontier = Frontier()
        self._discovered = set()

        for seed in seeds:
            url = normalize_url(seed, origin)
            if url:
                self.frontier.enqueue_if_new(url)

        self.logger.info(f"Collecting {scope_prefix} URLs from {origin} ...")

        while self.frontier:
            url = self.frontier.dequeue()
            if self.frontier.is_visited(url):
                continue
            self.frontier.mark_visited(url)

            try:
                hrefs = await self._visit(url)
            except Exception as e:
                self.logger.warning(f"[collect] WARN {url}: {e}")
                continue

            if is_in_scope(url, origin, scope_prefix):
                self._discovered.add(url)

            for href in hrefs:
                self._consider_link(href, url, origin, scope_prefix)

            self.logger.info(
                f"[collect] visited={len(self.frontier.visited)} "
                f"docs={len(self._discovered)} @ {url}"
            )

        urls = sorted(self._discovered)
        self.logger.info(f"Found {len(urls)} docs URLs")
        return urls

    def _consider_link(self, href: str, page_url: str, origin: str, scope_prefix: str) -> None:
        """Record an extracted link and queue it if the traversal policy allows."""
        link = normalize_url(href, page_url)
        if not link or get_origin(link) != origin:
            return

        in_scope = is_in_scope(link, origin, scope_prefix)
        if in_scope:
            self._discovered.add(link)

        if in_scope or self.traversal is TraversalPolicy.SAME_ORIGIN:
            self.frontier.enqueue_if_new(link)

    async def _visit(self, url: str) -> List[str]:
        """
        Load one page in its own context and return its raw link targets.

        Raises:
            Exception: Any navigation or render failure
        """
        async with self.renderer.open_page() as page:
            self.logger.info(f"[goto] -> {url}")
            await self.renderer.load(page, url, self.content_selector)
            self.logger.debug(f"[goto] OK {url}")

            if self.screenshot_dir:
                await self._capture_debug_screenshot(page, url)

            html = await page.content()

        return self.extractor.extract_hrefs(html)

    async def _capture_debug_screenshot(self, page: Page, url: str) -> None:
        """Save a full-page screenshot to check that the page rendered."""
        ensure_dir(self.screenshot_dir)
        digest = hashlib.sha256(url.encode()).hexdigest()[:16]
        path = os.path.join(self.screenshot_dir, f"debug-{digest}.png")
        await page.screenshot(path=path, full_page=True)
        self.logger.debug(f"Saved debug screenshot {path}")

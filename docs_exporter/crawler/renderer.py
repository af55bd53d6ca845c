"""
Page renderer using Playwright.

Owns the shared headless Chromium instance and hands out pages in isolated
browser contexts, with the navigation and settle-wait helpers used by both
the crawler and the PDF exporter.
"""

from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeout,
)

from ..utils.log import get_logger
from ..utils.constants import (
    DEFAULT_LOCALE,
    DEFAULT_USER_AGENT,
    DEFAULT_VIEWPORT,
    IDLE_TIMEOUT,
    NAV_TIMEOUT,
    SELECTOR_TIMEOUT,
)


class RenderError(Exception):
    """Raised when a page cannot be brought to a usable state."""


class WaitOutcome(Enum):
    """Result of a best-effort wait."""

    READY = "ready"
    TIMED_OUT = "timed-out"
    ERROR = "error"


class PageRenderer:
    """
    Renders web pages using a Playwright headless browser.

    One browser is shared by every caller; each open_page() gets its own
    context so cookies and storage never leak between pages.
    """

    def __init__(
        self,
        headless: bool = True,
        nav_timeout: int = NAV_TIMEOUT,
        idle_timeout: int = IDLE_TIMEOUT,
        selector_timeout: int = SELECTOR_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        browser: Optional[Browser] = None
    ):
        """
        Initialize the page renderer.

        Args:
            headless: Run browser in headless mode
            nav_timeout: Navigation timeout in milliseconds
            idle_timeout: Network-idle wait timeout in milliseconds
            selector_timeout: Content selector wait timeout in milliseconds
            user_agent: User agent for every context
            browser: Already launched browser to use instead of launching one
        """
        self.headless = headless
        self.nav_timeout = nav_timeout
        self.idle_timeout = idle_timeout
        self.selector_timeout = selector_timeout
        self.user_agent = user_agent
        self.logger = get_logger("renderer")

        self._playwright = None
        self._browser: Optional[Browser] = browser

    async def start(self) -> None:
        """
        Start the Playwright browser instance.

        Launch failures propagate; without a browser nothing can run.
        """
        if self._browser:
            return
        self.logger.info("Starting Playwright browser...")
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=['--disable-blink-features=AutomationControlled']
            )
        except BaseException:
            await self._playwright.stop()
            self._playwright = None
            raise
        self.logger.info("Browser started successfully")

    async def stop(self) -> None:
        """
        Stop the Playwright browser instance.
        """
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self.logger.info("Browser stopped")

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        """
        Open a page in a fresh browser context.

        The context is closed on every exit path.
        """
        if not self._browser:
            await self.start()

        context = await self._browser.new_context(
            user_agent=self.user_agent,
            viewport=DEFAULT_VIEWPORT,
            locale=DEFAULT_LOCALE,
        )
        try:
            page = await context.new_page()
            yield page
        finally:
            await context.close()

    async def navigate(self, page: Page, url: str) -> None:
        """
        Navigate to a URL and wait for the load event.

        Raises:
            PlaywrightError: On timeout or navigation failure
        """
        response = await page.goto(url, wait_until='load', timeout=self.nav_timeout)
        if response is not None and response.status >= 400:
            self.logger.warning(f"HTTP {response.status} for {url}")

    async def wait_for_network_idle(self, page: Page) -> WaitOutcome:
        """Wait until the network has been idle, within the idle timeout."""
        try:
            await page.wait_for_load_state('networkidle', timeout=self.idle_timeout)
            return WaitOutcome.READY
        except PlaywrightTimeout:
            return WaitOutcome.TIMED_OUT
        except PlaywrightError as e:
            self.logger.debug(f"Network idle wait failed: {e}")
            return WaitOutcome.ERROR

    async def wait_for_content(self, page: Page, selector: str) -> WaitOutcome:
        """Wait for the content marker selector, within the selector timeout."""
        try:
            await page.wait_for_selector(selector, timeout=self.selector_timeout)
            return WaitOutcome.READY
        except PlaywrightTimeout:
            return WaitOutcome.TIMED_OUT
        except PlaywrightError as e:
            self.logger.debug(f"Selector wait for {selector!r} failed: {e}")
            return WaitOutcome.ERROR

    async def settle(self, page: Page, selector: Optional[str] = None) -> None:
        """
        Give a loaded page time to finish rendering.

        Timeouts are tolerated; any other wait error means the page is
        broken.

        Raises:
            RenderError: If a wait fails for a reason other than timing out
        """
        if await self.wait_for_network_idle(page) is WaitOutcome.ERROR:
            raise RenderError("network idle wait failed")
        if selector and await self.wait_for_content(page, selector) is WaitOutcome.ERROR:
            raise RenderError(f"waiting for {selector!r} failed")

    async def load(self, page: Page, url: str, selector: Optional[str] = None) -> None:
        """Navigate to a URL and settle the page."""
        await self.navigate(page, url)
        await self.settle(page, selector)

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.stop()

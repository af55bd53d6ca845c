"""
PDF exporter for documentation pages.

Prints one page to A4 PDF with the site chrome hidden, retrying transient
failures a fixed number of times.
"""

import asyncio
import html
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Page, Error as PlaywrightError

from .renderer import PageRenderer
from ..utils.constants import (
    CONTENT_SELECTOR,
    DEFAULT_PAGE_TITLE,
    MAX_RETRIES,
    PDF_FOOTER_TEMPLATE,
    PDF_FORMAT,
    PDF_HEADER_TEMPLATE,
    PDF_MARGIN,
    PRINT_CSS,
    RETRY_BACKOFF,
)
from ..utils.log import get_logger
from ..utils.paths import ensure_parent_dir, get_output_path, get_url_path


@dataclass
class ExportResult:
    """Outcome of exporting one page."""

    url: str
    success: bool
    attempts: int
    path: Optional[str] = None
    error: Optional[str] = None


def should_retry(attempt: int, max_retries: int = MAX_RETRIES) -> bool:
    """
    Decide whether a failed attempt gets another try.

    Args:
        attempt: 1-based number of the attempt that just failed
        max_retries: Total attempts allowed

    Returns:
        True if another attempt should be made
    """
    return attempt < max_retries


class PdfExporter:
    """
    Exports documentation pages to PDF.

    Every attempt runs in its own browser context.
    """

    def __init__(
        self,
        renderer: PageRenderer,
        output_dir: str,
        max_retries: int = MAX_RETRIES,
        backoff: float = RETRY_BACKOFF,
        content_selector: Optional[str] = CONTENT_SELECTOR
    ):
        """
        Initialize the exporter.

        Args:
            renderer: Started page renderer
            output_dir: Root directory for the PDFs
            max_retries: Total attempts per page
            backoff: Seconds to wait before a retry
            content_selector: Marker awaited before printing; None skips the wait
        """
        self.renderer = renderer
        self.output_dir = output_dir
        self.max_retries = max(1, max_retries)
        self.backoff = backoff
        self.content_selector = content_selector
        self.logger = get_logger("exporter")

    async def export(self, url: str) -> ExportResult:
        """
        Export a page, retrying up to max_retries attempts.

        Never raises for page-level failures; a permanent failure is logged
        and reported in the result.

        Args:
            url: Page URL

        Returns:
            ExportResult describing the outcome
        """
        attempt = 1
        while True:
            try:
                path = await self._export_once(url)
            except Exception as e:
                self.logger.warning(f"PDF ✗ [{attempt}/{self.max_retries}] {url}: {e}")
                if not should_retry(attempt, self.max_retries):
                    self.logger.error(f"Giving up on {url} after {attempt} attempts")
                    return ExportResult(url=url, success=False, attempts=attempt, error=str(e))
                attempt += 1
                await asyncio.sleep(self.backoff)
                continue

            self.logger.info(f"PDF ✓ {path}")
            return ExportResult(url=url, success=True, attempts=attempt, path=path)

    async def _export_once(self, url: str) -> str:
        """
        Run one export attempt.

        Returns:
            Path of the written PDF
        """
        async with self.renderer.open_page() as page:
            await self.renderer.load(page, url, self.content_selector)

            await page.add_style_tag(content=PRINT_CSS)
            await page.emulate_media(media='print')

            title = await self._read_title(page)
            pdf_path = get_output_path(url, title, self.output_dir)
            ensure_parent_dir(pdf_path)

            await page.pdf(
                path=pdf_path,
                format=PDF_FORMAT,
                print_background=True,
                margin=PDF_MARGIN,
                display_header_footer=True,
                header_template=PDF_HEADER_TEMPLATE.format(path=html.escape(get_url_path(url))),
                footer_template=PDF_FOOTER_TEMPLATE,
            )

        return pdf_path

    async def _read_title(self, page: Page) -> str:
        try:
            return await page.title() or DEFAULT_PAGE_TITLE
        except PlaywrightError as e:
            self.logger.debug(f"Could not read title: {e}")
            return DEFAULT_PAGE_TITLE

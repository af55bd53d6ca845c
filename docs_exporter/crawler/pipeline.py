"""
Crawl-and-export pipeline.

Loads the cached URL list or crawls for it, then exports every page.
"""

import os
import time
from dataclasses import dataclass, field
from typing import List

from .crawler import LinkCrawler
from .exporter import PdfExporter
from .renderer import PageRenderer
from .scheduler import ExportScheduler
from ..utils.cache import load_url_cache, save_url_cache
from ..utils.config import ExportConfig
from ..utils.log import get_logger, print_info, print_success, print_warning
from ..utils.paths import ensure_dir


@dataclass
class RunSummary:
    """Results of one pipeline run."""

    urls: int = 0
    exported: int = 0
    failed: List[str] = field(default_factory=list)
    from_cache: bool = False
    duration_seconds: float = 0.0


class ExportPipeline:
    """
    Wires the crawler, URL cache and export workers together.

    The renderer is owned by the caller, who starts and stops it.
    """

    def __init__(self, config: ExportConfig, renderer: PageRenderer, use_cache: bool = True):
        """
        Initialize the pipeline.

        Args:
            config: Run configuration
            renderer: Page renderer shared by the crawl and export phases
            use_cache: Load an existing URL cache instead of crawling
        """
        self.config = config
        self.renderer = renderer
        self.use_cache = use_cache
        self.logger = get_logger("pipeline")

        screenshot_dir = None
        if config.debug_screenshots:
            screenshot_dir = os.path.join(config.output_root, "debug")

        self.crawler = LinkCrawler(
            renderer,
            traversal=config.traversal,
            screenshot_dir=screenshot_dir
        )
        self.exporter = PdfExporter(renderer, output_dir=config.output_root)
        self.scheduler = ExportScheduler(
            self.exporter,
            concurrency=config.concurrency,
            pause_ms=config.pause_ms
        )

    async def run(self) -> RunSummary:
        """
        Run the crawl (unless cached) and the export phase.

        Returns:
            RunSummary with counts and failed URLs

        Raises:
            OSError: If the output root cannot be created
            CacheError: If the URL cache cannot be written
        """
        start_time = time.time()
        summary = RunSummary()

        ensure_dir(self.config.output_root)
        print_info(f"Output directory: {self.config.output_root}")

        urls = load_url_cache(self.config.cache_path) if self.use_cache else None
        if urls is not None:
            summary.from_cache = True
        else:
            urls = await self.crawler.crawl(
                self.config.seeds(),
                self.config.origin,
                self.config.scope_prefix
            )
            save_url_cache(self.config.cache_path, urls)

        summary.urls = len(urls)
        if not urls:
            print_warning("No pages to export")

        results = await self.scheduler.run(urls)

        summary.exported = sum(1 for r in results if r.success)
        summary.failed = sorted(r.url for r in results if not r.success)
        summary.duration_seconds = time.time() - start_time

        print_success(
            f"Export complete! {summary.exported}/{summary.urls} pages "
            f"in {summary.duration_seconds:.1f}s"
        )
        for url in summary.failed:
            self.logger.error(f"Not exported: {url}")

        return summary

"""
Export worker pool.

Runs a fixed number of workers over one shared job list.
"""

import asyncio
from collections import deque
from typing import Deque, Iterable, List

from .exporter import ExportResult, PdfExporter
from ..utils.constants import DEFAULT_CONCURRENCY, DEFAULT_PAUSE_MS
from ..utils.log import get_logger


class ExportScheduler:
    """
    Drives PdfExporter over a URL list with N concurrent workers.

    Workers claim jobs by popping from a shared deque. The emptiness check
    and the pop happen with no await in between, so no two workers ever
    claim the same URL.
    """

    def __init__(
        self,
        exporter: PdfExporter,
        concurrency: int = DEFAULT_CONCURRENCY,
        pause_ms: int = DEFAULT_PAUSE_MS
    ):
        self.exporter = exporter
        self.concurrency = max(1, concurrency)
        self.pause_ms = max(0, pause_ms)
        self.logger = get_logger("scheduler")

    async def run(self, urls: Iterable[str]) -> List[ExportResult]:
        """
        Export every URL and wait for all workers to finish.

        Args:
            urls: Pages to export

        Returns:
            One ExportResult per URL, in completion order
        """
        jobs: Deque[str] = deque(urls)
        results: List[ExportResult] = []
        total = len(jobs)

        self.logger.info(f"Exporting {total} pages with {self.concurrency} workers")

        workers = [
            self._worker(worker_id, jobs, results, total)
            for worker_id in range(1, self.concurrency + 1)
        ]
        await asyncio.gather(*workers)

        return results

    async def _worker(
        self,
        worker_id: int,
        jobs: Deque[str],
        results: List[ExportResult],
        total: int
    ) -> None:
        while jobs:
            url = jobs.popleft()
            self.logger.debug(f"[worker {worker_id}] claimed {url} ({total - len(jobs)}/{total})")

            results.append(await self.exporter.export(url))

            if self.pause_ms:
                await asyncio.sleep(self.pause_ms / 1000)

        self.logger.debug(f"[worker {worker_id}] done")

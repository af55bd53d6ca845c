"""
Crawler module for the docs exporter.

Contains components for link discovery, page rendering, PDF export, and scheduling.
"""

from .crawler import LinkCrawler
from .frontier import Frontier
from .extractor import LinkExtractor
from .renderer import PageRenderer, RenderError, WaitOutcome
from .exporter import PdfExporter, ExportResult, should_retry
from .scheduler import ExportScheduler
from .pipeline import ExportPipeline, RunSummary

__all__ = [
    "LinkCrawler",
    "Frontier",
    "LinkExtractor",
    "PageRenderer",
    "RenderError",
    "WaitOutcome",
    "PdfExporter",
    "ExportResult",
    "should_retry",
    "ExportScheduler",
    "ExportPipeline",
    "RunSummary",
]

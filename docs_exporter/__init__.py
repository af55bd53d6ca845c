"""
Docs Exporter - crawl a documentation site and print every page to PDF.

This package discovers the pages under a URL path scope with a headless
browser and renders each one to a cleaned-up, paginated PDF.
"""

__version__ = "1.0.0"

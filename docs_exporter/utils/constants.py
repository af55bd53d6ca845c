"""
Shared constants for the docs exporter.

Contains defaults and the fixed browser, print and PDF settings used across modules.
"""

# Default documentation root and the path prefix that defines the export scope
DEFAULT_START_URL = "https://knowledgecenter.docuware.com/docs/"
DEFAULT_SCOPE_PREFIX = "/docs/"

# Extra entry points into the larger sections of the default site
DEFAULT_SEED_PATHS = (
    "/docs/get-started",
    "/docs/mail-services",
    "/docs/white-paper-integration",
)

# Export workers and the pause each worker takes between pages
DEFAULT_CONCURRENCY = 3
DEFAULT_PAUSE_MS = 800

# Output root for PDFs and the discovered URL cache
DEFAULT_OUTPUT_DIR = "./pdf-out"
DEFAULT_CACHE_FILE = "./urls.json"

# Playwright timeouts in milliseconds
NAV_TIMEOUT = 60_000
IDLE_TIMEOUT = 30_000
SELECTOR_TIMEOUT = 20_000

# Export attempts per page and the delay between them in seconds
MAX_RETRIES = 3
RETRY_BACKOFF = 1.0

# Browser context settings
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/126.0.0.0 Safari/537.36"
)
DEFAULT_VIEWPORT = {"width": 1366, "height": 768}
DEFAULT_LOCALE = "en-US"

# Marker for "primary content has rendered"
CONTENT_SELECTOR = "main, article, [data-docs]"

# Name used when a page title cannot be read
DEFAULT_PAGE_TITLE = "docs-article"

# Sanitized file name limits
MAX_FILENAME_LENGTH = 180
DEFAULT_FILENAME = "page"

# Hides site chrome and widens the content column for printing
PRINT_CSS = """
header, nav, .sidebar, .toc, .footer,
[class*="Header"], [class*="Nav"], [class*="Sidebar"], [class*="Footer"] { display:none !important; }
main, article, [data-docs], [class*="Content"] { width:100% !important; max-width:100% !important; }
body { margin:0 !important; }
"""

PDF_FORMAT = "A4"
PDF_MARGIN = {"top": "14mm", "right": "12mm", "bottom": "16mm", "left": "12mm"}

# {path} is filled with the HTML-escaped URL path of the page
PDF_HEADER_TEMPLATE = (
    '<div style="font-size:9px;width:100%;text-align:right;padding-right:8px;color:#666;">'
    "{path}</div>"
)
PDF_FOOTER_TEMPLATE = (
    '<div style="font-size:9px;width:100%;padding:0 8px;color:#666;'
    'display:flex;justify-content:space-between;">'
    '<span class="date"></span>'
    '<span>Page <span class="pageNumber"></span>/<span class="totalPages"></span></span>'
    "</div>"
)

"""
Link extractor for rendered documentation pages.

Uses BeautifulSoup to pull anchor targets out of the page HTML.
"""

from typing import List

from bs4 import BeautifulSoup, FeatureNotFound

from ..utils.log import get_logger


class LinkExtractor:
    """
    Extracts raw anchor href values from HTML.

    Resolution and scope filtering are left to the caller.
    """

    # Link targets that never point at another page
    SKIPPED_PREFIXES = ('javascript:', 'mailto:', 'tel:', 'data:', '#')

    def __init__(self):
        self.logger = get_logger("extractor")

    def extract_hrefs(self, html: str) -> List[str]:
        """
        Return every non-empty anchor href in document order.

        Args:
            html: Rendered page HTML

        Returns:
            List of href attribute values as written in the page
        """
        try:
            soup = BeautifulSoup(html, 'lxml')
        except FeatureNotFound:
            # Fallback to html.parser if lxml is not installed
            soup = BeautifulSoup(html, 'html.parser')

        hrefs = []
        for anchor in soup.find_all('a', href=True):
            href = anchor.get('href', '').strip()

            if not href or href.lower().startswith(self.SKIPPED_PREFIXES):
                continue

            hrefs.append(href)

        self.logger.debug(f"Extracted {len(hrefs)} links")
        return hrefs

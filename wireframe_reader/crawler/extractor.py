"""
Link extractor for parsing HTML and collecting link candidates.

Uses BeautifulSoup for HTML parsing to find anchors and image sources.
"""

from dataclasses import dataclass
from typing import List, Optional, Set

from bs4 import BeautifulSoup, FeatureNotFound, Tag

from ..utils.constants import DEFAULT_ROOT_URL, DESCRIPTION_MAX_LENGTH
from ..utils.log import get_logger
from ..utils.urls import extract_file_name, resolve_url


class ParseError(Exception):
    """Raised when a page body cannot be parsed as HTML."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


@dataclass(frozen=True)
class LinkCandidate:
    """A resolved link or image source found on a page."""

    url: str
    name: str = ""
    description: str = ""

    # False for image sources, which can only be assets
    navigable: bool = True

    # Element matched one of the pagination selectors
    pagination_hint: bool = False


class LinkExtractor:
    """
    Extracts link candidates from HTML content.

    Finds anchors and images, and flags anchors that look like
    pagination controls.
    """

    # Skipped before resolution
    SKIPPED_PREFIXES = ('javascript:', 'mailto:', 'tel:', '#', 'data:')

    PAGINATION_SELECTORS = [
        'a[href*="page="]',
        'a[href*="p="]',
        'a[href*="offset="]',
        '.pagination a',
        '.pager a',
        '.page-nav a',
        'a:-soup-contains("Suivant")',
        'a:-soup-contains("Précédent")',
        'a:-soup-contains("Next")',
        'a:-soup-contains("Previous")',
        'a[href*="&page"]',
        'a[href*="?page"]',
    ]

    def __init__(
        self,
        root_url: str = DEFAULT_ROOT_URL,
        description_length: int = DESCRIPTION_MAX_LENGTH
    ):
        """
        Initialize the link extractor.

        Args:
            root_url: Crawl root, used for root-relative links
            description_length: Maximum length of context descriptions
        """
        self.root_url = root_url
        self.description_length = description_length
        self.logger = get_logger("extractor")

    def extract(self, html: str, page_url: str) -> List[LinkCandidate]:
        """
        Extract all link candidates from HTML content.

        Args:
            html: HTML content to parse
            page_url: URL of the page (for resolving relative URLs)

        Returns:
            Anchors first, then image sources, in document order

        Raises:
            ParseError: If the document cannot be parsed
        """
        soup = self._parse(html, page_url)

        candidates = self._extract_anchors(soup, page_url)
        candidates.extend(self._extract_images(soup, page_url))

        self.logger.debug(f"Extracted {len(candidates)} candidates from {page_url}")
        return candidates

    def _parse(self, html: str, page_url: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, 'lxml')
        except FeatureNotFound:
            # Fallback to html.parser if lxml is unavailable
            pass
        except Exception as e:
            raise ParseError(page_url, f"Cannot parse HTML: {e}") from e

        try:
            return BeautifulSoup(html, 'html.parser')
        except Exception as e:
            raise ParseError(page_url, f"Cannot parse HTML: {e}") from e

    def _pagination_elements(self, soup: BeautifulSoup) -> Set[int]:
        """Get the ids of anchors matching any pagination selector."""
        hinted: Set[int] = set()
        for selector in self.PAGINATION_SELECTORS:
            for element in soup.select(selector):
                hinted.add(id(element))
        return hinted

    def _extract_anchors(self, soup: BeautifulSoup, page_url: str) -> List[LinkCandidate]:
        """Extract anchor links from the page."""
        hinted = self._pagination_elements(soup)
        candidates = []

        for anchor in soup.find_all('a', href=True):
            href = anchor.get('href', '').strip()

            if not href or href.startswith(self.SKIPPED_PREFIXES):
                continue

            text = anchor.get_text(' ', strip=True)
            candidates.append(LinkCandidate(
                url=resolve_url(href, page_url, self.root_url),
                name=text or extract_file_name(href),
                description=self._describe(anchor),
                navigable=True,
                pagination_hint=id(anchor) in hinted,
            ))

        return candidates

    def _extract_images(self, soup: BeautifulSoup, page_url: str) -> List[LinkCandidate]:
        """Extract image sources, including lazy-loaded data-src."""
        candidates = []

        for img in soup.find_all('img'):
            src = (img.get('src') or img.get('data-src') or '').strip()

            if not src or src.startswith('data:'):
                continue

            alt = (img.get('alt') or '').strip()
            candidates.append(LinkCandidate(
                url=resolve_url(src, page_url, self.root_url),
                name=alt or extract_file_name(src),
                description=self._describe(img),
                navigable=False,
            ))

        return candidates

    def _describe(self, element: Tag) -> str:
        """Take context from the parent, or the grandparent if the parent is empty."""
        parent: Optional[Tag] = element.parent
        for ancestor in (parent, parent.parent if parent is not None else None):
            if ancestor is None:
                continue
            text = ' '.join(ancestor.get_text(' ').split())
            if text:
                return text[:self.description_length]
        return ''

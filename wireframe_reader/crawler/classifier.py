"""
Link classifier for deciding what to do with every discovered URL.

A resolved link is either an asset to record, a page to crawl, a
pagination link to crawl, or something to ignore. The decision is made
by an ordered list of rules; the first rule that matches wins.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .extractor import LinkCandidate
from .inventory import AssetKind
from ..utils.urls import get_url_path, is_same_domain


class LinkKind(Enum):
    """Classification outcome for a link."""

    ASSET = "asset"
    FOLLOWABLE_PAGE = "followable_page"
    PAGINATION = "pagination"
    IGNORE = "ignore"


@dataclass
class ClassifierRules:
    """Rule tables used by the classifier. Every table can be overridden."""

    image_extensions: Tuple[str, ...] = ('.png', '.jpg', '.jpeg', '.gif', '.svg')
    document_extensions: Tuple[str, ...] = ('.pdf',)

    # Matched against the file name only
    asset_keywords: Tuple[str, ...] = (
        'wireframe', 'mockup', 'design', 'ui', 'ux', 'screen', 'pog'
    )

    directory_segments: Tuple[str, ...] = ('/wareframes/', '/pog_up_wareframes/')
    page_extensions: Tuple[str, ...] = ('.html', '.htm', '.php', '.asp', '.aspx', '.jsp')

    # Never crawled, even when a directory rule would match
    direct_file_extensions: Tuple[str, ...] = (
        '.png', '.jpg', '.jpeg', '.gif', '.svg', '.pdf',
        '.zip', '.rar', '.doc', '.docx', '.txt'
    )

    pagination_patterns: Tuple[str, ...] = (
        r'page=\d+',
        r'p=\d+',
        r'offset=\d+',
        r'/page/\d+',
        r'/p/\d+',
    )

    @property
    def asset_extensions(self) -> Tuple[str, ...]:
        return self.image_extensions + self.document_extensions


Rule = Callable[[LinkCandidate, str], bool]


class LinkClassifier:
    """
    Classifies resolved links found on a page of the crawl domain.

    Every candidate gets exactly one LinkKind.
    """

    def __init__(self, domain: str, rules: Optional[ClassifierRules] = None):
        """
        Initialize the classifier.

        Args:
            domain: Crawl domain; links elsewhere are ignored
            rules: Rule tables (defaults to ClassifierRules())
        """
        self.domain = domain
        self.rules = rules or ClassifierRules()
        self._pagination_res: List[re.Pattern] = [
            re.compile(pattern) for pattern in self.rules.pagination_patterns
        ]

        self._pipeline: List[Tuple[Rule, LinkKind]] = [
            (lambda c, page: not c.url.startswith(('http://', 'https://')), LinkKind.IGNORE),
            (lambda c, page: not is_same_domain(c.url, self.domain), LinkKind.IGNORE),
            (lambda c, page: self.is_asset(c.url), LinkKind.ASSET),
            (lambda c, page: not c.navigable, LinkKind.IGNORE),
            (lambda c, page: c.pagination_hint and self.is_pagination(c.url, page), LinkKind.PAGINATION),
            (lambda c, page: self.is_followable(c.url), LinkKind.FOLLOWABLE_PAGE),
        ]

    def classify(self, candidate: LinkCandidate, page_url: str) -> LinkKind:
        """
        Classify a link candidate.

        Args:
            candidate: Link found on the page, already resolved
            page_url: URL of the page the link was found on

        Returns:
            The LinkKind of the first matching rule, IGNORE if none match
        """
        for predicate, kind in self._pipeline:
            if predicate(candidate, page_url):
                return kind
        return LinkKind.IGNORE

    def is_asset(self, url: str) -> bool:
        """
        Check if a URL looks like a wireframe asset.

        Either an asset extension in the path or a keyword in the file
        name is enough.
        """
        path = get_url_path(url).lower()

        if any(ext in path for ext in self.rules.asset_extensions):
            return True

        file_name = path.rsplit('/', 1)[-1]
        if not file_name or any(ext in file_name for ext in self.rules.page_extensions):
            return False

        return any(keyword in file_name for keyword in self.rules.asset_keywords)

    def is_pagination(self, url: str, page_url: str) -> bool:
        """Check the URL shape of a link that carries a pagination hint."""
        if not is_same_domain(url, self.domain):
            return False

        if url == page_url:
            return False

        return any(pattern.search(url) for pattern in self._pagination_res)

    def is_followable(self, url: str) -> bool:
        """Check if a same-domain URL points to a directory or web page."""
        if not is_same_domain(url, self.domain):
            return False

        path = get_url_path(url).lower() or '/'

        if any(ext in path for ext in self.rules.direct_file_extensions):
            return False

        return self._is_directory(path) or self._is_web_page(path)

    def _is_directory(self, path: str) -> bool:
        return (
            path.endswith('/')
            or any(segment in path for segment in self.rules.directory_segments)
            or ('.' not in path and '/' in path)
        )

    def _is_web_page(self, path: str) -> bool:
        return any(ext in path for ext in self.rules.page_extensions)

    def asset_kind(self, url: str) -> AssetKind:
        """
        Determine the asset kind from the URL extension.

        Args:
            url: Asset URL

        Returns:
            IMAGE, DOCUMENT, or UNKNOWN for keyword-only matches
        """
        path = get_url_path(url).lower()

        if any(ext in path for ext in self.rules.image_extensions):
            return AssetKind.IMAGE

        if any(ext in path for ext in self.rules.document_extensions):
            return AssetKind.DOCUMENT

        return AssetKind.UNKNOWN

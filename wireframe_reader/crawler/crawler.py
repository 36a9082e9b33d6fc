"""
Main wireframe crawler module.

Walks every same-domain page reachable from the root URL, classifies the
links found on each page, and collects the wireframe assets.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .classifier import LinkClassifier, LinkKind
from .extractor import LinkCandidate, LinkExtractor, ParseError
from .fetcher import PageFetcher, TransportError
from .inventory import AssetInventory, AssetKind, AssetRecord, VisitedSet
from .rate_limiter import RateLimiter
from ..utils.constants import (
    DEFAULT_CRAWL_DELAY,
    DEFAULT_ROOT_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
)
from ..utils.log import get_logger, print_info, print_success
from ..utils.urls import canonical_url, get_domain, is_same_domain


@dataclass
class CrawlStats:
    """Counters updated while crawling."""

    pages_visited: int = 0
    pages_failed: int = 0
    assets_found: int = 0
    links_by_kind: Dict[str, int] = field(default_factory=dict)

    def count_link(self, kind: LinkKind) -> None:
        self.links_by_kind[kind.value] = self.links_by_kind.get(kind.value, 0) + 1


@dataclass
class CrawlResult:
    """Results of the crawling operation."""

    root_url: str
    domain: str
    assets: List[AssetRecord] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    errors: List[Dict] = field(default_factory=list)
    sitemap: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def pages_visited(self) -> int:
        return self.stats.pages_visited

    def count_by_kind(self) -> Dict[AssetKind, int]:
        counts: Dict[AssetKind, int] = {}
        for record in self.assets:
            counts[record.kind] = counts.get(record.kind, 0) + 1
        return counts


class WireframeCrawler:
    """
    Crawl engine for one run.

    Owns the visited set, the asset inventory and the statistics of the
    run. Pages are taken from a LIFO work queue, so with a single worker
    the traversal is depth-first.
    """

    def __init__(
        self,
        root_url: str = DEFAULT_ROOT_URL,
        domain: Optional[str] = None,
        delay: float = DEFAULT_CRAWL_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        workers: int = DEFAULT_WORKERS,
        fetcher=None,
        classifier: Optional[LinkClassifier] = None,
        extractor: Optional[LinkExtractor] = None
    ):
        """
        Initialize the crawler.

        Args:
            root_url: Page the crawl starts from
            domain: Crawl domain (defaults to the host of root_url)
            delay: Delay between requests in seconds
            timeout: Request timeout in seconds
            workers: Number of concurrent crawl workers
            fetcher: Object with an async fetch(url) method
                     (defaults to a PageFetcher owned by the crawler)
            classifier: Link classifier (defaults to one for the domain)
            extractor: Link extractor (defaults to one for root_url)
        """
        self.root_url = canonical_url(root_url.strip())
        self.domain = (domain or get_domain(self.root_url)).lower()
        self.delay = delay
        self.timeout = timeout
        self.workers = max(1, workers)

        self.logger = get_logger("crawler")

        self.classifier = classifier or LinkClassifier(self.domain)
        self.extractor = extractor or LinkExtractor(self.root_url)
        self.rate_limiter = RateLimiter(delay)

        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None

        # Run state
        self.visited = VisitedSet()
        self.inventory = AssetInventory()
        self.stats = CrawlStats()
        self._errors: List[Dict] = []

    async def explore_all_pages(self) -> List[AssetRecord]:
        """
        Crawl the whole site and return the asset inventory.

        Returns:
            Asset records in discovery order
        """
        result = await self.crawl()
        return result.assets

    async def crawl(self) -> CrawlResult:
        """
        Start the crawling process.

        Returns:
            CrawlResult with the inventory and statistics
        """
        start_time = time.time()

        print_info(f"Exploring {self.root_url} (domain: {self.domain})")

        if self._fetcher is None:
            self._fetcher = PageFetcher(timeout=self.timeout, domain=self.domain)

        queue: asyncio.LifoQueue = asyncio.LifoQueue()
        queue.put_nowait(self.root_url)

        try:
            workers = [
                asyncio.create_task(self._worker(queue))
                for _ in range(self.workers)
            ]
            try:
                await queue.join()
            finally:
                for worker in workers:
                    worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)
        finally:
            if self._owns_fetcher:
                await self._fetcher.close()
                self._fetcher = None

        duration = time.time() - start_time

        result = CrawlResult(
            root_url=self.root_url,
            domain=self.domain,
            assets=self.inventory.records,
            stats=self.stats,
            errors=list(self._errors),
            sitemap=list(self.visited),
            duration_seconds=duration
        )

        print_success(
            f"Exploration complete: {self.stats.pages_visited} pages, "
            f"{len(result.assets)} wireframes in {duration:.1f}s"
        )

        return result

    async def _worker(self, queue: asyncio.LifoQueue) -> None:
        """Take URLs from the queue until cancelled."""
        while True:
            url = await queue.get()
            try:
                await self._visit(url, queue)
            except Exception as e:
                self.logger.error(f"Error crawling {url}: {e}")
                self._record_error(url, str(e), 'crawl_error')
            finally:
                queue.task_done()

    async def _visit(self, url: str, queue: asyncio.LifoQueue) -> None:
        """
        Visit a single page.

        Args:
            url: Canonical URL taken from the queue
            queue: Work queue for newly discovered links
        """
        if not is_same_domain(url, self.domain):
            self.logger.debug(f"Skipping external URL: {url}")
            return

        if not self.visited.mark(url):
            return

        self.stats.pages_visited += 1
        self.logger.info(f"[{self.stats.pages_visited}] Exploring: {url}")

        await self.rate_limiter.acquire()

        try:
            response = await self._fetcher.fetch(url)
        except TransportError as e:
            self.stats.pages_failed += 1
            self.logger.warning(f"Failed to fetch {url}: {e}")
            self._record_error(url, str(e), 'fetch_error')
            return

        page_url = canonical_url(response.url or url)
        if page_url != url:
            if not is_same_domain(page_url, self.domain):
                self.stats.pages_failed += 1
                self.logger.warning(f"Redirected off-domain: {url} -> {page_url}")
                self._record_error(url, f"Redirected off-domain to {page_url}", 'fetch_error')
                return
            # Redirect to a page already explored through another link
            if not self.visited.mark(page_url):
                return

        try:
            candidates = self.extractor.extract(response.body, page_url)
        except ParseError as e:
            self.logger.warning(f"Failed to parse {url}: {e}")
            self._record_error(url, str(e), 'parse_error')
            candidates = []

        links = self._process_candidates(candidates, page_url)

        # Reversed so the first link found is the next one explored
        for link in reversed(links):
            if link not in self.visited:
                queue.put_nowait(link)

    def _process_candidates(self, candidates: List[LinkCandidate], page_url: str) -> List[str]:
        """
        Classify the candidates of one page and record its assets.

        Args:
            candidates: Links and image sources found on the page
            page_url: URL of the page

        Returns:
            Deduplicated pages and pagination links to explore, in discovery order
        """
        links: List[str] = []
        seen = set()
        page_assets = 0

        for candidate in candidates:
            kind = self.classifier.classify(candidate, page_url)
            self.stats.count_link(kind)

            if kind is LinkKind.ASSET:
                record = AssetRecord(
                    name=candidate.name,
                    url=candidate.url,
                    kind=self.classifier.asset_kind(candidate.url),
                    description=candidate.description
                )
                if self.inventory.add(record):
                    page_assets += 1
                    self.stats.assets_found += 1
                    self.logger.info(f"  Found {record.kind.value}: {record.name} ({record.url})")

            elif kind in (LinkKind.FOLLOWABLE_PAGE, LinkKind.PAGINATION):
                link = canonical_url(candidate.url)
                if link not in seen:
                    seen.add(link)
                    links.append(link)

        self.logger.info(f"  {page_assets} wireframes found on this page, {len(links)} links to explore")
        return links

    def _record_error(self, url: str, error: str, error_type: str) -> None:
        self._errors.append({
            'url': url,
            'error': error,
            'type': error_type
        })

    @property
    def errors(self) -> List[Dict]:
        """Get the errors recorded so far."""
        return list(self._errors)

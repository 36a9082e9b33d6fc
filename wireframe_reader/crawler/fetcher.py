"""
Page fetcher for downloading HTML pages.

Uses aiohttp with a shared session and a bounded per-request timeout.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientError, ClientTimeout

from ..utils.constants import DEFAULT_HEADERS, DEFAULT_TIMEOUT, MAX_REDIRECTS
from ..utils.log import get_logger
from ..utils.urls import is_same_domain

REDIRECT_STATUSES = (301, 302, 303, 307, 308)


class TransportError(Exception):
    """Raised when a page cannot be fetched (network, timeout, or HTTP status)."""

    def __init__(self, url: str, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


@dataclass
class FetchResult:
    """A successfully fetched page."""

    url: str  # final URL after redirects
    status: int
    body: str


class PageFetcher:
    """
    Fetches pages over HTTP.

    Usable as an async context manager; the session is opened lazily
    on first use otherwise.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        domain: Optional[str] = None,
        max_redirects: int = MAX_REDIRECTS
    ):
        """
        Initialize the page fetcher.

        Args:
            timeout: Request timeout in seconds
            headers: Request headers (defaults to browser-like headers)
            domain: Domain redirects must stay on (any host if None)
            max_redirects: Redirect hops followed per fetch
        """
        self.timeout = ClientTimeout(total=timeout)
        self.headers = dict(headers or DEFAULT_HEADERS)
        self.domain = domain
        self.max_redirects = max_redirects
        self.logger = get_logger("fetcher")

        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Open the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers=self.headers
            )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "PageFetcher":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch a page, following redirects.

        When the fetcher has a domain, a redirect to another host is
        refused before it is requested.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResult with the final URL and the decoded body

        Raises:
            TransportError: On network errors, timeouts, non-2xx status,
                off-domain or too many redirects
        """
        await self.start()

        current = url
        try:
            for _ in range(self.max_redirects + 1):
                async with self._session.get(current, allow_redirects=False) as response:
                    if response.status in REDIRECT_STATUSES:
                        current = self._next_hop(url, str(response.url), response)
                        continue

                    if not 200 <= response.status < 300:
                        raise TransportError(
                            url, f"HTTP {response.status}", status=response.status
                        )

                    body = await response.text(errors='replace')
                    final_url = str(response.url)
                    self.logger.debug(f"Fetched {final_url} ({response.status}, {len(body)} chars)")
                    return FetchResult(url=final_url, status=response.status, body=body)

        except asyncio.TimeoutError as e:
            raise TransportError(url, "Timed out") from e
        except ClientError as e:
            raise TransportError(url, f"Client error: {e}") from e

        raise TransportError(url, "Too many redirects")

    def _next_hop(self, url: str, current: str, response: aiohttp.ClientResponse) -> str:
        location = response.headers.get('Location')
        if not location:
            raise TransportError(
                url, f"HTTP {response.status} without Location", status=response.status
            )

        target = urljoin(current, location)
        if self.domain and not is_same_domain(target, self.domain):
            raise TransportError(
                url, f"Redirected off-domain to {target}", status=response.status
            )

        self.logger.debug(f"Redirect {current} -> {target}")
        return target

"""
Shared pytest fixtures for wireframe reader tests.

Provides:
- An in-memory fetcher serving a dict of pages
- Sample HTML pages for a small wireframe site
- A local aiohttp server factory
"""

import asyncio
from typing import Dict, List, Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from wireframe_reader.crawler import FetchResult, TransportError


ROOT_URL = "https://gytx.dev/wareframes/pog_up_wareframes/"


class FakeFetcher:
    """Serves pages from a dict and records every fetch."""

    def __init__(
        self,
        pages: Dict[str, str],
        failures: Optional[Dict[str, Exception]] = None,
        redirects: Optional[Dict[str, str]] = None
    ):
        self.pages = pages
        self.failures = failures or {}
        self.redirects = redirects or {}
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        await asyncio.sleep(0)

        if url in self.failures:
            raise self.failures[url]
        final_url = self.redirects.get(url, url)
        if final_url not in self.pages:
            raise TransportError(url, "HTTP 404", status=404)

        return FetchResult(url=final_url, status=200, body=self.pages[final_url])


@pytest.fixture
def root_url() -> str:
    return ROOT_URL


@pytest.fixture
def site_pages() -> Dict[str, str]:
    """
    A small cyclic site.

    root -> page2/, page3/, ?page=2 (pagination), external links
    page2/ -> page3/, root
    page3/ -> page2/
    ?page=2 -> itself
    """
    return {
        ROOT_URL: """
            <html><body>
              <div class="card"><a href="/foo.png">wireframe</a></div>
              <a href="page2/">Page 2</a>
              <a href="page3/">Page 3</a>
              <a href="https://otherhost.com/image.png">external image</a>
              <a href="https://otherhost.com/list/">external page</a>
              <a href="?page=2">Suivant</a>
            </body></html>
        """,
        ROOT_URL + "page2/": """
            <html><body>
              <a href="../page3/">Page 3</a>
              <a href="../">Home</a>
              <a href="/foo.png">wireframe again</a>
              <p>Login <img src="shot-login.png" alt="Login"></p>
            </body></html>
        """,
        ROOT_URL + "page3/": """
            <html><body>
              <a href="/wareframes/pog_up_wareframes/page2/">Back</a>
              <a href="doc.pdf">Spec</a>
            </body></html>
        """,
        ROOT_URL + "?page=2": """
            <html><body>
              <a href="mockups/final.jpg">Final</a>
              <a href="?page=2">Suivant</a>
            </body></html>
        """,
    }


@pytest.fixture
def make_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture
def make_server():
    """
    Factory starting a local aiohttp server from a list of routes.

    Servers are closed by the test through ``await server.close()``.
    """
    async def _make(routes, host: str = "127.0.0.1") -> TestServer:
        app = web.Application()
        app.router.add_routes(routes)
        server = TestServer(app, host=host)
        await server.start_server()
        return server

    return _make

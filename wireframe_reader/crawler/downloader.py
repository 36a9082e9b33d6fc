"""
Asset downloader for saving discovered wireframes.

Uses aiohttp for parallel asynchronous downloads.
"""

import asyncio
from typing import Dict, Optional, Sequence, Set

import aiohttp
from aiohttp import ClientError, ClientTimeout

from .inventory import AssetRecord
from ..utils.constants import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..utils.log import get_logger
from ..utils.urls import ensure_dir, get_asset_path, unique_path


class AssetDownloader:
    """
    Downloads wireframe assets asynchronously.

    Downloads run unordered with bounded concurrency; a failed download
    never stops the others.
    """

    def __init__(
        self,
        output_dir: str,
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the asset downloader.

        Args:
            output_dir: Directory where assets are saved
            timeout: Request timeout in seconds
            concurrency: Maximum concurrent downloads
            user_agent: User agent string for requests
        """
        self.output_dir = output_dir
        self.timeout = ClientTimeout(total=timeout)
        self.concurrency = concurrency
        self.user_agent = user_agent
        self.logger = get_logger("downloader")

        # Track downloaded assets
        self._downloaded: Dict[str, str] = {}  # URL -> local path
        self._failed: Set[str] = set()
        self._reserved: Set[str] = set()

    @property
    def downloaded_assets(self) -> Dict[str, str]:
        """Get mapping of URL to local path for downloaded assets."""
        return self._downloaded.copy()

    @property
    def failed_assets(self) -> Set[str]:
        """Get set of URLs that failed to download."""
        return self._failed.copy()

    async def download_assets(self, records: Sequence[AssetRecord]) -> Dict[str, str]:
        """
        Download multiple assets in parallel.

        Args:
            records: Asset records to download

        Returns:
            Dictionary mapping URLs to local file paths
        """
        if not records:
            return {}

        ensure_dir(self.output_dir)
        self.logger.info(f"Downloading {len(records)} wireframes...")

        semaphore = asyncio.Semaphore(self.concurrency)

        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent}
        ) as session:
            tasks = [
                self._download_asset(session, semaphore, record)
                for record in records
            ]
            results = await asyncio.gather(*tasks, return_exceptions=True)

            for record, result in zip(records, results):
                if isinstance(result, Exception):
                    self.logger.debug(f"Download failed for {record.url}: {result}")
                    self._failed.add(record.url)

        self.logger.info(
            f"Downloaded {len(self._downloaded)} wireframes, "
            f"{len(self._failed)} failed"
        )

        return self._downloaded

    def _local_path(self, record: AssetRecord) -> str:
        """Pick a path for the record that no other download uses."""
        path = get_asset_path(record.url, record.name, self.output_dir)
        if path in self._reserved:
            path = unique_path(path, record.url)
        self._reserved.add(path)
        return path

    async def _download_asset(
        self,
        session: aiohttp.ClientSession,
        semaphore: asyncio.Semaphore,
        record: AssetRecord
    ) -> Optional[str]:
        """
        Download a single asset.

        Args:
            session: aiohttp session
            semaphore: Concurrency limit shared by the batch
            record: Asset to download

        Returns:
            Local file path if successful, None otherwise
        """
        url = record.url

        # Skip if already downloaded
        if url in self._downloaded:
            return self._downloaded[url]

        local_path = self._local_path(record)

        async with semaphore:
            self.logger.info(f"Downloading: {record.name}")
            try:
                async with session.get(url, allow_redirects=True) as response:
                    if response.status != 200:
                        self.logger.warning(f"HTTP {response.status} for wireframe: {url}")
                        self._failed.add(url)
                        return None

                    content = await response.read()

                with open(local_path, 'wb') as f:
                    f.write(content)

                self._downloaded[url] = local_path
                self.logger.debug(f"Saved: {url} -> {local_path}")
                return local_path

            except ClientError as e:
                self.logger.warning(f"Client error downloading {url}: {e}")
                self._failed.add(url)
                return None
            except asyncio.TimeoutError:
                self.logger.warning(f"Timeout downloading {url}")
                self._failed.add(url)
                return None
            except OSError as e:
                self.logger.warning(f"OS error saving {url}: {e}")
                self._failed.add(url)
                return None

    def get_local_path(self, url: str) -> Optional[str]:
        """
        Get the local path for a downloaded asset.

        Args:
            url: Asset URL

        Returns:
            Local file path if downloaded, None otherwise
        """
        return self._downloaded.get(url)

    def reset(self) -> None:
        """Reset the downloader state."""
        self._downloaded.clear()
        self._failed.clear()
        self._reserved.clear()

"""
Crawler module for wireframe discovery.

Contains components for fetching, extracting, classifying, and downloading.
"""

from .classifier import ClassifierRules, LinkClassifier, LinkKind
from .crawler import CrawlResult, CrawlStats, WireframeCrawler
from .downloader import AssetDownloader
from .extractor import LinkCandidate, LinkExtractor, ParseError
from .fetcher import FetchResult, PageFetcher, TransportError
from .inventory import AssetInventory, AssetKind, AssetRecord, VisitedSet
from .rate_limiter import RateLimiter

__all__ = [
    "WireframeCrawler",
    "CrawlResult",
    "CrawlStats",
    "LinkClassifier",
    "ClassifierRules",
    "LinkKind",
    "LinkExtractor",
    "LinkCandidate",
    "ParseError",
    "PageFetcher",
    "FetchResult",
    "TransportError",
    "AssetInventory",
    "AssetRecord",
    "AssetKind",
    "VisitedSet",
    "AssetDownloader",
    "RateLimiter",
]

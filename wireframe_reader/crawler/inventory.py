"""
Crawl state containers.

Holds the asset records discovered during a crawl and the set of
pages already visited.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Set

from ..utils.urls import canonical_url


class AssetKind(Enum):
    """Type of a discovered asset, derived from its extension."""

    IMAGE = "image"
    DOCUMENT = "document"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AssetRecord:
    """A downloadable item believed to be a wireframe."""

    name: str
    url: str
    kind: AssetKind
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'name': self.name,
            'url': self.url,
            'type': self.kind.value,
            'description': self.description,
        }


class AssetInventory:
    """
    Append-only list of asset records, in discovery order.

    Records are deduplicated by URL; the first discovery wins.
    """

    def __init__(self):
        self._records: List[AssetRecord] = []
        self._urls: Set[str] = set()

    def add(self, record: AssetRecord) -> bool:
        """
        Add a record unless its URL is already known.

        Args:
            record: Asset record to add

        Returns:
            True if the record was added, False if it was a duplicate
        """
        key = canonical_url(record.url)
        if key in self._urls:
            return False
        self._urls.add(key)
        self._records.append(record)
        return True

    @property
    def records(self) -> List[AssetRecord]:
        """Get a copy of the records in discovery order."""
        return list(self._records)

    def count_by_kind(self) -> Dict[AssetKind, int]:
        """Count records per asset kind."""
        counts: Dict[AssetKind, int] = {}
        for record in self._records:
            counts[record.kind] = counts.get(record.kind, 0) + 1
        return counts

    def __contains__(self, url: str) -> bool:
        return canonical_url(url) in self._urls

    def __iter__(self) -> Iterator[AssetRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)


class VisitedSet:
    """
    Monotonic set of canonical page URLs already taken for fetching.

    A URL can be marked only once; nothing is ever removed during a run.
    """

    def __init__(self):
        self._urls: Set[str] = set()

    def mark(self, url: str) -> bool:
        """
        Check and mark a URL in one step.

        No await happens between the check and the insert, so concurrent
        workers on the same event loop cannot both claim a URL.

        Args:
            url: Absolute URL

        Returns:
            True if the URL was not visited before
        """
        key = canonical_url(url)
        if key in self._urls:
            return False
        self._urls.add(key)
        return True

    def __contains__(self, url: str) -> bool:
        return canonical_url(url) in self._urls

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._urls))

    def __len__(self) -> int:
        return len(self._urls)

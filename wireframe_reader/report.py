"""
Report generation and console display for crawl results.
"""

import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from .crawler import AssetRecord, CrawlResult
from .utils.constants import ERRORS_FILENAME, REPORT_FILENAME
from .utils.log import console, get_logger, print_success
from .utils.urls import ensure_dir


def build_report(result: CrawlResult, timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the report data for a crawl.

    Args:
        result: Finished crawl
        timestamp: Report time (defaults to now, UTC)

    Returns:
        JSON-serializable dictionary
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    return {
        'timestamp': timestamp.isoformat(),
        'source': result.root_url,
        'domain': result.domain,
        'pages_visited': result.pages_visited,
        'total_assets': len(result.assets),
        'assets': [record.to_dict() for record in result.assets],
    }


def generate_report(result: CrawlResult, output_dir: str) -> str:
    """
    Write the JSON report of discovered wireframes.

    Args:
        result: Finished crawl
        output_dir: Directory to write into

    Returns:
        Path of the report file
    """
    ensure_dir(output_dir)
    report_path = os.path.join(output_dir, REPORT_FILENAME)

    with open(report_path, 'w', encoding='utf-8') as f:
        json.dump(build_report(result), f, indent=2, ensure_ascii=False)

    get_logger("report").info(f"Generated report: {report_path}")
    return report_path


def generate_error_log(result: CrawlResult, output_dir: str) -> Optional[str]:
    """Write errors.json if there are errors."""
    if not result.errors:
        return None

    ensure_dir(output_dir)
    errors_path = os.path.join(output_dir, ERRORS_FILENAME)

    with open(errors_path, 'w', encoding='utf-8') as f:
        json.dump(result.errors, f, indent=2, ensure_ascii=False)

    get_logger("report").info(f"Generated error log: {errors_path}")
    return errors_path


def display_exploration_stats(result: CrawlResult) -> None:
    """
    Print the crawl summary.

    Args:
        result: Finished crawl
    """
    console.print("\n" + "=" * 60)
    print_success("EXPLORATION SUMMARY")
    console.print("=" * 60)
    console.print(f"  Pages visited:     {result.stats.pages_visited}")
    console.print(f"  Pages failed:      {result.stats.pages_failed}")
    console.print(f"  Wireframes found:  {len(result.assets)}")

    for kind, count in result.count_by_kind().items():
        console.print(f"    {kind.value}: {count}")

    console.print(f"  Errors:            {len(result.errors)}")
    console.print(f"  Duration:          {result.duration_seconds:.1f} seconds")
    console.print("=" * 60 + "\n")


def display_assets(records: Sequence[AssetRecord]) -> None:
    """Print the list of discovered wireframes."""
    console.print("\nWireframes found:", style="bold")
    console.print("=" * 60)

    for index, record in enumerate(records, start=1):
        console.print(f"{index}. {record.name} ({record.kind.value})", markup=False)
        console.print(f"   URL: {record.url}", markup=False, highlight=False)
        if record.description:
            console.print(f"   Description: {record.description[:80]}...", markup=False)
        console.print("")

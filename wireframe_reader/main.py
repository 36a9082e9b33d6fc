#!/usr/bin/env python3
"""
Wireframe Reader - crawls a wireframe listing site and saves its assets.

Usage:
    python -m wireframe_reader.main --url https://gytx.dev/wareframes/pog_up_wareframes/

Features:
    - Explores every same-domain page and pagination link from the root
    - Detects wireframe images and documents
    - Downloads them in parallel
    - Writes a JSON report
"""

import argparse
import asyncio
import logging
import os
import sys
from urllib.parse import urlparse

from wireframe_reader.crawler import AssetDownloader, WireframeCrawler
from wireframe_reader.report import (
    display_assets,
    display_exploration_stats,
    generate_error_log,
    generate_report,
)
from wireframe_reader.utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_CRAWL_DELAY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROOT_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
)
from wireframe_reader.utils.log import (
    print_error,
    print_info,
    print_status,
    print_success,
    print_warning,
    set_level,
    setup_logger,
)


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='wireframe-reader',
        description='Explore a wireframe site and download every wireframe found',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s --url https://gytx.dev/wareframes/pog_up_wareframes/ --output ./wireframes
    %(prog)s --url https://example.com/designs/ --no-download --delay 1.0
        """
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        default=DEFAULT_ROOT_URL,
        help=f'Root URL to explore (default: {DEFAULT_ROOT_URL})'
    )

    parser.add_argument(
        '--domain',
        type=str,
        default=None,
        help='Crawl domain (default: host of --url)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f'Output directory for downloads and report (default: {DEFAULT_OUTPUT_DIR})'
    )

    parser.add_argument(
        '--delay',
        type=float,
        default=DEFAULT_CRAWL_DELAY,
        help=f'Delay between requests in seconds (default: {DEFAULT_CRAWL_DELAY})'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f'Request timeout in seconds (default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--workers', '-w',
        type=int,
        default=DEFAULT_WORKERS,
        help=f'Concurrent crawl workers (default: {DEFAULT_WORKERS})'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f'Maximum concurrent downloads (default: {DEFAULT_CONCURRENCY})'
    )

    parser.add_argument(
        '--no-download',
        action='store_true',
        help='Only explore and report, do not download wireframes'
    )

    parser.add_argument(
        '--no-report',
        action='store_true',
        help='Do not write the JSON report or the error log'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    return parser.parse_args(argv)


def validate_url(url: str) -> str:
    """
    Validate and normalize the input URL.

    Args:
        url: URL string to validate

    Returns:
        Normalized URL string

    Raises:
        ValueError: If URL is invalid
    """
    url = url.strip()

    # Add protocol if missing
    if not url.startswith(('http://', 'https://')):
        url = 'https://' + url

    parsed = urlparse(url)

    if not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")

    return url


def print_banner() -> None:
    """Print the application banner."""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                     WIREFRAME READER                          ║
║          Wireframe discovery and download tool                ║
╚═══════════════════════════════════════════════════════════════╝
    """
    print_status(banner, "bold cyan")


async def main(argv=None) -> int:
    """
    Main entry point for the wireframe reader.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level)
    set_level(log_level)

    if not args.quiet:
        print_banner()

    try:
        url = validate_url(args.url)

        if not args.quiet:
            print_info(f"Root URL: {url}")
            print_info(f"Output: {args.output}")

        crawler = WireframeCrawler(
            root_url=url,
            domain=args.domain,
            delay=args.delay,
            timeout=args.timeout,
            workers=args.workers
        )

        # 1. Explore all pages
        result = await crawler.crawl()

        if not result.assets:
            print_warning("No wireframes found")
            if not args.no_report:
                generate_error_log(result, args.output)
            return 0

        # 2. Statistics and listing
        if not args.quiet:
            display_exploration_stats(result)
            display_assets(result.assets)

        # 3. Download
        if not args.no_download:
            downloader = AssetDownloader(
                output_dir=args.output,
                timeout=args.timeout,
                concurrency=args.concurrency
            )
            await downloader.download_assets(result.assets)

            print_success(f"Successful downloads: {len(downloader.downloaded_assets)}")
            if downloader.failed_assets:
                print_error(f"Failed downloads: {len(downloader.failed_assets)}")

        # 4. Report
        if not args.no_report:
            generate_report(result, args.output)
            generate_error_log(result, args.output)

        print_success(f"Files saved in: {os.path.abspath(args.output)}")

        return 0

    except KeyboardInterrupt:
        print_error("\nExploration interrupted by user")
        return 1
    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()

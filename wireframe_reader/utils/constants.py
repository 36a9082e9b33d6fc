"""
Shared constants for the wireframe reader.

Contains common configuration values used across multiple modules.
"""

# Root page of the wireframe listing crawled by default
DEFAULT_ROOT_URL = "https://gytx.dev/wareframes/pog_up_wareframes/"

# Default user agent string for all HTTP requests
# Used by both the page fetcher and asset downloader
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Browser-like headers sent with every page request
DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "fr-FR,fr;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Default request timeout in seconds
DEFAULT_TIMEOUT = 15

# Redirect hops followed per page fetch
MAX_REDIRECTS = 10

# Default concurrent downloads
DEFAULT_CONCURRENCY = 10

# Default crawl delay between requests in seconds
DEFAULT_CRAWL_DELAY = 0.5

# Default number of crawl workers (1 = sequential, depth-first)
DEFAULT_WORKERS = 1

# Where downloads and reports are written
DEFAULT_OUTPUT_DIR = "./wireframes-output"

REPORT_FILENAME = "wireframes-report.json"
ERRORS_FILENAME = "errors.json"

# Contextual descriptions are cut to this many characters
DESCRIPTION_MAX_LENGTH = 100

"""
URL and path utilities for the wireframe reader.

Provides reference resolution, domain checks, file naming, and directory management.
"""

import hashlib
import os
import re
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse, unquote

from .constants import DEFAULT_ROOT_URL


def get_origin(url: str) -> str:
    """
    Get the scheme and host part of a URL.

    Args:
        url: URL to extract the origin from

    Returns:
        Origin string (e.g., 'https://example.com')
    """
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_url(
    reference: str,
    base_url: Optional[str] = None,
    root_url: str = DEFAULT_ROOT_URL
) -> str:
    """
    Resolve a link reference into an absolute URL.

    Absolute references are returned unchanged, root-relative ones are
    joined with the origin of ``root_url`` and anything else is resolved
    against the page it was found on.

    Args:
        reference: href or src value as written in the page
        base_url: URL of the page being processed
        root_url: Configured crawl root, used as origin and fallback base

    Returns:
        Absolute URL string
    """
    reference = (reference or "").strip()
    base = base_url or root_url

    if reference.startswith("http"):
        return reference

    # Protocol-relative
    if reference.startswith("//"):
        scheme = urlparse(base).scheme or "https"
        return f"{scheme}:{reference}"

    if reference.startswith("/"):
        return f"{get_origin(root_url)}{reference}"

    return urljoin(base, reference)


def canonical_url(url: str) -> str:
    """
    Get the form of a URL used as the visited-set key.

    Args:
        url: Absolute URL

    Returns:
        URL without its fragment, with a lowercase host and at least
        a "/" path
    """
    parsed = urlparse(urldefrag(url)[0])
    if not parsed.netloc:
        return parsed.geturl()

    return parsed._replace(
        netloc=parsed.netloc.lower(),
        path=parsed.path or "/"
    ).geturl()


def get_domain(url: str) -> str:
    """
    Extract the host name from a URL.

    Args:
        url: URL to extract domain from

    Returns:
        Domain string (e.g., 'example.com')
    """
    parsed = urlparse(url)
    return (parsed.hostname or "").lower()


def is_same_domain(url: str, domain: str) -> bool:
    """
    Check if a URL is hosted on the crawl domain or one of its subdomains.

    Args:
        url: URL to check
        domain: Crawl domain (e.g., 'gytx.dev')

    Returns:
        True if same domain, False otherwise
    """
    host = get_domain(url)
    domain = domain.lower()

    # Handle www prefix variations
    if host.startswith("www."):
        host = host[4:]
    if domain.startswith("www."):
        domain = domain[4:]

    if not host or not domain:
        return False

    return host == domain or host.endswith("." + domain)


def get_url_path(url: str) -> str:
    """
    Get the path component of a URL.

    Args:
        url: URL to extract path from

    Returns:
        Path string
    """
    parsed = urlparse(url)
    return parsed.path


def extract_file_name(url: str, default_name: str = "wireframe") -> str:
    """
    Get the last path segment of a URL.

    Args:
        url: URL or reference
        default_name: Name returned when the URL ends with a slash

    Returns:
        File name string
    """
    path = urlparse(url).path if "://" in url else url.split("?")[0]
    name = unquote(path.split("/")[-1])
    return name or default_name


def sanitize_file_name(name: str) -> str:
    """
    Make a name safe to use as a file name.

    Args:
        name: Raw name (link text, alt text or file name)

    Returns:
        Lowercased name with unsafe characters and whitespace replaced
    """
    name = re.sub(r'[<>:"/\\|?*]', "_", name)
    name = re.sub(r"\s+", "_", name)
    return name.lower()


def get_asset_path(url: str, name: str, output_dir: str) -> str:
    """
    Generate a local path for a downloaded asset.

    The URL's extension is appended unless the name already ends with it.

    Args:
        url: Asset URL
        name: Display name of the asset
        output_dir: Base output directory

    Returns:
        Local file path for the asset
    """
    filename = sanitize_file_name(name) or "wireframe"
    _, url_ext = os.path.splitext(unquote(urlparse(url).path))
    url_ext = url_ext.lower()

    if url_ext and not filename.endswith(url_ext):
        filename += url_ext

    return os.path.join(output_dir, filename)


def unique_path(path: str, url: str) -> str:
    """
    Derive a collision-free variant of a path using a short URL hash.

    Args:
        path: Desired local path
        url: URL the file comes from

    Returns:
        Path with the hash inserted before the extension
    """
    url_hash = hashlib.sha256(url.encode()).hexdigest()[:8]
    name, ext = os.path.splitext(path)
    return f"{name}_{url_hash}{ext}"


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)

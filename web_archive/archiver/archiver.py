# === FILE: web_archive/archiver/archiver.py ===
"""Archive orchestration: fetch the page, discover its resources, download them.

Resource downloads run as one concurrent batch bounded by a semaphore. The
resource map is owned by :func:`download_resources` and filled only after the
batch completes, so there is a single writer. A resource that cannot be
downloaded is logged and left out of the map; only a failure to fetch the page
itself aborts the archive.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Sequence, assert_never

from aiohttp import ClientError

from web_archive.archiver.fetcher import Fetcher, FetchResponse
from web_archive.config import ArchiveOptions
from web_archive.errors import FetchError, ParseError, ResolveError
from web_archive.logger import logger
from web_archive.models import (
    CssResource,
    ImageResource,
    JavascriptResource,
    Resource,
    ResourceKind,
    ResourceMap,
    ResourceUrl,
)
from web_archive.page_archive import PageArchive
from web_archive.parser.html_parser import parse_resource_urls
from web_archive.parser.sniffer import mimetype_from_response
from web_archive.utils import is_http_url, normalize_base_url

__all__ = ("archive", "download_resources", "fetch_resource", "to_resource")


def to_resource(resource_url: ResourceUrl, response: FetchResponse) -> Resource:
    """Turn a successful response into the resource matching the URL's kind."""
    kind = resource_url.kind
    if kind is ResourceKind.IMAGE:
        # mimetype comes from the bytes, not the Content-Type header
        return ImageResource(response.body, mimetype_from_response(response.body, resource_url.url))
    if kind is ResourceKind.CSS:
        return CssResource(response.text())
    if kind is ResourceKind.JAVASCRIPT:
        return JavascriptResource(response.text())
    assert_never(kind)


async def fetch_resource(fetcher: Fetcher, resource_url: ResourceUrl) -> Optional[Resource]:
    """Download one resource; ``None`` means it is unavailable and gets skipped."""
    url = resource_url.url
    if not is_http_url(url):
        logger.debug("Skipping non-HTTP resource %s", url[:80])
        return None
    try:
        response = await fetcher.fetch(url)
    except (ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Resource %s unavailable: %s", url, str(exc) or type(exc).__name__)
        return None
    if not response.ok:
        logger.warning("Skipping %s: HTTP %d", url, response.status)
        return None
    return to_resource(resource_url, response)


async def download_resources(
    fetcher: Fetcher,
    resource_urls: Sequence[ResourceUrl],
    concurrency: int = 8,
) -> ResourceMap:
    """Fetch *resource_urls* concurrently and build the resource map."""
    semaphore = asyncio.Semaphore(concurrency)

    async def _bounded(resource_url: ResourceUrl) -> Optional[Resource]:
        async with semaphore:
            return await fetch_resource(fetcher, resource_url)

    results = await asyncio.gather(*(_bounded(r) for r in resource_urls))

    resource_map: ResourceMap = {}
    for resource_url, resource in zip(resource_urls, results):
        if resource is None:
            continue
        resource_map[resource_url.url] = resource
    return resource_map


async def _fetch_page(fetcher: Fetcher, url: str) -> FetchResponse:
    if not is_http_url(url):
        logger.error("Cannot fetch %s: only http and https are supported", url)
        raise FetchError(url, "unsupported scheme")
    try:
        page = await fetcher.fetch(url)
    except (ClientError, asyncio.TimeoutError) as exc:
        reason = str(exc) or type(exc).__name__
        logger.error("Fetching page %s failed: %s", url, reason)
        raise FetchError(url, reason) from exc
    if not page.ok:
        logger.warning("Page %s returned HTTP %d, archiving the body anyway", url, page.status)
    return page


async def archive(url: str, options: Optional[ArchiveOptions] = None) -> PageArchive:
    """Download the page at *url* together with its images, stylesheets and scripts.

    Raises :class:`ParseError` for an invalid URL and :class:`FetchError` when
    the page cannot be downloaded. Unavailable resources are skipped.
    """
    options = options or ArchiveOptions()
    try:
        base_url = normalize_base_url(url)
    except ResolveError as exc:
        logger.error("Invalid URL %r: %s", url, exc.reason)
        raise ParseError(f"Invalid URL {url!r}: {exc.reason}") from exc

    logger.info("Archiving %s", base_url)
    async with Fetcher(options) as fetcher:
        page = await _fetch_page(fetcher, base_url)
        content = page.text()
        resource_urls = parse_resource_urls(base_url, content)
        resource_map = await download_resources(fetcher, resource_urls, options.concurrency)

    logger.info(
        "Archived %s: %d of %d resources downloaded", base_url, len(resource_map), len(resource_urls)
    )
    return PageArchive(url=base_url, content=content, resource_map=resource_map)

"""
Screen scanner: map a page to the API calls it makes.

A scan takes the exchanges captured on one page, keeps the XHR/fetch ones,
retrieves every response body concurrently, infers request and response
schemas, and stores the result in the page map keyed by page URL.

Flow
----
1. Detect page identity (url, framework, route, params)
2. Collect API entries from the capture source
3. Retrieve all response bodies concurrently and wait for every one
4. Discover same-origin links
5. Upsert the PageRecord into the page map

Failure handling
----------------
Nothing in a scan is fatal. A body retrieval that fails or exceeds the
timeout leaves that API's ``response_schema`` at None. An unavailable
capture source yields an empty API list, and an unavailable page
introspection yields URL-only identity (``url="/"``).
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Protocol

from harkit.core.config import get_retrieval_timeout
from harkit.core.models import ApiRecord, PageInfo, PageRecord, ScanResult
from harkit.core.source_schemas.har import HarEntry
from harkit.services.capture import content_retriever, is_api_request, path_with_query
from harkit.services.page_map import PageMapRepository
from harkit.services.response import response_content_type, round_ms
from harkit.services.schema import schema_from_text

logger = logging.getLogger(__name__)

BodyRetriever = Callable[[HarEntry], Awaitable[Optional[str]]]


class CaptureSource(Protocol):
    """Provides the exchanges captured on the current page."""

    def entries(self) -> List[HarEntry]:
        ...


class PageIntrospector(Protocol):
    """Reports what page the capture belongs to and where it links."""

    async def page_info(self) -> PageInfo:
        ...

    async def links(self) -> List[str]:
        ...


def request_schema(entry: HarEntry):
    """Schema of a JSON request body, or None."""
    post_data = entry.request.postData
    if post_data is None or not post_data.text:
        return None
    if "json" not in (post_data.mimeType or "").lower():
        return None
    return schema_from_text(post_data.text)


class ScanAggregator:
    """
    Run one screen scan and persist its result.

    Attributes
    ----------
    page_map : PageMapRepository
        Destination of the scan result
    capture : CaptureSource or None
        Exchange source; None when capture is unavailable
    introspector : PageIntrospector or None
        Page identity and link source; None when unavailable
    retriever : BodyRetriever
        Async body fetcher; defaults to the body stored in the HAR record
    timeout : float
        Seconds to wait for each body before treating it as unavailable
    """

    def __init__(
        self,
        page_map: PageMapRepository,
        capture: Optional[CaptureSource],
        introspector: Optional[PageIntrospector] = None,
        retriever: Optional[BodyRetriever] = None,
        timeout: Optional[float] = None,
    ):
        self.page_map = page_map
        self.capture = capture
        self.introspector = introspector
        self.retriever = retriever or content_retriever
        self.timeout = timeout if timeout is not None else get_retrieval_timeout()

    async def scan(self) -> ScanResult:
        """
        Scan the current page.

        Returns
        -------
        ScanResult
            The stored PageRecord plus the entries behind its APIs
        """
        page_info = await self._detect_page()
        entries = self._collect_entries()
        logger.info("Scanning %s: %d API entries", page_info.url, len(entries))

        # gather keeps discovery order regardless of completion order
        apis = list(await asyncio.gather(*(self._analyze(entry) for entry in entries)))
        links = await self._discover_links()

        page = PageRecord(
            route=page_info.route,
            url=page_info.url,
            params=page_info.params,
            framework=page_info.framework,
            scanned_at=datetime.now(timezone.utc).isoformat(),
            apis=apis,
            links=links,
        )
        self.page_map.upsert(page)
        return ScanResult(page=page, entries=entries)

    def scan_sync(self) -> ScanResult:
        """Run ``scan`` to completion from synchronous code."""
        return asyncio.run(self.scan())

    async def _detect_page(self) -> PageInfo:
        if self.introspector is None:
            return PageInfo()
        try:
            return await self.introspector.page_info()
        except Exception as e:
            logger.warning("Page introspection failed, using URL-only identity: %s", e)
            return PageInfo()

    def _collect_entries(self) -> List[HarEntry]:
        if self.capture is None:
            logger.warning("No capture source available; scanning without APIs")
            return []
        try:
            entries = self.capture.entries()
        except Exception as e:
            logger.warning("Capture source unavailable: %s", e)
            return []
        return [entry for entry in entries if is_api_request(entry)]

    async def _discover_links(self) -> List[str]:
        if self.introspector is None:
            return []
        try:
            return list(await self.introspector.links())
        except Exception as e:
            logger.warning("Link discovery failed: %s", e)
            return []

    async def _retrieve(self, entry: HarEntry) -> Optional[str]:
        try:
            return await asyncio.wait_for(self.retriever(entry), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Body retrieval timed out after %.1fs for %s", self.timeout, entry.request.url
            )
        except Exception as e:
            logger.warning("Body retrieval failed for %s: %s", entry.request.url, e)
        return None

    async def _analyze(self, entry: HarEntry) -> ApiRecord:
        request = entry.request
        response = entry.response
        body = await self._retrieve(entry)

        return ApiRecord(
            method=request.method or "GET",
            path=path_with_query(request.url or ""),
            full_url=request.url or "",
            status=response.status or 0,
            content_type=response_content_type(response),
            time_ms=round_ms(entry.time),
            request_schema=request_schema(entry),
            response_schema=schema_from_text(body),
        )

"""
Screen scan and page map API routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from harkit.api.deps import get_page_map
from harkit.api.schemas import PageListResponse, ScanRequest
from harkit.services.capture import MemoryCaptureSource, StaticPageIntrospector
from harkit.services.page_map import PageMapRepository
from harkit.services.scanner import ScanAggregator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scan")
def scan(request: ScanRequest, page_map: PageMapRepository = Depends(get_page_map)):
    """
    Scan a page from its captured exchanges and store the result.

    Runs in the threadpool, with its own event loop for the scan.

    Returns the stored page record.
    """
    if request.next_data is not None:
        introspector = StaticPageIntrospector.from_next_data(
            request.page_url, request.next_data, hrefs=request.links
        )
    else:
        introspector = StaticPageIntrospector(request.page_url, hrefs=request.links)

    aggregator = ScanAggregator(
        page_map,
        MemoryCaptureSource(request.entries),
        introspector,
        timeout=request.timeout,
    )
    result = aggregator.scan_sync()
    return result.page.model_dump(mode="json", by_alias=True)


@router.get("/pages", response_model=PageListResponse)
def list_pages(
    search: str = Query("", description="Filter by URL substring"),
    page_map: PageMapRepository = Depends(get_page_map),
):
    """Scanned pages (newest first) and linked pages not scanned yet."""
    scanned, unscanned = page_map.list_pages(search)
    return PageListResponse(
        scanned=[page.model_dump(mode="json", by_alias=True) for page in scanned],
        unscanned=unscanned,
    )


@router.get("/pages/export")
def export_pages(page_map: PageMapRepository = Depends(get_page_map)):
    """Whole page map as a downloadable JSON file."""
    filename = page_map.export_filename()
    return Response(
        content=page_map.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/pages/detail")
def get_page(
    url: str = Query(..., description="Page URL as stored"),
    page_map: PageMapRepository = Depends(get_page_map),
):
    page = page_map.get(url)
    if page is None:
        raise HTTPException(status_code=404, detail=f"Page not scanned: {url}")
    return page.model_dump(mode="json", by_alias=True)


@router.delete("/pages")
def clear_pages(page_map: PageMapRepository = Depends(get_page_map)):
    page_map.clear()
    return {"status": "cleared"}

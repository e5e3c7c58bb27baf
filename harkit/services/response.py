"""
Response extraction.

Summarizes the response half of an exchange for display next to generated
code. Unparseable JSON bodies are reported with ``body_parsed=None``.
"""

import json
import logging
import math
from typing import Optional

from harkit.core.models import ResponseDetail, ResponseSummary
from harkit.core.source_schemas.har import HarEntry, HarHeader, HarResponse

logger = logging.getLogger(__name__)


def round_ms(value: Optional[float]) -> int:
    """Round a millisecond timing half-up, like the DevTools display."""
    return int(math.floor((value or 0) + 0.5))


def _strip_params(mime_type: str) -> str:
    return (mime_type or "").split(";")[0].strip()


def response_content_type(response: HarResponse) -> Optional[str]:
    """
    Content type from the ``content-type`` response header, parameters removed.

    Returns None when the header is absent. When the header repeats, the
    last value wins.
    """
    content_type = None
    for header in response.headers:
        if (header.name or "").strip().lower() == "content-type":
            content_type = _strip_params(header.value)
    return content_type


def summarize_response(entry: HarEntry) -> ResponseSummary:
    """
    Build the compact response summary.

    Parameters
    ----
    entry : HarEntry
        Captured exchange

    Returns
    ----
    ResponseSummary
        Status, content type (header first, then content metadata), time
        rounded to whole milliseconds and body size
    """
    response = entry.response
    content_type = response_content_type(response) or _strip_params(response.content.mimeType)

    return ResponseSummary(
        status_code=response.status or 0,
        status_text=response.statusText or "",
        content_type=content_type,
        response_time_ms=round_ms(entry.time),
        size_bytes=response.content.size or 0,
    )


def extract_response(entry: HarEntry) -> ResponseDetail:
    """
    Extract headers and body from the response.

    Headers with an empty name are dropped, names and values are trimmed.
    ``body_parsed`` is set only for JSON responses that parse.
    """
    response = entry.response
    headers = []
    mime_type = ""
    for header in response.headers:
        name = (header.name or "").strip()
        value = (header.value or "").strip()
        if not name:
            continue
        headers.append(HarHeader(name=name, value=value))
        if name.lower() == "content-type":
            mime_type = value

    if not mime_type and response.content.mimeType:
        mime_type = response.content.mimeType

    body = response.content.text or ""
    body_parsed = None
    if "application/json" in mime_type.lower() and body:
        try:
            body_parsed = json.loads(body)
        except ValueError:
            logger.debug("Response body declared JSON but did not parse")

    return ResponseDetail(
        headers=headers,
        body=body,
        body_parsed=body_parsed,
        mime_type=_strip_params(mime_type),
    )


def format_body(detail: ResponseDetail) -> str:
    """Pretty JSON when the body parsed, otherwise the raw text."""
    if detail.body_parsed is not None:
        return json.dumps(detail.body_parsed, indent=2, ensure_ascii=False)
    return detail.body

"""
Capture-side collaborators for screen scans.

A scan needs three things from its surroundings: the captured exchanges,
the identity and links of the page they were captured on, and a way to
fetch each response body. Browser integrations provide live versions of
these; this module ships the ones the CLI and API use, which work from a
saved HAR file and caller-supplied page details.
"""

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from urllib.parse import urljoin, urlsplit

from harkit.core.models import PageInfo
from harkit.core.source_schemas.har import HarEntry, HarLog

logger = logging.getLogger(__name__)

API_RESOURCE_TYPES = ("xhr", "fetch")


def load_har(har_path: Union[str, Path]) -> HarLog:
    """
    Load a HAR file.

    Accepts both the full ``{"log": {...}}`` document and a bare log object.

    Raises
    ------
    OSError
        If the file cannot be read
    ValueError
        If the file is not JSON (json.JSONDecodeError) or not HAR-shaped
        (pydantic.ValidationError)
    """
    with open(har_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_har(data)


def parse_har(data: Dict[str, Any]) -> HarLog:
    if isinstance(data, dict) and "log" in data:
        data = data["log"]
    return HarLog.model_validate(data)


def is_api_request(entry: HarEntry) -> bool:
    """XHR/fetch entries count as API calls; so do entries with no resource type."""
    if not entry.resource_type:
        return True
    return str(entry.resource_type).lower() in API_RESOURCE_TYPES


def path_with_query(url: str) -> str:
    """Strip the origin from ``url``; non-absolute input is returned as-is."""
    parts = urlsplit(url or "")
    if not parts.scheme or not parts.netloc:
        return url or ""
    path = parts.path or "/"
    return path + ("?" + parts.query if parts.query else "")


class MemoryCaptureSource:
    """
    Captured exchanges held in memory.

    Subscribers are called with each entry passed to ``add`` after
    subscription, in the order entries finish.
    """

    def __init__(self, entries: Optional[Iterable[HarEntry]] = None):
        self._entries: List[HarEntry] = list(entries or [])
        self._subscribers: List[Callable[[HarEntry], None]] = []

    @classmethod
    def from_har_file(cls, har_path: Union[str, Path]) -> "MemoryCaptureSource":
        return cls(load_har(har_path).entries)

    def entries(self) -> List[HarEntry]:
        return list(self._entries)

    def add(self, entry: HarEntry) -> None:
        self._entries.append(entry)
        for callback in list(self._subscribers):
            callback(entry)

    def subscribe(self, callback: Callable[[HarEntry], None]) -> Callable[[], None]:
        """
        Register ``callback`` for newly finished entries.

        Returns
        -------
        Callable[[], None]
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


class StaticPageIntrospector:
    """
    Page identity and links supplied by the caller instead of a live page.

    Parameters
    ----------
    page_url : str
        URL of the page the capture was taken on (absolute or path)
    hrefs : Iterable[str], optional
        Anchor targets found on the page; resolved against ``page_url``
    framework, route, params
        Framework routing details, when known
    """

    def __init__(
        self,
        page_url: str,
        hrefs: Optional[Iterable[str]] = None,
        framework: str = "unknown",
        route: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        self.page_url = page_url
        self.hrefs = list(hrefs or [])
        self.framework = framework
        self.route = route
        self.params = params

    @classmethod
    def from_next_data(
        cls,
        page_url: str,
        next_data: Dict[str, Any],
        hrefs: Optional[Iterable[str]] = None,
    ) -> "StaticPageIntrospector":
        """Build from a Next.js ``__NEXT_DATA__`` payload (``page`` and ``query``)."""
        return cls(
            page_url,
            hrefs=hrefs,
            framework="nextjs",
            route=next_data.get("page"),
            params=next_data.get("query"),
        )

    async def page_info(self) -> PageInfo:
        parts = urlsplit(self.page_url)
        url = (parts.path or "/") + ("?" + parts.query if parts.query else "")
        return PageInfo(
            url=url,
            framework=self.framework,
            route=self.route,
            params=self.params,
        )

    async def links(self) -> List[str]:
        """
        Same-origin link paths, deduplicated, excluding the page itself.
        """
        base = urlsplit(self.page_url)
        current_path = base.path or "/"
        seen: List[str] = []
        for href in self.hrefs:
            if not href:
                continue
            target = urlsplit(urljoin(self.page_url, href))
            if (target.scheme, target.netloc) != (base.scheme, base.netloc):
                continue
            path = target.path
            if path and path != current_path and path not in seen:
                seen.append(path)
        return seen


async def content_retriever(entry: HarEntry) -> Optional[str]:
    """
    Response body as captured in the HAR record.

    Base64-encoded content is decoded as UTF-8; undecodable content counts
    as unavailable.
    """
    content = entry.response.content
    if content.text is None:
        return None
    if (content.encoding or "").lower() != "base64":
        return content.text
    try:
        return base64.b64decode(content.text).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        logger.debug("Could not decode base64 body for %s", entry.request.url)
        return None

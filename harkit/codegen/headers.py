"""
Header classification and the persisted header filter list.

Two layers decide whether a captured request header shows up in generated
code:

1. A fixed noise list of transport and browser-identity headers that never
   make sense outside the browser (client hints, fetch metadata, HTTP/2
   pseudo headers, ``user-agent``, ...). ``cookie`` is always excluded from
   ordinary headers; the curl emitter passes it separately with ``-b``.
2. A user-managed exclude list, persisted through a KeyValueStore and
   seeded with the browser headers on first use.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from harkit.core.config import FILTERED_HEADERS_KEY
from harkit.core.source_schemas.har import HarHeader
from harkit.core.store import KeyValueStore

logger = logging.getLogger(__name__)


BROWSER_HEADERS: Tuple[str, ...] = (
    "sec-ch-ua",
    "sec-ch-ua-mobile",
    "sec-ch-ua-platform",
    "sec-ch-ua-full-version-list",
    "sec-ch-ua-arch",
    "sec-ch-ua-bitness",
    "sec-ch-ua-model",
    "sec-fetch-dest",
    "sec-fetch-mode",
    "sec-fetch-site",
    "sec-fetch-user",
    "upgrade-insecure-requests",
    "priority",
    ":method",
    ":authority",
    ":scheme",
    ":path",
)

TRANSPORT_HEADERS: Tuple[str, ...] = (
    "accept-encoding",
    "accept-language",
    "connection",
    "host",
    "user-agent",
    "referer",
    "origin",
)

NOISE_HEADERS: frozenset = frozenset(
    BROWSER_HEADERS + TRANSPORT_HEADERS + ("cache-control", "pragma", "dnt")
)

COOKIE_HEADER = "cookie"

PRESETS = {
    "essential": list(BROWSER_HEADERS + TRANSPORT_HEADERS),
    "default": list(BROWSER_HEADERS),
    "include-all": [],
}

# Checked in order - first match wins
_CATEGORIES: List[Tuple[str, re.Pattern]] = [
    ("chromium-client-hints", re.compile(r"^sec-ch-ua(-|$)")),
    ("fetch-metadata", re.compile(r"^sec-fetch-")),
    ("http2-pseudo", re.compile(r"^:")),
    ("other-browser", re.compile(r"^(upgrade-insecure-requests|priority)$")),
]


def _normalize(name: Optional[str]) -> str:
    if not name or not isinstance(name, str):
        return ""
    return name.strip().lower()


def is_filtered(name: str, exclude_list: Optional[Iterable[str]]) -> bool:
    """Check whether ``name`` is in the user exclude list (case-insensitive)."""
    lower = _normalize(name)
    if not lower or not exclude_list:
        return False
    return any(_normalize(item) == lower for item in exclude_list)


def include_header(name: str, exclude_list: Optional[Iterable[str]] = None) -> bool:
    """
    Decide whether a request header belongs in generated code.

    Parameters
    ----
    name : str
        Header name as captured (any case)
    exclude_list : Iterable[str], optional
        User-configured header names to drop

    Returns
    ----
    bool
        False for noise headers, ``cookie``, and user-excluded names
    """
    lower = _normalize(name)
    if lower in NOISE_HEADERS or lower == COOKIE_HEADER:
        return False
    return not is_filtered(lower, exclude_list)


def clean_headers(
    headers: Sequence[HarHeader], exclude_list: Optional[Iterable[str]] = None
) -> List[Tuple[str, str]]:
    """
    Trimmed (name, value) pairs that survive classification.

    Original order is kept; headers with an empty name are dropped.
    """
    excluded = list(exclude_list or [])
    clean = []
    for header in headers:
        name = (header.name or "").strip()
        if not name:
            continue
        if include_header(name, excluded):
            clean.append((name, (header.value or "").strip()))
    return clean


def header_category(name: str) -> str:
    """Group a header name for display: client hints, fetch metadata, ..."""
    lower = _normalize(name)
    for category, pattern in _CATEGORIES:
        if pattern.match(lower):
            return category
    return "custom"


class HeaderFilterSettings:
    """
    The user's persisted header exclude list.

    Names are stored lowercase and unique. Invalid input (empty name,
    duplicate add, unknown remove or preset) is a no-op rather than an
    error; mutators return whether anything changed.

    Attributes
    ----------
    store : KeyValueStore
        Store holding the list under ``FILTERED_HEADERS_KEY``
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get(self) -> List[str]:
        """Current exclude list; the browser headers when nothing is stored."""
        value = self.store.get(FILTERED_HEADERS_KEY)
        if value is None:
            return list(BROWSER_HEADERS)
        if not isinstance(value, list):
            logger.warning(
                "Ignoring malformed header filter list (%s)", type(value).__name__
            )
            return list(BROWSER_HEADERS)
        return [str(item) for item in value]

    def set(self, headers: Optional[Iterable[str]]) -> List[str]:
        """
        Replace the exclude list.

        ``None`` resets to the default. Names are trimmed, lowercased and
        deduplicated, keeping first-seen order.
        """
        if headers is None:
            names = list(BROWSER_HEADERS)
        else:
            names = []
            for item in headers:
                lower = _normalize(item)
                if lower and lower not in names:
                    names.append(lower)
        self.store.set(FILTERED_HEADERS_KEY, names)
        return names

    def add(self, name: str) -> bool:
        lower = _normalize(name)
        if not lower:
            return False
        current = self.get()
        if lower in current:
            return False
        current.append(lower)
        self.set(current)
        logger.debug("Added %s to header filter list", lower)
        return True

    def remove(self, name: str) -> bool:
        lower = _normalize(name)
        current = self.get()
        if not lower or lower not in current:
            return False
        current.remove(lower)
        self.set(current)
        logger.debug("Removed %s from header filter list", lower)
        return True

    def apply_preset(self, preset_name: str) -> bool:
        """Replace the list with a named preset; unknown names do nothing."""
        preset = PRESETS.get(preset_name)
        if preset is None:
            return False
        self.set(preset)
        return True

    def reset(self) -> List[str]:
        return self.set(None)

    def active_preset(self) -> Optional[str]:
        """Name of the preset the current list equals, if any."""
        current = sorted(self.get())
        for preset_name, preset in PRESETS.items():
            if sorted(preset) == current:
                return preset_name
        return None

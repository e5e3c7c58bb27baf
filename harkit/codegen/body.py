"""
Request body codec.

Decodes the posted body of an exchange into a BodyDescriptor by matching
the declared content type, in fixed precedence order:

    JSON -> URL-encoded -> multipart -> raw text -> none

A JSON body that fails to parse is still a JsonBody (``data=None``, raw
text kept); decoding never raises for malformed data.
"""

import json
import logging
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import quote

from harkit.core.models import (
    BodyDescriptor,
    JsonBody,
    MultipartBody,
    NoBody,
    RawBody,
    UrlEncodedBody,
)
from harkit.core.source_schemas.har import HarEntry, HarPostData

logger = logging.getLogger(__name__)

JSON_MIME = "application/json"
URLENCODED_MIME = "application/x-www-form-urlencoded"
MULTIPART_MIME = "multipart/form-data"

# Methods that never get a body in generated code, whatever was captured
BODYLESS_METHODS = frozenset({"GET", "HEAD"})
# axios only takes a data argument for these
DATA_ARG_METHODS = frozenset({"POST", "PUT", "PATCH"})

# Same unreserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: Optional[str]) -> str:
    return quote(value or "", safe=_URI_COMPONENT_SAFE)


def _decode_json(post_data: HarPostData) -> Optional[BodyDescriptor]:
    text = post_data.text
    if not text:
        return None
    try:
        return JsonBody(data=json.loads(text), raw=text)
    except ValueError as e:
        logger.debug("JSON body did not parse, keeping raw text: %s", e)
        return JsonBody(data=None, raw=text)


def _decode_urlencoded(post_data: HarPostData) -> Optional[BodyDescriptor]:
    if post_data.text:
        return UrlEncodedBody(raw=post_data.text)
    if post_data.params:
        pairs = [
            encode_uri_component(p.name) + "=" + encode_uri_component(p.value)
            for p in post_data.params
        ]
        return UrlEncodedBody(raw="&".join(pairs))
    return None


def _decode_multipart(post_data: HarPostData) -> Optional[BodyDescriptor]:
    if not post_data.params:
        return None
    return MultipartBody(params=list(post_data.params))


_CODECS: List[Tuple[str, Callable[[HarPostData], Optional[BodyDescriptor]]]] = [
    (JSON_MIME, _decode_json),
    (URLENCODED_MIME, _decode_urlencoded),
    (MULTIPART_MIME, _decode_multipart),
]


def decode_body(entry: HarEntry) -> BodyDescriptor:
    """
    Decode the request body of ``entry``.

    Parameters
    ----
    entry : HarEntry
        Captured exchange

    Returns
    ----
    BodyDescriptor
        Exactly one of JsonBody, UrlEncodedBody, MultipartBody, RawBody,
        NoBody
    """
    post_data = entry.request.postData
    if post_data is None:
        return NoBody()

    mime_type = (post_data.mimeType or "").lower()
    for marker, codec in _CODECS:
        if marker in mime_type:
            descriptor = codec(post_data)
            if descriptor is not None:
                return descriptor

    if post_data.text:
        return RawBody(raw=post_data.text)
    return NoBody()


def request_method(entry: HarEntry) -> str:
    return (entry.request.method or "GET").upper()


def carries_body(method: str) -> bool:
    """Whether generated code may attach a body for ``method``."""
    return method.upper() not in BODYLESS_METHODS


def pretty_json(value: Any, indent: str = "  ") -> str:
    """
    Pretty-print ``value`` as JSON with two-space nesting.

    Every line after the first is prefixed with ``indent`` so the block
    lines up when embedded in surrounding code.
    """
    lines = json.dumps(value, indent=2, ensure_ascii=False).split("\n")
    return "\n".join(line if idx == 0 else indent + line for idx, line in enumerate(lines))

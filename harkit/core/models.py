"""
Domain models for exchange analysis.

These models represent the artifacts harkit derives from a captured
exchange: decoded request bodies, response summaries, and the persisted
page map built by screen scans.

All models use Pydantic for validation, serialization, and type safety.
Persisted records serialize with the camelCase names used in exported
page maps (``model_dump(by_alias=True)``).
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from harkit.core.config import SCREEN_MAP_VERSION
from harkit.core.source_schemas.har import HarEntry, HarHeader, HarParam

# A schema is a primitive tag ("string", "number", ...), the "array(empty)"
# marker, {"_type": "array", "_items": Schema}, a field mapping, or None.
Schema = Any


class Dialect(str, Enum):
    """Target calling conventions for generated code."""

    CURL = "curl"
    CURL_ONELINE = "curl-oneline"
    FETCH = "fetch"
    AXIOS = "axios"


class BodyKind(str, Enum):
    """Request body codec, in dispatch precedence order."""

    JSON = "json"
    URLENCODED = "urlencoded"
    MULTIPART = "multipart"
    RAW = "raw"
    NONE = "none"


# =============================================================================
# Body descriptors (tagged union on `kind`)
# =============================================================================


class JsonBody(BaseModel):
    """JSON body. ``data`` is None when the text failed to parse."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[BodyKind.JSON] = BodyKind.JSON
    data: Any = None
    raw: str


class UrlEncodedBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[BodyKind.URLENCODED] = BodyKind.URLENCODED
    raw: str


class MultipartBody(BaseModel):
    """Multipart form. File parts are referenced by name, never embedded."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[BodyKind.MULTIPART] = BodyKind.MULTIPART
    params: List[HarParam]


class RawBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[BodyKind.RAW] = BodyKind.RAW
    raw: str


class NoBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[BodyKind.NONE] = BodyKind.NONE


BodyDescriptor = Annotated[
    Union[JsonBody, UrlEncodedBody, MultipartBody, RawBody, NoBody],
    Field(discriminator="kind"),
]


# =============================================================================
# Response artifacts
# =============================================================================


class ResponseSummary(BaseModel):
    """Compact response overview shown next to generated code."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(0, alias="statusCode")
    status_text: str = Field("", alias="statusText")
    content_type: str = Field("", alias="contentType")
    response_time_ms: int = Field(0, alias="responseTimeMs")
    size_bytes: int = Field(0, alias="sizeBytes")


class ResponseDetail(BaseModel):
    """Full response view: headers plus raw and parsed body."""

    model_config = ConfigDict(populate_by_name=True)

    headers: List[HarHeader] = Field(default_factory=list)
    body: str = ""
    body_parsed: Any = Field(None, alias="bodyParsed")
    mime_type: str = Field("", alias="mimeType")


# =============================================================================
# Screen map (persisted)
# =============================================================================


class PageInfo(BaseModel):
    """Identity of a scanned page as reported by page introspection."""

    model_config = ConfigDict(extra="allow")

    url: str = "/"
    framework: str = "unknown"
    route: Optional[str] = None
    params: Optional[Dict[str, Any]] = None


class ApiRecord(BaseModel):
    """One API call observed while a page was loaded."""

    model_config = ConfigDict(populate_by_name=True)

    method: str = "GET"
    path: str = ""
    full_url: str = Field("", alias="fullUrl")
    status: int = 0
    content_type: Optional[str] = Field(None, alias="contentType")
    time_ms: int = Field(0, alias="timeMs")
    request_schema: Schema = Field(None, alias="requestSchema")
    response_schema: Schema = Field(None, alias="responseSchema")


class PageRecord(BaseModel):
    """
    Scan result for one page URL.

    Replaced wholesale whenever the same URL is scanned again.
    """

    model_config = ConfigDict(populate_by_name=True)

    route: Optional[str] = None
    url: str
    params: Optional[Dict[str, Any]] = None
    framework: str = "unknown"
    scanned_at: str = Field(..., alias="scannedAt")
    apis: List[ApiRecord] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)


class PageMap(BaseModel):
    """All scanned pages, keyed by page URL."""

    version: str = SCREEN_MAP_VERSION
    pages: Dict[str, PageRecord] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class ScanResult(BaseModel):
    """
    Outcome of a single scan.

    ``entries`` holds the exchanges that produced ``page.apis`` (same order),
    so callers can generate code for an API without re-reading the capture.
    They are not persisted.
    """

    page: PageRecord
    entries: List[HarEntry] = Field(default_factory=list)

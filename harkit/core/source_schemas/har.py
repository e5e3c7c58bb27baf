"""
Pydantic models for HAR (HTTP Archive) entries.

These models mirror the entry shape produced by browser DevTools and
``chrome.devtools.network``. Validation is lenient: every field that real
captures sometimes omit has a default, and unknown fields are kept.
Exchange records are frozen - nothing downstream mutates them.

Based on the HAR 1.2 format: http://www.softwareishard.com/blog/har-12-spec/
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HarHeader(BaseModel):
    """Single request or response header."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field("", description="Header name as captured")
    value: str = Field("", description="Header value as captured")


class HarParam(BaseModel):
    """Posted parameter (URL-encoded or multipart field)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field("", description="Parameter name")
    value: Optional[str] = Field(None, description="Parameter value")
    fileName: Optional[str] = Field(None, description="Name of an uploaded file")
    contentType: Optional[str] = Field(None, description="Content type of an uploaded file")


class HarPostData(BaseModel):
    """Posted request body."""

    model_config = ConfigDict(extra="allow", frozen=True)

    mimeType: str = Field("", description="Declared content type of the body")
    text: Optional[str] = Field(None, description="Raw body text")
    params: List[HarParam] = Field(
        default_factory=list, description="Structured parameters (forms)"
    )


class HarRequest(BaseModel):
    """Request half of an exchange."""

    model_config = ConfigDict(extra="allow", frozen=True)

    method: str = Field("GET", description="HTTP method")
    url: str = Field("", description="Absolute request URL")
    httpVersion: Optional[str] = Field(None, description="Protocol version")
    headers: List[HarHeader] = Field(default_factory=list)
    postData: Optional[HarPostData] = Field(None, description="Request body, if any")


class HarContent(BaseModel):
    """Response body details."""

    model_config = ConfigDict(extra="allow", frozen=True)

    mimeType: str = Field("", description="Declared content type of the body")
    text: Optional[str] = Field(None, description="Body text, when captured")
    size: Optional[int] = Field(None, description="Body size in bytes")
    encoding: Optional[str] = Field(None, description="Encoding of text, e.g. 'base64'")


class HarResponse(BaseModel):
    """Response half of an exchange."""

    model_config = ConfigDict(extra="allow", frozen=True)

    status: int = Field(0, description="HTTP status code (0 when unknown)")
    statusText: str = Field("", description="HTTP status text")
    httpVersion: Optional[str] = Field(None, description="Protocol version")
    headers: List[HarHeader] = Field(default_factory=list)
    content: HarContent = Field(default_factory=HarContent)


class HarEntry(BaseModel):
    """
    One captured HTTP exchange.

    ``resource_type`` carries Chrome's ``_resourceType`` extension
    ('xhr', 'fetch', 'document', 'script', ...), used to decide which
    entries count as API calls.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    request: HarRequest = Field(default_factory=HarRequest)
    response: HarResponse = Field(default_factory=HarResponse)
    time: float = Field(0.0, description="Total elapsed time in milliseconds")
    startedDateTime: Optional[str] = Field(None, description="ISO start timestamp")
    resource_type: Optional[str] = Field(
        None, alias="_resourceType", description="Chrome resource type extension"
    )


class HarLog(BaseModel):
    """The ``log`` object of a HAR file."""

    model_config = ConfigDict(extra="allow", frozen=True)

    version: Optional[str] = None
    entries: List[HarEntry] = Field(default_factory=list)

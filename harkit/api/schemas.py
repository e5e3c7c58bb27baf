"""
Pydantic schemas for API request/response models.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from harkit.core.models import ResponseDetail, ResponseSummary
from harkit.core.source_schemas.har import HarEntry


class GeneratedCode(BaseModel):
    """Generated code for one exchange."""

    dialect: str
    code: str
    lines: List[str] = Field(default_factory=list)


class ResponseView(BaseModel):
    """Response summary plus full detail."""

    model_config = ConfigDict(populate_by_name=True)

    summary: ResponseSummary
    detail: ResponseDetail


class HeaderFilterState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    headers: List[str] = Field(default_factory=list)
    active_preset: Optional[str] = Field(None, alias="activePreset")
    presets: List[str] = Field(default_factory=list)


class HeaderFilterUpdate(BaseModel):
    headers: List[str]


class ScanRequest(BaseModel):
    """Exchanges captured on one page, plus what is known about the page."""

    model_config = ConfigDict(populate_by_name=True)

    page_url: str = Field(..., alias="pageUrl")
    entries: List[HarEntry] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    next_data: Optional[Dict[str, Any]] = Field(None, alias="nextData")
    timeout: Optional[float] = Field(None, gt=0)


class PageListResponse(BaseModel):
    scanned: List[Dict[str, Any]] = Field(default_factory=list)
    unscanned: List[str] = Field(default_factory=list)

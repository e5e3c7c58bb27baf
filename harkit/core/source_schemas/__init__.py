"""
Source schema models for captured exchanges.

These Pydantic models represent the HAR entry structures produced by browser
network inspection, before any code generation or analysis.
"""

from .har import (
    HarContent,
    HarEntry,
    HarHeader,
    HarLog,
    HarParam,
    HarPostData,
    HarRequest,
    HarResponse,
)

__all__ = [
    "HarContent",
    "HarEntry",
    "HarHeader",
    "HarLog",
    "HarParam",
    "HarPostData",
    "HarRequest",
    "HarResponse",
]

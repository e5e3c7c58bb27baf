"""
Shared fixtures for harkit tests.
"""
import pytest

from harkit.core.source_schemas.har import HarEntry
from harkit.core.store import MemoryStore


@pytest.fixture
def make_entry():
    """Factory building HarEntry records from a few keyword arguments."""

    def _make(
        method="GET",
        url="https://api.example.com/users",
        headers=None,
        post_data=None,
        status=200,
        status_text="OK",
        response_headers=None,
        content=None,
        time=0,
        resource_type=None,
    ):
        data = {
            "request": {
                "method": method,
                "url": url,
                "headers": [{"name": n, "value": v} for n, v in (headers or [])],
            },
            "response": {
                "status": status,
                "statusText": status_text,
                "headers": [{"name": n, "value": v} for n, v in (response_headers or [])],
                "content": content or {"mimeType": "", "size": 0},
            },
            "time": time,
        }
        if post_data is not None:
            data["request"]["postData"] = post_data
        if resource_type is not None:
            data["_resourceType"] = resource_type
        return HarEntry.model_validate(data)

    return _make


@pytest.fixture
def memory_store():
    return MemoryStore()

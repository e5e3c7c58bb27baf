"""
Tests for HAR loading and the static capture collaborators.
"""
import asyncio
import base64
import json

import pytest
from pydantic import ValidationError

from harkit.services.capture import (
    MemoryCaptureSource,
    StaticPageIntrospector,
    content_retriever,
    is_api_request,
    load_har,
    parse_har,
    path_with_query,
)

HAR = {
    "log": {
        "version": "1.2",
        "entries": [
            {
                "request": {"method": "GET", "url": "https://x.test/api/a", "headers": []},
                "response": {"status": 200, "headers": [], "content": {"mimeType": ""}},
                "_resourceType": "xhr",
            },
            {
                "request": {"method": "GET", "url": "https://x.test/logo.png", "headers": []},
                "response": {"status": 200, "headers": [], "content": {"mimeType": ""}},
                "_resourceType": "image",
            },
        ],
    }
}


def test_load_har(tmp_path):
    path = tmp_path / "capture.har"
    path.write_text(json.dumps(HAR), encoding="utf-8")
    log = load_har(path)
    assert [e.request.url for e in log.entries] == [
        "https://x.test/api/a",
        "https://x.test/logo.png",
    ]


def test_parse_bare_log():
    assert len(parse_har(HAR["log"]).entries) == 2


def test_parse_invalid_har():
    with pytest.raises(ValidationError):
        parse_har({"log": {"entries": "nope"}})


def test_is_api_request():
    api, image = parse_har(HAR).entries
    assert is_api_request(api)
    assert not is_api_request(image)


def test_untyped_entry_counts_as_api(make_entry):
    assert is_api_request(make_entry())
    assert is_api_request(make_entry(resource_type="Fetch"))


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://x.test/api/a?b=1", "/api/a?b=1"),
        ("https://x.test", "/"),
        ("/relative?q", "/relative?q"),
        ("", ""),
    ],
)
def test_path_with_query(url, expected):
    assert path_with_query(url) == expected


def test_memory_capture_subscription(make_entry):
    source = MemoryCaptureSource()
    seen = []
    unsubscribe = source.subscribe(seen.append)

    first = make_entry(url="https://x.test/1")
    source.add(first)
    unsubscribe()
    source.add(make_entry(url="https://x.test/2"))

    assert seen == [first]
    assert len(source.entries()) == 2


def test_introspector_links():
    introspector = StaticPageIntrospector(
        "https://x.test/home?tab=1",
        hrefs=["/about", "about", "https://x.test/about#team", "https://y.test/z", "", "/home"],
    )
    info = asyncio.run(introspector.page_info())
    assert info.url == "/home?tab=1"
    assert asyncio.run(introspector.links()) == ["/about"]


def test_content_retriever(make_entry):
    plain = make_entry(content={"mimeType": "application/json", "text": "{}"})
    encoded = make_entry(
        content={
            "mimeType": "application/json",
            "text": base64.b64encode(b'{"a": 1}').decode("ascii"),
            "encoding": "base64",
        }
    )
    broken = make_entry(content={"mimeType": "", "text": "//4=", "encoding": "base64"})

    assert asyncio.run(content_retriever(plain)) == "{}"
    assert asyncio.run(content_retriever(encoded)) == '{"a": 1}'
    assert asyncio.run(content_retriever(broken)) is None
    assert asyncio.run(content_retriever(make_entry())) is None

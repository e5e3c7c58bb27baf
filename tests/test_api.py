"""
Tests for the HTTP API.

Each test gets a fresh in-memory store attached to the app before startup.
"""
import inspect

import pytest
from fastapi.testclient import TestClient

from harkit.api.main import app
from harkit.api.routes import pages
from harkit.codegen.headers import BROWSER_HEADERS
from harkit.core.store import MemoryStore, SQLiteStore

ENTRY = {
    "request": {
        "method": "POST",
        "url": "https://api.example.com/items",
        "headers": [
            {"name": "Content-Type", "value": "application/json"},
            {"name": "X-Trace", "value": "t-1"},
        ],
        "postData": {"mimeType": "application/json", "text": '{"a":1}'},
    },
    "response": {
        "status": 201,
        "statusText": "Created",
        "headers": [{"name": "Content-Type", "value": "application/json"}],
        "content": {"mimeType": "application/json", "size": 8, "text": '{"id":7}'},
    },
    "time": 12.5,
    "_resourceType": "fetch",
}


@pytest.fixture
def client():
    app.state.store = MemoryStore()
    with TestClient(app) as test_client:
        yield test_client
    app.state.store = None


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "store": "memory"}


def test_generate_fetch(client):
    response = client.post("/api/generate/fetch", json=ENTRY)
    assert response.status_code == 200
    data = response.json()
    assert data["dialect"] == "fetch"
    assert data["lines"][0] == "const response = await fetch('https://api.example.com/items', {"
    assert data["code"] == "\n".join(data["lines"])
    assert "X-Trace" in data["code"]


def test_generate_uses_saved_filter(client):
    client.put("/api/headers", json={"headers": ["X-Trace"]})

    filtered = client.post("/api/generate/curl", json=ENTRY).json()
    assert "X-Trace" not in filtered["code"]

    unfiltered = client.post("/api/generate/curl?filter=false", json=ENTRY).json()
    assert "-H 'X-Trace: t-1'" in unfiltered["code"]


def test_generate_unknown_dialect(client):
    response = client.post("/api/generate/httpie", json=ENTRY)
    assert response.status_code == 404


def test_response_view(client):
    data = client.post("/api/response", json=ENTRY).json()
    assert data["summary"]["statusCode"] == 201
    assert data["summary"]["responseTimeMs"] == 13
    assert data["detail"]["bodyParsed"] == {"id": 7}
    assert data["detail"]["mimeType"] == "application/json"


def test_header_settings(client):
    state = client.get("/api/headers").json()
    assert state["headers"] == list(BROWSER_HEADERS)
    assert state["activePreset"] == "default"
    assert "include-all" in state["presets"]

    state = client.put("/api/headers", json={"headers": ["X-A", "x-a", " "]}).json()
    assert state["headers"] == ["x-a"]
    assert state["activePreset"] is None

    state = client.post("/api/headers/preset/include-all").json()
    assert state["headers"] == []
    assert state["activePreset"] == "include-all"

    assert client.post("/api/headers/preset/bogus").status_code == 404

    state = client.post("/api/headers/reset").json()
    assert state["activePreset"] == "default"


def test_scan_and_pages(client):
    payload = {
        "pageUrl": "https://api.example.com/items/new",
        "entries": [ENTRY],
        "links": ["/items", "https://elsewhere.test/"],
    }
    page = client.post("/api/scan", json=payload).json()
    assert page["url"] == "/items/new"
    assert page["links"] == ["/items"]
    assert page["apis"][0]["requestSchema"] == {"a": "number"}
    assert page["apis"][0]["responseSchema"] == {"id": "number"}
    assert page["apis"][0]["timeMs"] == 13

    listing = client.get("/api/pages").json()
    assert [p["url"] for p in listing["scanned"]] == ["/items/new"]
    assert listing["unscanned"] == ["/items"]

    detail = client.get("/api/pages/detail", params={"url": "/items/new"})
    assert detail.status_code == 200
    assert detail.json()["scannedAt"] == page["scannedAt"]
    assert client.get("/api/pages/detail", params={"url": "/missing"}).status_code == 404

    export = client.get("/api/pages/export")
    assert export.status_code == 200
    assert "harkit-screen-map-" in export.headers["content-disposition"]
    assert "/items/new" in export.json()["pages"]

    assert client.delete("/api/pages").json() == {"status": "cleared"}
    assert client.get("/api/pages").json() == {"scanned": [], "unscanned": []}


def test_scan_next_data(client):
    payload = {
        "pageUrl": "https://app.test/posts/1",
        "nextData": {"page": "/posts/[id]", "query": {"id": "1"}},
    }
    page = client.post("/api/scan", json=payload).json()
    assert page["framework"] == "nextjs"
    assert page["route"] == "/posts/[id]"
    assert page["apis"] == []


def test_scan_rejects_bad_timeout(client):
    response = client.post("/api/scan", json={"pageUrl": "/", "timeout": 0})
    assert response.status_code == 422


def test_scan_with_sqlite_store(tmp_path):
    """Scans write to the durable store from the route's worker thread."""
    store = SQLiteStore(tmp_path / "harkit.db")
    app.state.store = store
    try:
        with TestClient(app) as test_client:
            payload = {"pageUrl": "https://api.example.com/items/new", "entries": [ENTRY]}
            assert test_client.post("/api/scan", json=payload).status_code == 200
            listing = test_client.get("/api/pages").json()
    finally:
        app.state.store = None
        store.close()

    assert [p["url"] for p in listing["scanned"]] == ["/items/new"]
    assert not inspect.iscoroutinefunction(pages.scan)

"""
Tests for PageMapRepository.
"""
import json
from datetime import date

import pytest

from harkit.core.config import SCREEN_MAP_KEY, SCREEN_MAP_VERSION
from harkit.core.models import ApiRecord, PageRecord
from harkit.services.page_map import PageMapRepository


def _page(url, scanned_at="2024-01-01T00:00:00+00:00", links=None, apis=None):
    return PageRecord(url=url, scanned_at=scanned_at, links=links or [], apis=apis or [])


@pytest.fixture
def repo(memory_store):
    return PageMapRepository(memory_store)


def test_empty_map(repo):
    page_map = repo.load()
    assert page_map.version == SCREEN_MAP_VERSION
    assert page_map.pages == {}


def test_upsert_persists_camel_case(repo, memory_store):
    api = ApiRecord(method="GET", path="/api/a", full_url="https://x/api/a", time_ms=4)
    repo.upsert(_page("/a", apis=[api]))

    stored = memory_store.get(SCREEN_MAP_KEY)
    assert stored["version"] == SCREEN_MAP_VERSION
    record = stored["pages"]["/a"]
    assert record["scannedAt"] == "2024-01-01T00:00:00+00:00"
    assert record["apis"][0]["fullUrl"] == "https://x/api/a"
    assert record["apis"][0]["timeMs"] == 4
    assert record["apis"][0]["responseSchema"] is None


def test_upsert_replaces_wholesale(repo):
    repo.upsert(_page("/a", links=["/b"], apis=[ApiRecord(path="/old")]))
    repo.upsert(_page("/a", apis=[ApiRecord(path="/new")]))

    page = repo.get("/a")
    assert [api.path for api in page.apis] == ["/new"]
    assert page.links == []


def test_get_missing(repo):
    assert repo.get("/nowhere") is None


def test_clear(repo):
    repo.upsert(_page("/a"))
    repo.clear()
    assert repo.load().pages == {}


def test_malformed_map_loads_empty(repo, memory_store):
    memory_store.set(SCREEN_MAP_KEY, {"pages": {"/a": {"url": "/a"}}})
    assert repo.load().pages == {}


def test_list_pages(repo):
    repo.upsert(_page("/a", "2024-01-01T00:00:00+00:00", links=["/b", "/c", "/users/1"]))
    repo.upsert(_page("/b", "2024-03-01T00:00:00+00:00", links=["/a", "/c", "/d"]))

    scanned, unscanned = repo.list_pages()
    assert [p.url for p in scanned] == ["/b", "/a"]
    assert unscanned == ["/c", "/users/1", "/d"]


def test_list_pages_search(repo):
    repo.upsert(_page("/users", links=["/users/1", "/about"]))
    repo.upsert(_page("/settings"))

    scanned, unscanned = repo.list_pages("  USERS ")
    assert [p.url for p in scanned] == ["/users"]
    assert unscanned == ["/users/1"]


def test_export(repo, tmp_path):
    repo.upsert(_page("/a"))
    exported = json.loads(repo.export_json())
    assert exported["pages"]["/a"]["url"] == "/a"

    path = repo.export_to_file(tmp_path / "out", today=date(2024, 5, 6))
    assert path.name == "harkit-screen-map-2024-05-06.json"
    assert json.loads(path.read_text(encoding="utf-8")) == exported

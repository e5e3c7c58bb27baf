"""
Tests for header classification and the persisted filter list.
"""
import pytest

from harkit.codegen.headers import (
    BROWSER_HEADERS,
    PRESETS,
    HeaderFilterSettings,
    clean_headers,
    header_category,
    include_header,
    is_filtered,
)
from harkit.core.config import FILTERED_HEADERS_KEY
from harkit.core.source_schemas.har import HarHeader


class TestIncludeHeader:
    """Tests for the include_header predicate."""

    @pytest.mark.parametrize(
        "name",
        [
            "sec-ch-ua",
            "Sec-Fetch-Mode",
            ":authority",
            "Accept-Encoding",
            "accept-language",
            "Connection",
            "Host",
            "User-Agent",
            "Referer",
            "Origin",
            "Cache-Control",
            "Pragma",
            "DNT",
            "Priority",
        ],
    )
    def test_noise_headers_excluded(self, name):
        assert include_header(name, []) is False

    def test_cookie_always_excluded(self):
        assert include_header("Cookie", []) is False
        assert include_header("cookie", None) is False

    def test_regular_headers_included(self):
        assert include_header("Authorization", []) is True
        assert include_header("Content-Type", None) is True
        assert include_header("X-Request-Id", ["x-other"]) is True

    def test_user_list_case_insensitive(self):
        assert include_header("X-Debug", ["x-debug"]) is False
        assert include_header("x-debug", ["X-DEBUG"]) is False

    def test_is_filtered_only_checks_user_list(self):
        assert is_filtered("User-Agent", []) is False
        assert is_filtered("X-Trace", ["x-trace"]) is True
        assert is_filtered("", ["x-trace"]) is False


def test_clean_headers_trims_and_keeps_order():
    headers = [
        HarHeader(name=" X-B ", value=" 2 "),
        HarHeader(name="User-Agent", value="ua"),
        HarHeader(name="", value="orphan"),
        HarHeader(name="X-A", value="1"),
        HarHeader(name="Cookie", value="sid=1"),
    ]
    assert clean_headers(headers, []) == [("X-B", "2"), ("X-A", "1")]


@pytest.mark.parametrize(
    "name,category",
    [
        ("sec-ch-ua", "chromium-client-hints"),
        ("sec-ch-ua-platform", "chromium-client-hints"),
        ("sec-fetch-site", "fetch-metadata"),
        (":path", "http2-pseudo"),
        ("priority", "other-browser"),
        ("x-custom", "custom"),
        ("sec-ch-uax", "custom"),
    ],
)
def test_header_category(name, category):
    assert header_category(name) == category


class TestHeaderFilterSettings:
    """Tests for the persisted exclude list."""

    @pytest.fixture
    def settings(self, memory_store):
        return HeaderFilterSettings(memory_store)

    def test_defaults_to_browser_headers(self, settings):
        assert settings.get() == list(BROWSER_HEADERS)
        assert settings.active_preset() == "default"

    def test_add_normalizes(self, settings, memory_store):
        assert settings.add("  X-Debug ") is True
        assert settings.get()[-1] == "x-debug"
        assert "x-debug" in memory_store.get(FILTERED_HEADERS_KEY)
        assert settings.active_preset() is None

    def test_add_duplicate_is_noop(self, settings):
        settings.add("x-debug")
        before = settings.get()
        assert settings.add("X-DEBUG") is False
        assert settings.get() == before

    def test_add_empty_is_noop(self, settings, memory_store):
        assert settings.add("   ") is False
        assert settings.add(None) is False
        assert memory_store.get(FILTERED_HEADERS_KEY) is None

    def test_remove(self, settings):
        assert settings.remove("Priority") is True
        assert "priority" not in settings.get()
        assert settings.remove("priority") is False

    def test_apply_preset(self, settings):
        assert settings.apply_preset("essential") is True
        assert settings.get() == PRESETS["essential"]
        assert settings.active_preset() == "essential"

        assert settings.apply_preset("include-all") is True
        assert settings.get() == []
        assert settings.active_preset() == "include-all"

    def test_unknown_preset_is_noop(self, settings):
        settings.add("x-debug")
        before = settings.get()
        assert settings.apply_preset("nope") is False
        assert settings.get() == before

    def test_set_dedupes_case_insensitively(self, settings):
        assert settings.set(["X-A", "x-a", " ", "X-B"]) == ["x-a", "x-b"]

    def test_reset(self, settings):
        settings.apply_preset("include-all")
        settings.reset()
        assert settings.get() == list(BROWSER_HEADERS)

    def test_malformed_stored_value_falls_back(self, settings, memory_store):
        memory_store.set(FILTERED_HEADERS_KEY, {"not": "a list"})
        assert settings.get() == list(BROWSER_HEADERS)


def test_exclude_list_entries_are_trimmed():
    assert include_header("X-Trace", [" X-Trace "]) is False
    assert is_filtered("x-trace", ["\tx-trace\n"]) is True
    headers = [HarHeader(name="X-Trace", value="t"), HarHeader(name="X-Keep", value="k")]
    assert clean_headers(headers, [" X-Trace "]) == [("X-Keep", "k")]

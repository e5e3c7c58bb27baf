"""
Tests for the fetch() emitter.
"""
import pytest

from harkit.codegen.fetch import FetchEmitter


@pytest.fixture
def emitter():
    return FetchEmitter()


def test_bare_call(emitter, make_entry):
    entry = make_entry(url="https://api.example.com/ping", headers=[("User-Agent", "x")])
    assert emitter.emit(entry, []) == [
        "const response = await fetch('https://api.example.com/ping');",
        "",
        "const data = await response.json();",
    ]


def test_json_body_reserialized(emitter, make_entry):
    entry = make_entry(
        method="POST",
        url="https://api.example.com/items",
        headers=[("Content-Type", "application/json")],
        post_data={"mimeType": "application/json", "text": '{"a":1}'},
    )
    assert emitter.render(entry, []) == (
        "const response = await fetch('https://api.example.com/items', {\n"
        "  method: 'POST',\n"
        "  headers: {\n"
        "    'Content-Type': 'application/json'\n"
        "  },\n"
        "  body: JSON.stringify({\n"
        '    "a": 1\n'
        "  })\n"
        "});\n"
        "\n"
        "const data = await response.json();"
    )


def test_malformed_json_inlined_raw(emitter, make_entry):
    entry = make_entry(
        method="POST",
        post_data={"mimeType": "application/json", "text": "{'a': 1\n"},
    )
    lines = emitter.emit(entry, [])
    assert "  body: '{\\'a\\': 1\\n'" in lines


def test_headers_escaped_and_order_kept(emitter, make_entry):
    entry = make_entry(
        headers=[("X-B", "it's"), ("Cookie", "sid=1"), ("X-A", "a\\b")],
    )
    lines = emitter.emit(entry, [])
    assert lines[:5] == [
        "const response = await fetch('https://api.example.com/users', {",
        "  headers: {",
        "    'X-B': 'it\\'s',",
        "    'X-A': 'a\\\\b'",
        "  }",
    ]


def test_multipart_statements_precede_call(emitter, make_entry):
    entry = make_entry(
        method="POST",
        url="https://api.example.com/upload",
        post_data={
            "mimeType": "multipart/form-data; boundary=x",
            "params": [
                {"name": "title", "value": "hi"},
                {"name": "upload", "fileName": "photo.png"},
            ],
        },
    )
    assert emitter.emit(entry, []) == [
        "const formData = new FormData();",
        "formData.append('title', 'hi');",
        "formData.append('upload', file); // photo.png",
        "",
        "const response = await fetch('https://api.example.com/upload', {",
        "  method: 'POST',",
        "  body: formData",
        "});",
        "",
        "const data = await response.json();",
    ]


def test_delete_keeps_body(emitter, make_entry):
    entry = make_entry(method="DELETE", post_data={"mimeType": "text/plain", "text": "x"})
    assert "  body: 'x'" in emitter.emit(entry, [])


def test_get_body_dropped(emitter, make_entry):
    entry = make_entry(
        method="GET", post_data={"mimeType": "application/json", "text": '{"a":1}'}
    )
    code = emitter.render(entry, [])
    assert "body" not in code
    assert "method" not in code

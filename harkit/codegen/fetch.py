"""
fetch() emitter.

Produces an ``await fetch(url, options)`` call. The options object holds,
in order: method (omitted for GET), headers (omitted when none survive
filtering) and body. Multipart bodies are built as FormData statements
ahead of the call.
"""

from typing import Iterable, List, Optional

from harkit.codegen.base import BaseEmitter, join_options
from harkit.codegen.body import carries_body, decode_body, pretty_json, request_method
from harkit.codegen.escaping import js_quote
from harkit.codegen.headers import clean_headers
from harkit.codegen.javascript import form_data_lines, header_block
from harkit.core.models import BodyKind, Dialect
from harkit.core.source_schemas.har import HarEntry


class FetchEmitter(BaseEmitter):
    """Browser/Node ``fetch`` call with a JSON response read."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.FETCH

    def emit(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        request = entry.request
        method = request_method(entry)
        headers = clean_headers(request.headers, exclude_list)

        lines: List[str] = []
        options: List[List[str]] = []

        if method != "GET":
            options.append([f"  method: {js_quote(method)}"])

        if headers:
            options.append(header_block(headers))

        if carries_body(method):
            body = decode_body(entry)
            if body.kind == BodyKind.JSON and body.data is not None:
                options.append(f"  body: JSON.stringify({pretty_json(body.data)})".split("\n"))
            elif body.kind == BodyKind.MULTIPART:
                lines.extend(form_data_lines(body.params))
                options.append(["  body: formData"])
            elif body.kind != BodyKind.NONE:
                options.append([f"  body: {js_quote(body.raw)}"])

        url = js_quote(request.url or "")
        if not options:
            lines.append(f"const response = await fetch({url});")
        else:
            lines.append(f"const response = await fetch({url}, {{")
            lines.extend(join_options(options))
            lines.append("});")

        lines.append("")
        lines.append("const data = await response.json();")
        return lines

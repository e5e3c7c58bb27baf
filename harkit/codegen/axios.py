"""
axios emitter.

POST, PUT and PATCH pass the body as the second argument
(``axios.post(url, data, { headers })``), with ``null`` when there is no
body. The other axios verbs take only the config argument
(``axios.get(url, { headers })``). The config is omitted when no headers
survive filtering.

Methods axios has no shorthand for go through ``axios.request`` with the
method as a quoted string, so a captured method name never ends up in the
generated code as an identifier.
"""

from typing import Iterable, List, Optional

from harkit.codegen.base import BaseEmitter, join_options
from harkit.codegen.body import (
    DATA_ARG_METHODS,
    carries_body,
    decode_body,
    pretty_json,
    request_method,
)
from harkit.codegen.escaping import js_quote
from harkit.codegen.headers import clean_headers
from harkit.codegen.javascript import form_data_lines, header_block
from harkit.core.models import BodyKind, Dialect
from harkit.core.source_schemas.har import HarEntry

AXIOS_VERBS = frozenset({"GET", "DELETE", "HEAD", "OPTIONS", "POST", "PUT", "PATCH"})


def _body_argument(entry: HarEntry, lines: List[str]) -> Optional[str]:
    """
    JS expression for the request body, or None when there is none.

    Multipart bodies add their FormData statements to ``lines``.
    """
    body = decode_body(entry)
    if body.kind == BodyKind.JSON and body.data is not None:
        return pretty_json(body.data)
    if body.kind == BodyKind.MULTIPART:
        lines.extend(form_data_lines(body.params))
        return "formData"
    if body.kind != BodyKind.NONE:
        return js_quote(body.raw)
    return None


class AxiosEmitter(BaseEmitter):
    """``axios.<verb>`` call destructuring the response data."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.AXIOS

    def emit(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        method = request_method(entry)
        headers = header_block(clean_headers(entry.request.headers, exclude_list))
        if method not in AXIOS_VERBS:
            return self._emit_request(entry, method, headers)

        lines: List[str] = []
        args = [js_quote(entry.request.url or "")]

        if method in DATA_ARG_METHODS:
            body_arg = _body_argument(entry, lines)
            args.append(body_arg if body_arg is not None else "null")

        call = f"const {{ data }} = await axios.{method.lower()}({', '.join(args)}"
        if headers:
            lines.extend((call + ", {").split("\n"))
            lines.extend(headers)
            lines.append("});")
        else:
            lines.extend((call + ");").split("\n"))
        return lines

    @staticmethod
    def _emit_request(entry: HarEntry, method: str, headers: List[str]) -> List[str]:
        lines: List[str] = []
        options = [
            [f"  url: {js_quote(entry.request.url or '')}"],
            [f"  method: {js_quote(method)}"],
        ]
        if carries_body(method):
            body_arg = _body_argument(entry, lines)
            if body_arg is not None:
                options.append(f"  data: {body_arg}".split("\n"))
        if headers:
            options.append(headers)

        lines.append("const { data } = await axios.request({")
        lines.extend(join_options(options))
        lines.append("});")
        return lines

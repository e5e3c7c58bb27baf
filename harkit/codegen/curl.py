"""
curl command emitter.

Part order is fixed: URL, method flag, header flags, cookie flag, body
flags. The multi-line form continues each part on its own line with a
trailing backslash; the one-line form joins parts with single spaces.
All values are single-quoted with shell escaping.
"""

from typing import Iterable, List, Optional

from harkit.codegen.base import BaseEmitter
from harkit.codegen.body import carries_body, decode_body, request_method
from harkit.codegen.escaping import shell_quote, shell_word
from harkit.codegen.headers import COOKIE_HEADER, clean_headers, is_filtered
from harkit.core.models import BodyKind, Dialect
from harkit.core.source_schemas.har import HarEntry


CONTINUATION = " \\\n  "


class CurlEmitter(BaseEmitter):
    """Multi-line curl command."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.CURL

    def build_parts(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        """
        Build the ordered command parts for ``entry``.

        Returns
        ----
        List[str]
            ``curl 'url'`` followed by one element per flag
        """
        excluded = list(exclude_list or [])
        request = entry.request
        method = request_method(entry)

        parts = ["curl " + shell_quote(request.url or "")]

        if method != "GET":
            parts.append("-X " + shell_word(method))

        for name, value in clean_headers(request.headers, excluded):
            parts.append("-H " + shell_quote(name + ": " + value))

        cookie = self._cookie_value(entry, excluded)
        if cookie:
            parts.append("-b " + shell_quote(cookie))

        if carries_body(method):
            parts.extend(self._body_flags(entry))

        return parts

    def emit(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        return CONTINUATION.join(self.build_parts(entry, exclude_list)).split("\n")

    @staticmethod
    def _cookie_value(entry: HarEntry, exclude_list: List[str]) -> Optional[str]:
        # A user-excluded cookie is dropped entirely; otherwise the last one wins
        if is_filtered(COOKIE_HEADER, exclude_list):
            return None
        cookie = None
        for header in entry.request.headers:
            if (header.name or "").strip().lower() == COOKIE_HEADER:
                cookie = (header.value or "").strip()
        return cookie

    @staticmethod
    def _body_flags(entry: HarEntry) -> List[str]:
        body = decode_body(entry)
        if body.kind == BodyKind.MULTIPART:
            flags = []
            for param in body.params:
                if param.fileName:
                    flags.append("-F " + shell_quote(param.name + "=@" + param.fileName))
                else:
                    flags.append("-F " + shell_quote(param.name + "=" + (param.value or "")))
            return flags
        if body.kind == BodyKind.NONE:
            return []
        return ["-d " + shell_quote(body.raw.strip())]


class CurlOnelineEmitter(CurlEmitter):
    """Same command as CurlEmitter, collapsed onto one line."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.CURL_ONELINE

    def emit(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        return [" ".join(self.build_parts(entry, exclude_list))]

"""
Code generation from captured exchanges.

Emitters share the header classifier, body codec and escaping layer:

    HarEntry ──► clean_headers / decode_body ──► CurlEmitter / FetchEmitter / AxiosEmitter
"""

from typing import Dict, Iterable, Optional, Union

from harkit.core.models import Dialect
from harkit.core.source_schemas.har import HarEntry

from .axios import AxiosEmitter
from .base import BaseEmitter
from .curl import CurlEmitter, CurlOnelineEmitter
from .fetch import FetchEmitter

EMITTERS: Dict[Dialect, BaseEmitter] = {
    Dialect.CURL: CurlEmitter(),
    Dialect.CURL_ONELINE: CurlOnelineEmitter(),
    Dialect.FETCH: FetchEmitter(),
    Dialect.AXIOS: AxiosEmitter(),
}


def get_emitter(dialect: Union[Dialect, str]) -> BaseEmitter:
    """
    Look up the emitter for a dialect.

    Raises
    ----
    ValueError
        If ``dialect`` is not a known dialect name
    """
    return EMITTERS[Dialect(dialect)]


def generate_code(
    entry: HarEntry,
    dialect: Union[Dialect, str] = Dialect.CURL,
    exclude_list: Optional[Iterable[str]] = None,
) -> str:
    """Render ``entry`` as code in the requested dialect."""
    return get_emitter(dialect).render(entry, exclude_list)


__all__ = [
    "AxiosEmitter",
    "BaseEmitter",
    "CurlEmitter",
    "CurlOnelineEmitter",
    "EMITTERS",
    "FetchEmitter",
    "generate_code",
    "get_emitter",
]

"""
Code generation and response extraction API routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from harkit.api.deps import get_header_settings
from harkit.api.schemas import GeneratedCode, ResponseView
from harkit.codegen import get_emitter
from harkit.codegen.headers import HeaderFilterSettings
from harkit.core.models import Dialect
from harkit.core.source_schemas.har import HarEntry
from harkit.services.response import extract_response, summarize_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate/{dialect}", response_model=GeneratedCode)
def generate(
    dialect: str,
    entry: HarEntry,
    use_filter: bool = Query(True, alias="filter"),
    settings: HeaderFilterSettings = Depends(get_header_settings),
):
    """
    Generate code for one exchange.

    Parameters
    ----
    dialect : str
        'curl', 'curl-oneline', 'fetch' or 'axios'
    entry : HarEntry
        Exchange in HAR entry shape (request body)
    use_filter : bool
        Apply the saved header filter list (``?filter=false`` to skip it)
    """
    try:
        emitter = get_emitter(dialect)
    except ValueError:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown dialect '{dialect}'. Supported: {', '.join(d.value for d in Dialect)}",
        )

    exclude_list = settings.get() if use_filter else []
    lines = emitter.emit(entry, exclude_list)
    return GeneratedCode(dialect=emitter.dialect.value, code="\n".join(lines), lines=lines)


@router.post("/response")
def response(entry: HarEntry):
    """Summarize the response half of an exchange."""
    view = ResponseView(summary=summarize_response(entry), detail=extract_response(entry))
    return view.model_dump(by_alias=True)

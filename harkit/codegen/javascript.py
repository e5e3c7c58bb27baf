"""
Shared pieces for the JavaScript emitters (fetch and axios).
"""
from typing import List, Sequence, Tuple

from harkit.codegen.escaping import escape_js, js_quote
from harkit.core.source_schemas.har import HarParam


def header_block(headers: Sequence[Tuple[str, str]], key: str = "headers") -> List[str]:
    """
    Lines of a ``headers: { ... }`` option, indented for an options object.

    Returns an empty list when there are no headers.
    """
    if not headers:
        return []
    entries = [f"    {js_quote(name)}: {js_quote(value)}" for name, value in headers]
    return [f"  {key}: {{"] + [line + "," for line in entries[:-1]] + [entries[-1], "  }"]


def form_data_lines(params: Sequence[HarParam]) -> List[str]:
    """
    Statements building a ``formData`` value from multipart parameters.

    File parts reference a ``file`` variable the caller must provide; the
    captured file name is left as a comment.
    """
    lines = ["const formData = new FormData();"]
    for param in params:
        if param.fileName:
            lines.append(
                f"formData.append({js_quote(param.name)}, file); // {escape_js(param.fileName)}"
            )
        else:
            lines.append(f"formData.append({js_quote(param.name)}, {js_quote(param.value or '')});")
    lines.append("")
    return lines

"""
Structural schema inference over parsed JSON.

Arrays are described by their FIRST element only. This is a sampling
approximation, not a union over all elements, and callers rely on it:
``infer_schema(items) == {"_type": "array", "_items": infer_schema(items[0])}``
whatever the other elements look like.
"""

import json
from typing import Any, Optional

from harkit.core.models import Schema

EMPTY_ARRAY = "array(empty)"


def _primitive_tag(value: Any) -> str:
    # bool is checked before int because bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def infer_schema(value: Any) -> Schema:
    """
    Derive a structural description of a JSON value.

    Parameters
    ----
    value : Any
        Parsed JSON (dict, list, str, int, float, bool or None)

    Returns
    ----
    Schema
        - None for a top-level None
        - ``"array(empty)"`` for an empty list
        - ``{"_type": "array", "_items": <schema of first element>}`` for a list
        - ``{key: <schema>}`` for a dict; None members become ``"null"``
        - ``"string"``, ``"number"`` or ``"boolean"`` for scalars
    """
    if value is None:
        return None

    if isinstance(value, list):
        if not value:
            return EMPTY_ARRAY
        return {"_type": "array", "_items": infer_schema(value[0])}

    if isinstance(value, dict):
        return {
            key: "null" if member is None else infer_schema(member)
            for key, member in value.items()
        }

    return _primitive_tag(value)


def schema_from_text(text: Optional[str]) -> Schema:
    """Parse ``text`` as JSON and infer its schema; None if it does not parse."""
    if not text or not isinstance(text, str):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return infer_schema(parsed)


def format_schema(schema: Schema) -> str:
    """
    One-line human summary of a schema.

    Nested objects inside an object collapse to ``{...}``; arrays show
    their item schema in brackets.
    """
    if isinstance(schema, str):
        return schema
    if schema is None:
        return "null"

    if isinstance(schema, dict) and schema.get("_type") == "array":
        return "[" + format_schema(schema.get("_items")) + "]"

    if isinstance(schema, dict):
        parts = []
        for key, member in schema.items():
            if isinstance(member, str):
                parts.append(f"{key}: {member}")
            elif isinstance(member, dict) and member.get("_type") == "array":
                parts.append(f"{key}: {format_schema(member)}")
            elif isinstance(member, dict):
                parts.append(f"{key}: {{...}}")
            else:
                parts.append(f"{key}: {member}")
        return "{ " + ", ".join(parts) + " }"

    return str(schema)

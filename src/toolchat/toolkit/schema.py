"""Tool input schema adaptation for the function-calling API.

Tool servers publish arbitrary JSON Schema; the completion API is stricter.
Array properties are collapsed to arrays of strings, dropping any item
schema. This is lossy: tools with structured array items receive string
items from the model.
"""

from __future__ import annotations

import copy

STRING_ARRAY = {"type": "array", "items": {"type": "string"}}


def adapt_input_schema(schema: dict | None) -> dict:
    """Convert a tool's input schema to a function-parameter schema.

    Every property declared with ``type: "array"`` becomes an array of
    strings. Other properties and the ``required`` list pass through.
    The input is not modified. Applying the adapter twice yields the same
    result as applying it once.

    Args:
        schema: Object schema with ``properties`` and optional ``required``.

    Returns:
        ``{"type": "object", "properties": ..., "required": ...}``
    """
    schema = schema or {}
    properties: dict = {}
    for key, prop in (schema.get("properties") or {}).items():
        if isinstance(prop, dict) and prop.get("type") == "array":
            properties[key] = copy.deepcopy(STRING_ARRAY)
        else:
            properties[key] = copy.deepcopy(prop)
    return {
        "type": "object",
        "properties": properties,
        "required": list(schema.get("required") or []),
    }

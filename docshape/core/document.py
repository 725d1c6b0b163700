"""
Read-only access to schemaless documents.

Documents arrive either as plain mappings or as rows from the store's
list endpoint, which wrap the body as ``{"id": ..., "doc": {...}}``.
All field access goes through this module so the rest of the engine
stays agnostic about document shape.
"""

from __future__ import annotations

from typing import Any, Mapping


def document_body(document: Any) -> Mapping[str, Any]:
    """
    Return the field mapping of a document.

    Rows carrying a mapping under ``doc`` are unwrapped. Non-mapping
    inputs yield an empty mapping.
    """
    if not isinstance(document, Mapping):
        return {}
    inner = document.get("doc")
    if isinstance(inner, Mapping):
        return inner
    return document


def get_field_value(document: Any, field: str) -> Any:
    """
    Get a field value, supporting nested access.

    An exact top-level key wins; otherwise the name is treated as a
    dotted path (``user.address.city``, list indices allowed). Missing
    fields read as None.
    """
    body = document_body(document)
    if field in body:
        return body[field]
    if "." not in field:
        return None

    current: Any = body
    for part in field.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return None
            current = current[part]
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return None
        else:
            return None

    return current

"""
PostBoard Backend — Validation Error Translation
==================================================

What:  Turns pydantic error lists into the field → messages map used by
       422 responses.
How:   The request location prefix ("body", "path", "query") is dropped so
       clients see bare field names. Nested locations are dot-joined.

Example:
    [{"loc": ("body", "email"), "msg": "value is not a valid email address: ..."}]
    → {"email": ["value is not a valid email address: ..."]}
"""

from typing import Any, Dict, Iterable, List, Mapping

REQUEST_LOCATIONS = {"body", "path", "query", "header", "cookie"}

# Message prefix pydantic adds to errors raised from custom validators
_VALUE_ERROR_PREFIX = "Value error, "


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]
    # Whole-body errors (missing or non-object JSON) have no field part
    return ".".join(parts) or "body"


def _clean_message(msg: str) -> str:
    if msg.startswith(_VALUE_ERROR_PREFIX):
        return msg[len(_VALUE_ERROR_PREFIX):]
    return msg


def field_errors(errors: Iterable[Mapping[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic/FastAPI error dicts by field, preserving order."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = _clean_message(str(error.get("msg", "Invalid value")))
        messages = grouped.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return grouped

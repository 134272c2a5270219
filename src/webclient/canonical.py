"""Deterministic rendering of JSON documents.

Only the keys of the outermost object are sorted by default; nested
objects keep the order they were received in. Pass recursive=True to sort
every object in the document.
"""

import json
import logging
from typing import Any

from webclient.error import NotAnObjectError

logger = logging.getLogger(__name__)

INDENT = 2


def loads(text: str) -> Any:
    """Parse a JSON document, refusing the NaN, Infinity and -Infinity
    constants that json.loads accepts by default.

    Raises:
        json.JSONDecodeError: if text is not standard JSON.
    """

    def reject_constant(name: str):
        raise json.JSONDecodeError(
            f"Invalid constant {name!r}", text, max(text.find(name), 0)
        )

    return json.loads(text, parse_constant=reject_constant)


def canonicalize(value: Any, recursive: bool = False) -> str:
    """Pretty-print a JSON object with its keys in code point order.

    Raises:
        NotAnObjectError: if value is not a JSON object.
    """
    if not isinstance(value, dict):
        raise NotAnObjectError(
            f"cannot sort keys of a JSON {_json_type_name(value)}"
        )
    ordered = {key: value[key] for key in sorted(value)}
    return json.dumps(
        ordered, indent=INDENT, ensure_ascii=False, sort_keys=recursive
    )


def render_body(text: str, recursive: bool = False) -> str:
    """Returns the canonical form of a JSON object body, or the body
    unchanged if it is not a JSON object."""
    try:
        value = loads(text)
    except ValueError:
        logger.debug("response body is not JSON, printing it as is")
        return text
    try:
        return canonicalize(value, recursive=recursive)
    except NotAnObjectError as e:
        logger.debug("%s, printing response body as is", e)
        return text


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, list):
        return "array"
    return type(value).__name__

"""Extraction of JSON objects embedded in HTML pages and inline scripts."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ..errors import SchemaError

INITIAL_STATE_MARKER = "window.__INITIAL_STATE__"


def find_object_span(text: str, start: int) -> tuple[int, int]:
    """Returns ``(begin, end)`` of the balanced ``{...}`` starting at or after ``start``.

    Braces inside JSON string literals are ignored.
    """

    begin = text.find("{", start)
    if begin < 0:
        raise SchemaError("no JSON object found after marker")

    depth = 0
    in_string = False
    escaped = False
    for index in range(begin, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return begin, index + 1
    raise SchemaError("embedded JSON object is not terminated")


def extract_json_object(text: str, marker: Optional[str] = None) -> Dict[str, Any]:
    """Decodes the first JSON object following ``marker`` (or the start of ``text``)."""

    start = 0
    if marker:
        position = text.find(marker)
        if position < 0:
            raise SchemaError(f"marker {marker!r} not found in page")
        start = position + len(marker)

    begin, end = find_object_span(text, start)
    try:
        data = json.loads(text[begin:end])
    except ValueError as exc:
        logging.debug("Embedded JSON failed to decode: %.200s", text[begin:end])
        raise SchemaError("embedded JSON could not be decoded") from exc
    return data

from __future__ import annotations

import json
from typing import Any


def balanced_end(raw: str, start: int) -> int | None:
    """Index of the `}` closing the `{` at `start`, or None if it never closes.

    Braces inside JSON string literals do not count towards the balance.
    """
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(raw)):
        c = raw[i]
        if in_string:
            if escaped:
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == '"':
                in_string = False
            continue
        if c == '"':
            in_string = True
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_object(raw: str | None) -> dict[str, Any] | None:
    """
    Return the first balanced `{...}` span of a model reply that parses as a
    JSON object. Prose and ``` fences around it are ignored.

    A span that balances but does not parse is skipped as a whole, so a broken
    top-level object never yields one of its nested objects instead.
    """
    if not raw:
        return None
    pos = raw.find("{")
    while pos != -1:
        end = balanced_end(raw, pos)
        if end is None:
            pos = raw.find("{", pos + 1)
            continue
        try:
            value = json.loads(raw[pos : end + 1])
        except ValueError:
            value = None
        if isinstance(value, dict):
            return value
        pos = raw.find("{", end + 1)
    return None

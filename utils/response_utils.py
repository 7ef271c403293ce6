"""Tolerant parsing for REST response bodies that are not clean JSON.

Some WordPress hosts prepend PHP notices or plugin output to the JSON body,
and a few endpoints answer with an empty body. `robust_parse_text` handles:
- an empty body (returns None)
- normal JSON (json.loads)
- NDJSON (one JSON value per line, returns a list or a single value)
- noise before or after a JSON value (scans for the first decodable object or array)
- anything else is returned as the original text
"""
from __future__ import annotations

import json
from typing import Any


def robust_parse_text(text: str) -> Any:
    """Parse `text` as JSON as best we can, falling back to the raw text."""
    if not text or not text.strip():
        return None

    try:
        return json.loads(text)
    except ValueError:
        pass

    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) > 1:
        try:
            return [json.loads(ln) for ln in lines]
        except ValueError:
            pass

    # PHP warnings usually come first, so look for the first '{' or '['
    decoder = json.JSONDecoder()
    for idx, ch in enumerate(text):
        if ch not in "{[":
            continue
        try:
            obj, _ = decoder.raw_decode(text, idx)
            return obj
        except ValueError:
            continue

    return text

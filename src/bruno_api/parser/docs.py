"""Example payload extraction from a `docs` block."""

import json
import re
from typing import Any

FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)
BARE_JSON_START = re.compile(r"^[ \t]*[\[{]", re.MULTILINE)

_decoder = json.JSONDecoder()


def extract_json_from_docs(docs: str | None) -> Any | None:
    """Return the example JSON value embedded in a docs block, or None.

    Tries a fenced ```json block, then the whole text, then every line that
    opens a bare object or array after some prose, first decodable one wins.
    """
    if not docs:
        return None

    match = FENCED_JSON.search(docs)
    if match:
        return _loads(match.group(1))

    value = _loads(docs)
    if value is not None:
        return value

    for start in BARE_JSON_START.finditer(docs):
        try:
            value, _ = _decoder.raw_decode(docs[start.start():].lstrip())
        except (json.JSONDecodeError, RecursionError):
            continue
        return value
    return None


def _loads(text: str) -> Any | None:
    try:
        return json.loads(text.strip())
    except (json.JSONDecodeError, RecursionError):
        return None

"""Bruno .bru request file parser.

A single forward scan over lines. At most one block is open at a time; the
only state inside a block is the code-fence toggle of `docs`. Malformed
input never raises: unknown lines outside a block are dropped and an
unterminated block captures everything up to the end of the file.
"""

import re
from enum import Enum
from pathlib import Path

from .base import ParsedBruFile

METHOD_LINE = re.compile(r"^(get|post|put|patch|delete|head|options)\s+(.+)$", re.IGNORECASE)
CODE_FENCES = ("```", "```json")


class Block(str, Enum):
    META = "meta"
    HTTP = "http"
    HEADERS = "headers"
    BODY = "body"
    DOCS = "docs"
    SCRIPT_PRE = "script:pre"
    SCRIPT_POST = "script:post"
    TESTS = "tests"


BLOCK_OPENERS = {
    "meta {": Block.META,
    "headers {": Block.HEADERS,
    "body:json {": Block.BODY,
    "docs {": Block.DOCS,
    "script:pre-request {": Block.SCRIPT_PRE,
    "script:post-response {": Block.SCRIPT_POST,
    "tests {": Block.TESTS,
}

# Blocks holding only `key: value` lines close on any `}` line, indented or not.
PAIR_BLOCKS = frozenset({Block.META, Block.HTTP, Block.HEADERS})
LEADING_INT = re.compile(r"[+-]?\d+")


def parse_bru_file(file_path: Path) -> ParsedBruFile:
    """Read and parse one .bru file.

    Raises OSError / UnicodeDecodeError when the file cannot be read; the
    content itself never causes an error.
    """
    text = file_path.read_text(encoding="utf-8")
    return parse_bru(text)


def parse_bru(text: str) -> ParsedBruFile:
    """Parse the raw text of a .bru file into a ParsedBruFile."""
    fields: dict = {"request": {"method": "GET", "url": ""}}
    current: Block | None = None
    lines: list[str] = []
    in_fence = False

    for line in text.splitlines():
        stripped = line.strip()

        if current is None:
            if stripped in BLOCK_OPENERS:
                current = BLOCK_OPENERS[stripped]
                lines = []
                in_fence = False
                continue
            match = METHOD_LINE.match(stripped)
            if match:
                fields["request"]["method"] = match.group(1).upper()
                remainder = match.group(2).strip()
                if remainder == "{":
                    current = Block.HTTP
                    lines = []
                else:
                    fields["request"]["url"] = remainder
            continue

        # Checked before the fence toggle: an open fence does not protect it.
        closing = stripped if current in PAIR_BLOCKS else line.rstrip()
        if closing == "}":
            _commit_block(fields, current, lines)
            current = None
            lines = []
            continue

        if current is Block.DOCS and stripped in CODE_FENCES:
            in_fence = not in_fence
            continue

        lines.append(line)

    if current is not None:
        _commit_block(fields, current, lines)

    return ParsedBruFile(**fields)


def _commit_block(fields: dict, block: Block, lines: list[str]) -> None:
    if block is Block.META:
        fields["meta"] = _parse_meta(lines)
    elif block is Block.HTTP:
        url = _parse_pairs(lines).get("url")
        if url:
            fields["request"]["url"] = url
    elif block is Block.HEADERS:
        fields["headers"] = _parse_pairs(lines)
    elif block is Block.BODY:
        fields["body"] = {"kind": "json", "raw_content": _join(lines)}
    elif block is Block.DOCS:
        fields["docs"] = _join(lines)
    elif block is Block.SCRIPT_PRE:
        fields.setdefault("scripts", {})["pre"] = _join(lines)
    elif block is Block.SCRIPT_POST:
        fields.setdefault("scripts", {})["post"] = _join(lines)
    elif block is Block.TESTS:
        fields["tests"] = _join(lines)


def _parse_meta(lines: list[str]) -> dict:
    meta: dict = {}
    for key, value in _parse_pairs(lines).items():
        if key == "name":
            meta["name"] = value
        elif key == "type":
            meta["request_type"] = value
        elif key == "seq":
            meta["seq"] = _parse_int(value)
        elif key == "done":
            meta["done"] = value.lower() == "true"
    return meta


def _parse_pairs(lines: list[str]) -> dict[str, str]:
    """Split `key: value` lines on the first colon, keeping declaration order."""
    pairs: dict[str, str] = {}
    for line in lines:
        stripped = line.strip()
        colon = stripped.find(":")
        if colon > 0:
            pairs[stripped[:colon].strip()] = stripped[colon + 1:].strip()
    return pairs


def _parse_int(value: str) -> int | None:
    match = LEADING_INT.match(value)
    return int(match.group()) if match else None


def _join(lines: list[str]) -> str:
    return "\n".join(lines).strip()

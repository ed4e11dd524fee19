"""
Report payload <-> Notion code blocks.

A report's JSON is stored as consecutive `code` blocks of at most
FRAGMENT_SIZE characters (Notion's rich-text content limit). Notion measures
length in UTF-16 code units, so an astral character such as an emoji counts
twice and is never split across two fragments. Reading joins the
text of every code block in stored order and skips all other block types, so
both the split size and the block order are part of the format.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping

FRAGMENT_SIZE = 2000
FRAGMENT_BLOCK_TYPE = "code"


def serialize_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _units(char: str) -> int:
    return 2 if ord(char) > 0xFFFF else 1


def utf16_length(text: str) -> int:
    return sum(_units(c) for c in text)


def split_fragments(text: str, size: int = FRAGMENT_SIZE) -> List[str]:
    """Cut `text` into pieces of at most `size` UTF-16 code units."""
    if size < 1:
        raise ValueError("fragment size must be positive")
    fragments: list[str] = []
    start = 0
    used = 0
    for i, char in enumerate(text):
        width = _units(char)
        if used + width > size and i > start:
            fragments.append(text[start:i])
            start, used = i, 0
        used += width
    if start < len(text):
        fragments.append(text[start:])
    return fragments


def clip_text(text: str, limit: int = FRAGMENT_SIZE) -> str:
    if len(text) * 2 <= limit or utf16_length(text) <= limit:
        return text
    return split_fragments(text, limit)[0]


def rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def fragment_blocks(text: str, size: int = FRAGMENT_SIZE) -> List[dict[str, Any]]:
    return [
        {
            "object": "block",
            "type": FRAGMENT_BLOCK_TYPE,
            FRAGMENT_BLOCK_TYPE: {"rich_text": rich_text(fragment), "language": "json"},
        }
        for fragment in split_fragments(text, size)
    ]


def join_code_fragments(blocks: Iterable[Mapping[str, Any]]) -> str:
    parts: list[str] = []
    for block in blocks:
        if block.get("type") != FRAGMENT_BLOCK_TYPE:
            continue
        body = block.get(FRAGMENT_BLOCK_TYPE) or {}
        for item in body.get("rich_text") or []:
            # Notion fills plain_text on read; blocks built locally only carry text.content
            text = item.get("plain_text")
            if text is None:
                text = (item.get("text") or {}).get("content", "")
            parts.append(text or "")
    return "".join(parts)

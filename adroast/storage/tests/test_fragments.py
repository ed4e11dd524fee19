"""
Tests for fragments.py
"""
import json

import pytest

from adroast.storage.fragments import (
    FRAGMENT_SIZE,
    clip_text,
    fragment_blocks,
    join_code_fragments,
    serialize_payload,
    split_fragments,
    utf16_length,
)


def as_stored(blocks):
    """Shape locally built blocks the way Notion returns them (plain_text filled in)."""
    stored = []
    for block in blocks:
        block = json.loads(json.dumps(block))
        body = block.get(block["type"], {})
        for item in body.get("rich_text", []):
            item["plain_text"] = item["text"]["content"]
        stored.append(block)
    return stored


class TestSplitFragments:
    """Test fixed-size splitting"""

    def test_exact_multiple_has_no_empty_tail(self):
        text = "x" * (FRAGMENT_SIZE * 3)
        fragments = split_fragments(text)

        assert len(fragments) == 3
        assert all(len(f) == FRAGMENT_SIZE for f in fragments)
        assert "".join(fragments) == text

    def test_remainder_goes_to_last_fragment(self):
        text = "y" * (FRAGMENT_SIZE * 2 + 17)
        fragments = split_fragments(text)

        assert [len(f) for f in fragments] == [FRAGMENT_SIZE, FRAGMENT_SIZE, 17]

    def test_short_and_empty(self):
        assert split_fragments("{}") == ["{}"]
        assert split_fragments("") == []

    def test_size_counts_characters_not_bytes(self):
        text = "é" * (FRAGMENT_SIZE + 1)
        fragments = split_fragments(text)
        assert [len(f) for f in fragments] == [FRAGMENT_SIZE, 1]

    def test_astral_characters_count_as_two_units(self):
        text = "🔥" * 1500
        fragments = split_fragments(text)

        assert [utf16_length(f) for f in fragments] == [FRAGMENT_SIZE, 1000]
        assert "".join(fragments) == text

    def test_surrogate_pair_is_never_split(self):
        text = "a" + "😀" * 3
        fragments = split_fragments(text, size=4)

        assert fragments == ["a😀", "😀😀"]

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            split_fragments("abc", size=0)


class TestFragmentBlocks:
    """Test the code-block encoding and its reassembly"""

    def test_blocks_are_json_code_blocks(self):
        blocks = fragment_blocks("a" * 2500)

        assert [b["type"] for b in blocks] == ["code", "code"]
        assert blocks[0]["code"]["language"] == "json"
        assert blocks[0]["code"]["rich_text"][0]["text"]["content"] == "a" * FRAGMENT_SIZE

    def test_round_trip_skips_other_block_types(self):
        payload = {"result": {"icp_mismatch": "ünïcode ✓ " * 400, "overall_score": 4}, "icp": "CFOs"}
        text = serialize_payload(payload)
        blocks = as_stored(fragment_blocks(text))
        blocks.insert(1, {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "noise"}]}})
        blocks.append({"type": "divider", "divider": {}})
        blocks.append({"type": "heading_2", "heading_2": {"rich_text": [{"plain_text": "Scores"}]}})

        joined = join_code_fragments(blocks)

        assert joined == text
        assert json.loads(joined) == payload

    @pytest.mark.parametrize("size", [1, 7, 64, FRAGMENT_SIZE])
    def test_round_trip_independent_of_fragment_size(self, size):
        text = serialize_payload({"next_steps": [f"step {i}" for i in range(50)]})
        assert join_code_fragments(fragment_blocks(text, size=size)) == text

    def test_order_is_load_bearing(self):
        text = serialize_payload({"k": "v" * 3000})
        blocks = fragment_blocks(text)
        assert join_code_fragments(list(reversed(blocks))) != text

    def test_multiple_rich_text_items_per_block(self):
        block = {"type": "code", "code": {"rich_text": [{"plain_text": '{"a":'}, {"plain_text": "1}"}]}}
        assert join_code_fragments([block]) == '{"a":1}'


def test_serialize_payload_is_compact_utf8():
    assert serialize_payload({"a": [1, 2], "b": "é"}) == '{"a":[1,2],"b":"é"}'


def test_utf16_length():
    assert utf16_length("abc") == 3
    assert utf16_length("é✓") == 2
    assert utf16_length("🔥a") == 3


def test_clip_text():
    assert clip_text("short") == "short"
    assert clip_text("x" * 2500) == "x" * FRAGMENT_SIZE
    assert clip_text("a🔥🔥", limit=4) == "a🔥"

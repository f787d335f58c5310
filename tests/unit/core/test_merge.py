"""Unit tests for core/merge.py"""

from noteblocks.core.merge import merge
from noteblocks.core.models import Block, BlockType


def _b(i, block_type, content=""):
    return Block(id=f"block-{i}", type=block_type, content=content)


def test_drops_empty_blocks_but_keeps_dividers():
    blocks = [_b(0, BlockType.paragraph), _b(1, BlockType.divider), _b(2, BlockType.code)]
    assert [b.type for b in merge(blocks)] == [BlockType.divider]


def test_collapses_adjacent_duplicates():
    """Only the first of a run of identical (type, content) blocks survives."""
    blocks = [_b(0, BlockType.paragraph, "x"), _b(1, BlockType.paragraph, "x"), _b(2, BlockType.paragraph, "y")]
    assert [b.id for b in merge(blocks)] == ["block-0", "block-2"]


def test_keeps_non_adjacent_duplicates():
    blocks = [_b(0, BlockType.paragraph, "x"), _b(1, BlockType.paragraph, "y"), _b(2, BlockType.paragraph, "x")]
    assert len(merge(blocks)) == 3


def test_same_content_different_type_kept():
    blocks = [_b(0, BlockType.paragraph, "x"), _b(1, BlockType.heading3, "x")]
    assert len(merge(blocks)) == 2


def test_duplicate_separated_by_empty_block_collapses():
    """Dropped empties do not count as a separator."""
    blocks = [_b(0, BlockType.bullet, "x"), _b(1, BlockType.bullet, ""), _b(2, BlockType.bullet, "x")]
    assert [b.id for b in merge(blocks)] == ["block-0"]


def test_adjacent_dividers_collapse():
    blocks = [_b(0, BlockType.divider), _b(1, BlockType.divider)]
    assert len(merge(blocks)) == 1


def test_merge_is_idempotent():
    blocks = [
        _b(0, BlockType.heading1, "T"), _b(1, BlockType.heading1, "T"),
        _b(2, BlockType.paragraph), _b(3, BlockType.divider), _b(4, BlockType.paragraph, "p"),
    ]
    once = merge(blocks)
    assert merge(once) == once


def test_merge_returns_new_list():
    blocks = [_b(0, BlockType.paragraph, "x")]
    merged = merge(blocks)
    assert merged == blocks
    assert merged is not blocks

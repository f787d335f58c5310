"""Unit tests for core/scan.py"""

from noteblocks.core.models import BlockType
from noteblocks.core.scan import scan_lines


def _shape(blocks):
    return [(b.type, b.content) for b in blocks]


def test_heading_and_paragraph():
    """Blank lines are skipped between classified lines."""
    blocks = scan_lines("# Title\n\nSome text")
    assert _shape(blocks) == [(BlockType.heading1, "Title"), (BlockType.paragraph, "Some text")]


def test_ids_follow_parse_order():
    """Ids are unique and increase in parse order."""
    blocks = scan_lines("a\nb\nc")
    assert [b.id for b in blocks] == ["block-0", "block-1", "block-2"]


def test_numbered_renumbers_consecutive_items():
    """Consecutive numbered lines count 1, 2, 3 whatever their literal prefix."""
    blocks = scan_lines("1. a\n1. b\n1. c")
    assert [b.number for b in blocks] == [1, 2, 3]


def test_numbered_counter_resets_on_other_block():
    """Any non-numbered block restarts the count."""
    blocks = scan_lines("1. a\n2. b\ntext\n5. c")
    assert [(b.type, b.number) for b in blocks] == [
        (BlockType.numbered, 1),
        (BlockType.numbered, 2),
        (BlockType.paragraph, None),
        (BlockType.numbered, 1),
    ]


def test_blank_line_does_not_reset_counter():
    blocks = scan_lines("1. a\n\n2. b")
    assert [b.number for b in blocks] == [1, 2]


def test_code_block_resets_counter():
    blocks = scan_lines("1. a\n```\nx\n```\n1. b")
    assert [(b.type, b.number) for b in blocks] == [
        (BlockType.numbered, 1), (BlockType.code, None), (BlockType.numbered, 1),
    ]


def test_fenced_code():
    blocks = scan_lines("```\ncode line\n```")
    assert _shape(blocks) == [(BlockType.code, "code line")]


def test_fenced_lines_kept_verbatim():
    """Lines inside a fence are buffered as-is and never classified."""
    blocks = scan_lines("```python\n  x = 1\n# not a heading\n\n- not a bullet\n```")
    assert _shape(blocks) == [(BlockType.code, "  x = 1\n# not a heading\n\n- not a bullet")]


def test_unclosed_fence_is_flushed():
    """An unterminated fence still yields its buffered code."""
    blocks = scan_lines("```\nabc")
    assert _shape(blocks) == [(BlockType.code, "abc")]


def test_empty_fence_yields_empty_code_before_merge():
    """The scanner emits the empty block; the merger is what drops it."""
    blocks = scan_lines("```\n```")
    assert _shape(blocks) == [(BlockType.code, "")]


def test_todos():
    blocks = scan_lines("- [ ] buy milk\n- [x] done")
    assert [(b.type, b.content, b.checked) for b in blocks] == [
        (BlockType.todo, "buy milk", False),
        (BlockType.todo, "done", True),
    ]


def test_crlf_newlines():
    """Windows and old-Mac line endings split the same as \\n."""
    assert _shape(scan_lines("# A\r\nb\rc")) == [
        (BlockType.heading1, "A"), (BlockType.paragraph, "b"), (BlockType.paragraph, "c"),
    ]


def test_nested_bullets_keep_indent():
    blocks = scan_lines("- top\n  - child\n    - grandchild")
    assert [b.indent_level for b in blocks] == [0, 1, 2]

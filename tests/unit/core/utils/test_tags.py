"""Unit tests for core/utils/tags.py"""

import pytest

from noteblocks.core.utils.tags import extract_tags, extract_tags_with_positions


def test_extract_tags_plain_text():
    assert extract_tags("Plan #Work and #home-office, then #work again") == ["work", "home-office"]


def test_extract_tags_from_html():
    """Tags are read from text content, not attributes."""
    html = '<p>see <span class="inline-tag">#Ideas</span></p><a href="#anchor">link</a>'
    assert extract_tags(html) == ["ideas"]


def test_extract_tags_stop_at_element_boundaries():
    """Text from adjacent elements does not run into a preceding tag."""
    assert extract_tags("<li>#todo</li><li>later</li><p>#next</p>") == ["todo", "next"]


@pytest.mark.parametrize("content", [None, "", "no tags here", 12])
def test_extract_tags_empty(content):
    assert extract_tags(content) == []


def test_extract_tags_with_positions():
    assert extract_tags_with_positions("a #One b #two") == [
        {"tag": "one", "start": 2, "end": 6},
        {"tag": "two", "start": 9, "end": 13},
    ]

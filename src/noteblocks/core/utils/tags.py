"""Hashtag extraction from plain-text or HTML note content"""

import re

from noteblocks.core.parse import looks_like_markup, parse_html


TAG_RE = re.compile(r'#[\w-]+')


def extract_tags(content: str) -> list[str]:
    """Return unique lowercase hashtags (without '#') in first-seen order."""
    if not content or not isinstance(content, str):
        return []
    text = parse_html(content).get_text(" ") if looks_like_markup(content) else content
    return list(dict.fromkeys(m.group(0)[1:].lower() for m in TAG_RE.finditer(text)))


def extract_tags_with_positions(content: str) -> list[dict]:
    """Return [{tag, start, end}] for every hashtag occurrence in raw content."""
    if not content or not isinstance(content, str):
        return []
    return [
        {"tag": m.group(0)[1:].lower(), "start": m.start(), "end": m.end()}
        for m in TAG_RE.finditer(content)
    ]

"""Markup detection, tree construction (BeautifulSoup / markdown-it), and note file discovery"""

import re
from pathlib import Path

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


MARKUP_RE = re.compile(r'<[a-z][\s\S]*>', re.IGNORECASE)
NOTE_EXTENSIONS = {'.md', '.txt', '.html', '.htm'}


def looks_like_markup(text: str) -> bool:
    """True when text contains an angle-bracket tag pattern."""
    return isinstance(text, str) and bool(MARKUP_RE.search(text))


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a BeautifulSoup tree (html.parser builder)."""
    return BeautifulSoup(html, 'html.parser')


def parse_markdown(text: str, parser_config: str = 'gfm-like') -> SyntaxTreeNode:
    """Tokenize Markdown with markdown-it and nest the tokens into a tree.

    Setext underlines are disabled so "text\\n---" reads as a paragraph and a
    divider, the same as the line scanner.
    """
    md = _make_parser(parser_config).disable('lheading')
    return SyntaxTreeNode(md.parse(text))


def discover_files(path: Path) -> list[Path]:
    """Return sorted note files under path, or [path] if a single note file."""
    if path.is_file():
        return [path] if path.suffix.lower() in NOTE_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in NOTE_EXTENSIONS)

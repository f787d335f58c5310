"""Markup-tree adapters: the four operations the walker needs from any tree

A tree is walkable when something can answer tag_name, attributes, children
and text_content for its nodes. Text nodes report the tag name '#text'.
"""

from typing import Any, Mapping, Protocol, Sequence

from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag
from markdown_it.tree import SyntaxTreeNode


TEXT_TAG = '#text'


class TreeAdapter(Protocol):
    def tag_name(self, node: Any) -> str: ...

    def attributes(self, node: Any) -> Mapping[str, str]: ...

    def children(self, node: Any) -> Sequence[Any]: ...

    def text_content(self, node: Any, strip: bool = True) -> str: ...


class SoupAdapter:
    """Adapter over a BeautifulSoup document (html.parser)."""

    _SKIPPED = (Comment, Declaration, Doctype, ProcessingInstruction)

    def tag_name(self, node) -> str:
        if isinstance(node, Tag):
            return node.name.lower()
        return TEXT_TAG

    def attributes(self, node) -> dict[str, str]:
        if not isinstance(node, Tag):
            return {}
        # multi-valued attributes (class, rel) come back as lists
        return {
            k: ' '.join(v) if isinstance(v, (list, tuple)) else str(v)
            for k, v in node.attrs.items()
        }

    def children(self, node) -> list:
        if not isinstance(node, Tag):
            return []
        return [c for c in node.children if not isinstance(c, self._SKIPPED)]

    def text_content(self, node, strip: bool = True) -> str:
        if isinstance(node, NavigableString):
            text = str(node)
        else:
            text = node.get_text()
        return text.strip() if strip else text


class MarkdownItAdapter:
    """Adapter over a markdown-it SyntaxTreeNode tree.

    Node types are mapped onto HTML tag names so Markdown and HTML share one
    walker: fences become 'pre', soft/hard breaks become 'br'.
    """

    _TEXT_TYPES = {'text', 'code_inline', 'html_inline', 'html_block', 'fence', 'code_block'}

    def tag_name(self, node: SyntaxTreeNode) -> str:
        if node.type in ('fence', 'code_block'):
            return 'pre'
        if node.type in ('softbreak', 'hardbreak'):
            return 'br'
        if node.type in ('text', 'html_inline'):
            return TEXT_TAG
        if node.type == 'inline':
            return 'span'
        if node.type == 'root':
            return '#root'
        return node.tag or node.type

    def attributes(self, node: SyntaxTreeNode) -> dict[str, str]:
        return {str(k): str(v) for k, v in (node.attrs or {}).items()}

    def children(self, node: SyntaxTreeNode) -> list[SyntaxTreeNode]:
        return list(node.children)

    def _text(self, node: SyntaxTreeNode) -> str:
        if node.type in self._TEXT_TYPES:
            return node.content
        if node.type in ('softbreak', 'hardbreak'):
            return '\n'
        return ''.join(self._text(c) for c in node.children)

    def text_content(self, node: SyntaxTreeNode, strip: bool = True) -> str:
        text = self._text(node)
        return text.strip() if strip else text


class DictAdapter:
    """Adapter over an in-memory AST of dicts and strings.

    Element nodes look like {"tag": "p", "attrs": {...}, "children": [...]};
    plain strings are text nodes.
    """

    def tag_name(self, node) -> str:
        if isinstance(node, str):
            return TEXT_TAG
        return str(node.get('tag', '')).lower()

    def attributes(self, node) -> dict[str, str]:
        if isinstance(node, str):
            return {}
        return {str(k): str(v) for k, v in (node.get('attrs') or {}).items()}

    def children(self, node) -> list:
        if isinstance(node, str):
            return []
        return list(node.get('children') or [])

    def _text(self, node) -> str:
        if isinstance(node, str):
            return node
        return ''.join(self._text(c) for c in self.children(node))

    def text_content(self, node, strip: bool = True) -> str:
        text = self._text(node)
        return text.strip() if strip else text


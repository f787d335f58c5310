"""Markup tree walker: emits blocks per node kind through a TreeAdapter"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from noteblocks.core.adapters import TEXT_TAG, TreeAdapter
from noteblocks.core.detect import classify, is_all_caps
from noteblocks.core.models import Block, BlockType
from noteblocks.core.sequence import BlockEmitter


logger = logging.getLogger(__name__)

BRACKETED_RE = re.compile(r'^\[(.+)\]$')
TASK_MARKER_RE = re.compile(r'^\[([ xX])\]\s+')


class NodeKind(Enum):
    """Closed set of node kinds the walker understands; UNKNOWN is the fallback arm."""
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    BLOCKQUOTE = "blockquote"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    RULE = "rule"
    PARAGRAPH = "paragraph"
    LINE_BREAK = "line_break"
    EMPHASIS = "emphasis"
    INLINE_TAG = "inline_tag"
    TEXT = "text"
    IGNORED = "ignored"
    UNKNOWN = "unknown"


TAG_KINDS: dict[str, NodeKind] = {
    'h1':         NodeKind.HEADING1,
    'h2':         NodeKind.HEADING2,
    'h3':         NodeKind.HEADING3,
    'blockquote': NodeKind.BLOCKQUOTE,
    'ul':         NodeKind.UNORDERED_LIST,
    'ol':         NodeKind.ORDERED_LIST,
    'li':         NodeKind.LIST_ITEM,
    'pre':        NodeKind.CODE_BLOCK,
    'code':       NodeKind.INLINE_CODE,
    'hr':         NodeKind.RULE,
    'p':          NodeKind.PARAGRAPH,
    'div':        NodeKind.PARAGRAPH,
    'section':    NodeKind.PARAGRAPH,
    'article':    NodeKind.PARAGRAPH,
    'main':       NodeKind.PARAGRAPH,
    'header':     NodeKind.PARAGRAPH,
    'footer':     NodeKind.PARAGRAPH,
    'body':       NodeKind.PARAGRAPH,
    'html':       NodeKind.PARAGRAPH,
    'br':         NodeKind.LINE_BREAK,
    'strong':     NodeKind.EMPHASIS,
    'b':          NodeKind.EMPHASIS,
    'em':         NodeKind.EMPHASIS,
    'i':          NodeKind.EMPHASIS,
    TEXT_TAG:     NodeKind.TEXT,
    'head':       NodeKind.IGNORED,
    'script':     NodeKind.IGNORED,
    'style':      NodeKind.IGNORED,
    'template':   NodeKind.IGNORED,
}

BLOCK_KINDS = frozenset({
    NodeKind.HEADING1, NodeKind.HEADING2, NodeKind.HEADING3, NodeKind.BLOCKQUOTE,
    NodeKind.UNORDERED_LIST, NodeKind.ORDERED_LIST, NodeKind.CODE_BLOCK,
    NodeKind.RULE, NodeKind.PARAGRAPH,
})
LIST_KINDS = frozenset({NodeKind.UNORDERED_LIST, NodeKind.ORDERED_LIST})
# kinds after which the running numbered counter restarts
RESETTING_KINDS = BLOCK_KINDS - {NodeKind.PARAGRAPH} | {NodeKind.INLINE_CODE, NodeKind.INLINE_TAG}


def node_kind(tag: str, attrs: Mapping[str, str]) -> NodeKind:
    """Map a tag name and its attributes onto a NodeKind."""
    if attrs.get('data-type') == 'codeBlock':
        return NodeKind.CODE_BLOCK
    if tag == 'span' and 'inline-tag' in attrs.get('class', '').split():
        return NodeKind.INLINE_TAG
    return TAG_KINDS.get(tag, NodeKind.UNKNOWN)


def strong_line_block(text: str) -> Block:
    """Classify a line whose visible runs are all emphasized."""
    if is_all_caps(text):
        return Block(type=BlockType.heading2, content=text)
    m = BRACKETED_RE.match(text)
    if m:
        return Block(type=BlockType.heading3, content=m.group(1).strip())
    # label-style and any other emphasized line both read as a small heading
    return Block(type=BlockType.heading3, content=text)


class _Walker:
    def __init__(self, adapter: TreeAdapter):
        self.adapter = adapter
        self.emitter = BlockEmitter()
        self.handlers: dict[NodeKind, Callable[[Any], None]] = {
            NodeKind.HEADING1:       lambda n: self._fixed(BlockType.heading1, n),
            NodeKind.HEADING2:       lambda n: self._fixed(BlockType.heading2, n),
            NodeKind.HEADING3:       lambda n: self._fixed(BlockType.heading3, n),
            NodeKind.BLOCKQUOTE:     lambda n: self._fixed(BlockType.blockquote, n),
            NodeKind.UNORDERED_LIST: lambda n: self._unordered(n, 0),
            NodeKind.ORDERED_LIST:   lambda n: self._ordered(n, 0),
            NodeKind.CODE_BLOCK:     self._code,
            NodeKind.INLINE_CODE:    self._code,
            NodeKind.RULE:           lambda n: self.emitter.emit_fixed(Block(type=BlockType.divider)),
            NodeKind.PARAGRAPH:      self._paragraph,
            NodeKind.LINE_BREAK:     lambda n: None,
            NodeKind.INLINE_TAG:     lambda n: self._fixed(BlockType.tag, n),
            NodeKind.TEXT:           self._detect,
            NodeKind.IGNORED:        lambda n: None,
        }

    def kind(self, node) -> NodeKind:
        return node_kind(self.adapter.tag_name(node), self.adapter.attributes(node))

    def visit(self, node) -> None:
        kind = self.kind(node)
        handler = self.handlers.get(kind)
        if handler is None:
            logger.debug("Falling back to text extraction for <%s>", self.adapter.tag_name(node))
            handler = self._detect
        handler(node)
        if kind in RESETTING_KINDS:
            self.emitter.reset_counter()

    # --- leaf handlers ---

    def _fixed(self, block_type: BlockType, node) -> None:
        self.emitter.emit_fixed(Block(type=block_type, content=self.adapter.text_content(node)))

    def _detect(self, node) -> None:
        block = classify(self.adapter.text_content(node))
        if block is not None:
            self.emitter.emit(block)

    def _code(self, node) -> None:
        text = self.adapter.text_content(node, strip=False).strip('\n')
        self.emitter.emit_fixed(Block(type=BlockType.code, content=text if text.strip() else ''))

    # --- lists ---

    def _find(self, node, predicate: Callable[[Any], bool]) -> Optional[Any]:
        """Depth-first search for the first descendant matching predicate."""
        for child in self.adapter.children(node):
            if predicate(child):
                return child
            found = self._find(child, predicate)
            if found is not None:
                return found
        return None

    def _nested_lists(self, item) -> list:
        """Lists nested anywhere inside an item, without descending into them."""
        found = []
        for child in self.adapter.children(item):
            if self.kind(child) in LIST_KINDS:
                found.append(child)
            else:
                found.extend(self._nested_lists(child))
        return found

    def _list(self, node, depth: int) -> None:
        if self.kind(node) == NodeKind.ORDERED_LIST:
            self._ordered(node, depth)
        else:
            self._unordered(node, depth)

    def _list_items(self, node, depth: int):
        """Yield direct list items; nested lists recurse, stray nodes are visited."""
        for child in self.adapter.children(node):
            kind = self.kind(child)
            if kind == NodeKind.LIST_ITEM:
                nested = self._nested_lists(child)
                if nested:
                    for sub in nested:
                        self._list(sub, depth + 1)
                    continue
                yield child
            elif kind in LIST_KINDS:
                self._list(child, depth + 1)
            elif kind == NodeKind.TEXT and not self.adapter.text_content(child):
                continue
            else:
                self.visit(child)

    def _checkbox(self, item) -> Optional[Any]:
        def is_checkbox(n) -> bool:
            attrs = self.adapter.attributes(n)
            return self.adapter.tag_name(n) == 'input' and attrs.get('type', '').lower() == 'checkbox'
        return self._find(item, is_checkbox)

    def _todo(self, item, checkbox) -> Block:
        attrs = self.adapter.attributes(item)
        checked = attrs.get('data-checked') == 'true' or (
            checkbox is not None and 'checked' in self.adapter.attributes(checkbox)
        )
        body = self._find(item, lambda n: self.adapter.tag_name(n) in ('div', 'p')) or item
        return Block(type=BlockType.todo, content=self.adapter.text_content(body), checked=checked)

    def _unordered(self, node, depth: int) -> None:
        task_list = self.adapter.attributes(node).get('data-type') == 'taskList'
        for item in self._list_items(node, depth):
            attrs = self.adapter.attributes(item)
            checkbox = self._checkbox(item)
            if task_list or attrs.get('data-type') == 'taskItem' or 'data-checked' in attrs or checkbox is not None:
                self.emitter.emit_fixed(self._todo(item, checkbox))
                continue
            text = self.adapter.text_content(item)
            m = TASK_MARKER_RE.match(text)
            if m:
                # Markdown task item: "- [ ] text" parsed as a plain list item
                self.emitter.emit_fixed(Block(
                    type=BlockType.todo,
                    content=text[m.end():].strip(),
                    checked=m.group(1) != ' ',
                ))
            else:
                self.emitter.emit_fixed(Block(type=BlockType.bullet, content=text, indent_level=depth))

    def _ordered(self, node, depth: int) -> None:
        try:
            counter = max(int(self.adapter.attributes(node).get('start', 1)), 1) - 1
        except ValueError:
            counter = 0
        for item in self._list_items(node, depth):
            counter += 1
            self.emitter.emit_fixed(Block(
                type=BlockType.numbered,
                content=self.adapter.text_content(item),
                number=counter,
            ))

    # --- paragraphs ---

    def _inline_lines(self, node) -> tuple[list[list[tuple[str, bool]]], bool]:
        """Split a paragraph's inline runs at each line break.

        Returns (lines, has_break) where each line is a list of
        (text, inside_strong) runs.
        """
        lines: list[list[tuple[str, bool]]] = [[]]
        has_break = False

        def collect(n, strong: bool) -> None:
            nonlocal has_break
            kind = self.kind(n)
            children = self.adapter.children(n)
            if kind == NodeKind.LINE_BREAK:
                lines.append([])
                has_break = True
            elif kind == NodeKind.TEXT or not children:
                lines[-1].append((self.adapter.text_content(n, strip=False), strong))
            else:
                for c in children:
                    collect(c, strong or kind == NodeKind.EMPHASIS)

        for child in self.adapter.children(node):
            collect(child, False)
        return lines, has_break

    def _paragraph(self, node) -> None:
        children = self.adapter.children(node)
        if any(self.kind(c) in BLOCK_KINDS for c in children):
            for child in children:
                self.visit(child)
            return

        lines, has_break = self._inline_lines(node)
        if not has_break:
            self._detect(node)
            return

        for runs in lines:
            text = ''.join(t for t, _ in runs).strip()
            if not text:
                continue
            visible = [strong for t, strong in runs if t.strip()]
            if all(visible):
                self.emitter.emit(strong_line_block(text))
            else:
                block = classify(text)
                if block is not None:
                    self.emitter.emit(block)


def walk_tree(root, adapter: TreeAdapter) -> list[Block]:
    """Walk the children of root and return blocks in document order (pre-merge)."""
    walker = _Walker(adapter)
    for child in adapter.children(root):
        walker.visit(child)
    logger.debug("Walked markup tree into %d block(s)", len(walker.emitter.blocks))
    return walker.emitter.blocks

"""Heuristic line classifier: an ordered chain of (predicate, build) rules

Rule order is significant. Each pattern is anchored and the chain stops at
the first match, so a line never matches two rules. Do not reorder.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from noteblocks.core.models import Block, BlockType


DIVIDER_RE     = re.compile(r'^[-*_–—]{3,}$')
BOX_DIVIDER_RE = re.compile(r'^[─━═]{3,}$')
LABEL_RE       = re.compile(r'^[A-Z][a-z]+(?: [A-Za-z][a-z]*)?:')
BULLET_RE      = re.compile(r'^([ \t]*)[-•*] (.*)$')
NUMBERED_RE    = re.compile(r'^(\d+)\. (.*)$')
TODO_OPEN_RE   = re.compile(r'^-?\s*\[\s*\]\s*')
TODO_DONE_RE   = re.compile(r'^-?\s*\[x\]\s*', re.IGNORECASE)

FENCE = '```'
HEADING_PREFIXES = (
    ('### ', BlockType.heading3),
    ('## ',  BlockType.heading2),
    ('# ',   BlockType.heading1),
)


@dataclass(frozen=True)
class Rule:
    """A named classification step; build receives (raw line, stripped line)."""
    name:  str
    match: Callable[[str, str], bool]
    build: Callable[[str, str], Block]


def is_fence(line: str) -> bool:
    """True when a line opens or closes a fenced code region."""
    return line.strip().startswith(FENCE)


def is_divider(line: str) -> bool:
    return bool(DIVIDER_RE.match(line) or BOX_DIVIDER_RE.match(line))


def is_all_caps(line: str) -> bool:
    """Short shouted line: >=3 letters, length 4..99, no lowercase."""
    letters = ''.join(c for c in line if c.isalpha())
    return len(letters) >= 3 and 4 <= len(line) <= 99 and line.upper() == line


def is_label(line: str) -> bool:
    """'Capitalized Word:' style header shorter than 80 characters."""
    return len(line) < 80 and bool(LABEL_RE.match(line))


def _heading_prefix(line: str) -> Optional[tuple[str, BlockType]]:
    for prefix, block_type in HEADING_PREFIXES:
        if line.startswith(prefix):
            return prefix, block_type
    return None


def _build_heading(raw: str, line: str) -> Block:
    prefix, block_type = _heading_prefix(line)
    return Block(type=block_type, content=line[len(prefix):].strip())


def _build_quote(raw: str, line: str) -> Block:
    body = line[2:] if line.startswith('> ') else line[1:]
    return Block(type=BlockType.blockquote, content=body.strip())


def _is_todo(line: str) -> bool:
    lowered = line.lower()
    return lowered.startswith(('- [ ] ', '[ ] ', '- [x] ', '[x] '))


def _build_todo(raw: str, line: str) -> Block:
    if line.startswith(('- [ ] ', '[ ] ')):
        return Block(type=BlockType.todo, content=TODO_OPEN_RE.sub('', line, count=1).strip(), checked=False)
    return Block(type=BlockType.todo, content=TODO_DONE_RE.sub('', line, count=1).strip(), checked=True)


def _build_bullet(raw: str, line: str) -> Block:
    m = BULLET_RE.match(raw)
    return Block(type=BlockType.bullet, content=m.group(2).strip(), indent_level=len(m.group(1)) // 2)


def _build_numbered(raw: str, line: str) -> Block:
    m = NUMBERED_RE.match(line)
    return Block(type=BlockType.numbered, content=m.group(2).strip(), number=max(int(m.group(1)), 1))


RULES: tuple[Rule, ...] = (
    Rule('divider',    lambda raw, line: is_divider(line),
                       lambda raw, line: Block(type=BlockType.divider)),
    Rule('heading',    lambda raw, line: _heading_prefix(line) is not None, _build_heading),
    Rule('all_caps',   lambda raw, line: is_all_caps(line),
                       lambda raw, line: Block(type=BlockType.heading2, content=line)),
    Rule('label',      lambda raw, line: is_label(line),
                       lambda raw, line: Block(type=BlockType.heading3, content=line)),
    Rule('blockquote', lambda raw, line: line.startswith('>'), _build_quote),
    Rule('todo',       lambda raw, line: _is_todo(line), _build_todo),
    Rule('bullet',     lambda raw, line: bool(BULLET_RE.match(raw)), _build_bullet),
    Rule('numbered',   lambda raw, line: bool(NUMBERED_RE.match(line)), _build_numbered),
    Rule('fence',      lambda raw, line: line.startswith(FENCE),
                       lambda raw, line: Block(type=BlockType.code)),
    Rule('paragraph',  lambda raw, line: True,
                       lambda raw, line: Block(type=BlockType.paragraph, content=line)),
)


def classify(line: str) -> Optional[Block]:
    """Classify one line of text; returns None for blank lines.

    Leading whitespace is only consulted by the bullet rule (for indent
    level); every other rule sees the stripped line. The returned block has
    no id; callers assign one through a BlockEmitter.
    """
    raw = line.rstrip()
    stripped = raw.strip()
    if not stripped:
        return None
    for rule in RULES:
        if rule.match(raw, stripped):
            return rule.build(raw, stripped)
    return None  # unreachable: paragraph always matches

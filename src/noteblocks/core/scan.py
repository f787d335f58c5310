"""Line-oriented scanner for plain text and Markdown-like note content"""

import logging

from noteblocks.core.detect import classify, is_fence
from noteblocks.core.models import Block, BlockType
from noteblocks.core.sequence import BlockEmitter


logger = logging.getLogger(__name__)


def _split_lines(text: str) -> list[str]:
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def scan_lines(text: str) -> list[Block]:
    """Scan text into blocks (pre-merge) with a Normal/InFence state machine.

    Fenced lines are buffered verbatim and emitted as one code block; an
    unclosed fence is flushed at end of input.
    """
    emitter = BlockEmitter()
    in_fence = False
    buffer: list[str] = []

    for line in _split_lines(text):
        if is_fence(line):
            if in_fence:
                emitter.emit(Block(type=BlockType.code, content='\n'.join(buffer)))
                buffer = []
            in_fence = not in_fence
            continue

        if in_fence:
            buffer.append(line)
            continue

        block = classify(line)
        if block is not None:
            emitter.emit(block)

    if in_fence:
        logger.debug("Unclosed code fence; flushing %d buffered line(s)", len(buffer))
        emitter.emit(Block(type=BlockType.code, content='\n'.join(buffer)))

    return emitter.blocks

"""Post-pass over scanner/walker output: drop empties and adjacent duplicates"""

from noteblocks.core.models import Block, BlockType


def merge(blocks: list[Block]) -> list[Block]:
    """Return a new sequence without empty blocks (dividers excepted) or
    blocks repeating the previously retained block's (type, content)."""
    merged: list[Block] = []
    for block in blocks:
        if not block.content and block.type != BlockType.divider:
            continue
        if merged and merged[-1].same_as(block):
            continue
        merged.append(block)
    return merged

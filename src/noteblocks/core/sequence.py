"""Per-call block emission state: sequence ids and the running list counter"""

from noteblocks.core.models import Block, BlockType


class BlockEmitter:
    """Collects blocks in parse order for a single scan or walk.

    Holds the only mutable state of a normalization call, so every call gets
    its own instance and the engine stays reentrant.
    """

    def __init__(self, prefix: str = "block"):
        self.prefix = prefix
        self.blocks: list[Block] = []
        self.numbered = 0
        self._next_id = 0

    def _stamp(self, block: Block, **update) -> Block:
        update["id"] = f"{self.prefix}-{self._next_id}"
        self._next_id += 1
        stamped = block.model_copy(update=update)
        self.blocks.append(stamped)
        return stamped

    def reset_counter(self) -> None:
        self.numbered = 0

    def emit(self, block: Block) -> Block:
        """Append a detected block, renumbering consecutive numbered items."""
        if block.type == BlockType.numbered:
            self.numbered += 1
            return self._stamp(block, number=self.numbered)
        self.numbered = 0
        return self._stamp(block)

    def emit_fixed(self, block: Block) -> Block:
        """Append a block whose fields are already final (list items, code)."""
        return self._stamp(block)
